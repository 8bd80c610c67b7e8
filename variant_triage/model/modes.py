"""
Modes of Inheritance

Mendelian transmission patterns a candidate gene can be tested against.
"""

from enum import Enum
from typing import FrozenSet, Iterable, Optional, Union

from ..errors import ConfigurationError


class ModeOfInheritance(Enum):
    """Mendelian modes of inheritance."""

    AUTOSOMAL_DOMINANT = "AUTOSOMAL_DOMINANT"
    AUTOSOMAL_RECESSIVE = "AUTOSOMAL_RECESSIVE"
    X_DOMINANT = "X_DOMINANT"
    X_RECESSIVE = "X_RECESSIVE"
    MITOCHONDRIAL = "MITOCHONDRIAL"
    ANY = "ANY"

    @property
    def is_recessive(self) -> bool:
        return self in RECESSIVE_MODES


RECESSIVE_MODES = frozenset({
    ModeOfInheritance.AUTOSOMAL_RECESSIVE,
    ModeOfInheritance.X_RECESSIVE,
})

# Tags meaning "no restriction" when given on their own
NO_MODE_SENTINELS = ("ANY", "UNDEFINED", "UNINITIALIZED")


def parse_inheritance_modes(
    value: Optional[Union[str, Iterable[str]]],
) -> FrozenSet[ModeOfInheritance]:
    """
    Parse declared inheritance-mode tags into a set of modes.

    A single string is accepted as a one-element list. An empty declaration
    or one of the sentinels ANY/UNDEFINED/UNINITIALIZED on its own yields an
    empty set; ANY is dropped from longer lists.

    Raises:
        ConfigurationError: If a tag is not a known mode
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    tags = [str(tag).strip().upper() for tag in value]

    if not tags or (len(tags) == 1 and tags[0] in NO_MODE_SENTINELS):
        return frozenset()

    modes = set()
    for tag in tags:
        try:
            mode = ModeOfInheritance[tag]
        except KeyError:
            valid = ", ".join(m.name for m in ModeOfInheritance)
            raise ConfigurationError(
                f"'{tag}' is not a valid mode of inheritance. Use one of: {valid}",
                option="inheritanceModes",
            ) from None
        if mode != ModeOfInheritance.ANY:
            modes.add(mode)
    return frozenset(modes)
