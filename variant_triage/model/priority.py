"""Prioritiser identities."""

from enum import Enum

from ..errors import ConfigurationError


class PriorityType(Enum):
    """Types of gene prioritiser."""

    OMIM_PRIORITY = "OMIM_PRIORITY"
    HIPHIVE_PRIORITY = "HIPHIVE_PRIORITY"
    PHIVE_PRIORITY = "PHIVE_PRIORITY"
    PHENIX_PRIORITY = "PHENIX_PRIORITY"
    EXOMEWALKER_PRIORITY = "EXOMEWALKER_PRIORITY"

    @classmethod
    def from_name(cls, name: str) -> "PriorityType":
        """Look up a priority type by name, raising ConfigurationError if unknown."""
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            valid = ", ".join(p.name for p in cls)
            raise ConfigurationError(
                f"'{name}' is not a valid priority type. Use one of: {valid}",
                option="priorityType",
            ) from None
