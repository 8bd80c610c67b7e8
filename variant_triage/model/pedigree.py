"""
Pedigree

Family structure and affection status of the sequenced individuals.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..errors import ConfigurationError

_UNKNOWN_PARENT = ("", "0", None)


class Sex(Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    UNKNOWN = "UNKNOWN"


class AffectionStatus(Enum):
    AFFECTED = "AFFECTED"
    UNAFFECTED = "UNAFFECTED"
    UNKNOWN = "UNKNOWN"


# PED file codes alongside the enum names
_SEX_CODES = {"1": Sex.MALE, "2": Sex.FEMALE, "0": Sex.UNKNOWN}
_AFFECTION_CODES = {
    "2": AffectionStatus.AFFECTED,
    "1": AffectionStatus.UNAFFECTED,
    "0": AffectionStatus.UNKNOWN,
    "-9": AffectionStatus.UNKNOWN,
}


def _parse_sex(value: Any) -> Sex:
    token = str(value if value is not None else "UNKNOWN").strip().upper()
    if token in _SEX_CODES:
        return _SEX_CODES[token]
    try:
        return Sex[token]
    except KeyError:
        raise ConfigurationError(f"Unknown sex: {value!r}", option="sex") from None


def _parse_affection(value: Any) -> AffectionStatus:
    token = str(value if value is not None else "UNKNOWN").strip().upper()
    if token in _AFFECTION_CODES:
        return _AFFECTION_CODES[token]
    try:
        return AffectionStatus[token]
    except KeyError:
        raise ConfigurationError(
            f"Unknown affection status: {value!r}", option="affectionStatus"
        ) from None


@dataclass(frozen=True)
class Individual:
    """One person in the pedigree. Unknown parents are None."""

    id: str
    family_id: str = ""
    paternal_id: Optional[str] = None
    maternal_id: Optional[str] = None
    sex: Sex = Sex.UNKNOWN
    affection_status: AffectionStatus = AffectionStatus.UNKNOWN

    @property
    def is_affected(self) -> bool:
        return self.affection_status == AffectionStatus.AFFECTED

    @property
    def is_unaffected(self) -> bool:
        return self.affection_status == AffectionStatus.UNAFFECTED

    @property
    def is_male(self) -> bool:
        return self.sex == Sex.MALE

    @property
    def is_female(self) -> bool:
        return self.sex == Sex.FEMALE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Individual":
        """Create from a record using the analysis keys (id, familyId, ...)."""
        individual_id = data.get("id")
        if individual_id in _UNKNOWN_PARENT:
            raise ConfigurationError("Pedigree individual requires an id", option="id")

        def parent(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value in _UNKNOWN_PARENT else str(value)

        return cls(
            id=str(individual_id),
            family_id=str(data.get("familyId", "") or ""),
            paternal_id=parent("paternalId"),
            maternal_id=parent("maternalId"),
            sex=_parse_sex(data.get("sex")),
            affection_status=_parse_affection(data.get("affectionStatus")),
        )


class Pedigree:
    """
    A set of individuals forming a forest of parent -> child edges.

    Parents referenced by id but not present as individuals are treated as
    unknown.
    """

    def __init__(self, individuals: Iterable[Individual] = ()):
        self._individuals: Dict[str, Individual] = {}
        for individual in individuals:
            if individual.id in self._individuals:
                raise ConfigurationError(
                    f"Duplicate individual in pedigree: {individual.id}", option="pedigree"
                )
            if individual.id in (individual.paternal_id, individual.maternal_id):
                raise ConfigurationError(
                    f"Individual {individual.id} is listed as their own parent",
                    option="pedigree",
                )
            self._individuals[individual.id] = individual

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "Pedigree":
        return cls(Individual.from_dict(r) for r in records or [])

    @classmethod
    def empty(cls) -> "Pedigree":
        return cls()

    def __len__(self) -> int:
        return len(self._individuals)

    def __iter__(self):
        return iter(self._individuals.values())

    def __contains__(self, individual_id: str) -> bool:
        return individual_id in self._individuals

    @property
    def individuals(self) -> List[Individual]:
        return list(self._individuals.values())

    def get(self, individual_id: Optional[str]) -> Optional[Individual]:
        if individual_id is None:
            return None
        return self._individuals.get(individual_id)

    def father_of(self, individual: Individual) -> Optional[Individual]:
        return self.get(individual.paternal_id)

    def mother_of(self, individual: Individual) -> Optional[Individual]:
        return self.get(individual.maternal_id)

    def parents_of(self, individual: Individual) -> List[Individual]:
        """Parents present in the pedigree (0, 1 or 2)."""
        return [
            p for p in (self.father_of(individual), self.mother_of(individual))
            if p is not None
        ]

    def children_of(self, individual: Individual) -> List[Individual]:
        return [
            i for i in self._individuals.values()
            if individual.id in (i.paternal_id, i.maternal_id)
        ]

    def is_parent(self, individual_id: str) -> bool:
        return any(
            individual_id in (i.paternal_id, i.maternal_id)
            for i in self._individuals.values()
        )

    def affected(self) -> List[Individual]:
        return [i for i in self._individuals.values() if i.is_affected]

    def unaffected(self) -> List[Individual]:
        return [i for i in self._individuals.values() if i.is_unaffected]

    def __repr__(self) -> str:
        return f"Pedigree(individuals={list(self._individuals)})"
