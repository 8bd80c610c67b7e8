"""
Analysis

The configuration root of a run: validated steps, execution mode,
inheritance modes and pedigree.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Tuple, Union

from ..errors import ConfigurationError
from ..filters import GeneFilter, VariantFilter
from ..model import (
    FrequencySource,
    ModeOfInheritance,
    PathogenicitySource,
    Pedigree,
)
from ..prioritisers import Prioritiser
from .step_checker import validate_steps

AnalysisStep = Union[VariantFilter, GeneFilter, Prioritiser]


class AnalysisMode(Enum):
    """How the runner treats items that already failed a step."""

    FULL = "FULL"  # Every step evaluates every gene and variant
    PASS_ONLY = "PASS_ONLY"  # Steps only evaluate items still passing

    @classmethod
    def from_name(cls, name: Any) -> "AnalysisMode":
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ConfigurationError(
                f"'{name}' is not a valid analysis mode. Use FULL or PASS_ONLY",
                option="analysisMode",
            ) from None


def step_kind(step: AnalysisStep) -> str:
    return step.kind or type(step).__name__


def assign_step_ids(steps: Tuple[AnalysisStep, ...]) -> List[Tuple[str, AnalysisStep]]:
    """
    Stable identities for steps: the kind, with "#2", "#3"... appended to
    repeats in declared order.
    """
    seen: Counter = Counter()
    identified = []
    for step in steps:
        kind = step_kind(step)
        seen[kind] += 1
        step_id = kind if seen[kind] == 1 else f"{kind}#{seen[kind]}"
        identified.append((step_id, step))
    return identified


@dataclass(frozen=True)
class Analysis:
    """
    A validated analysis.

    Steps are validated on construction and cannot be changed afterwards.

    Attributes:
        steps: Steps in declared order
        analysis_mode: FULL or PASS_ONLY
        inheritance_modes: Modes the inheritance filter tests
        pedigree: Family of the sequenced individuals
        frequency_sources: Analysis-level default frequency sources
        pathogenicity_sources: Analysis-level default pathogenicity sources
        hpo_ids: Patient phenotype terms for phenotype prioritisers
    """

    steps: Tuple[AnalysisStep, ...] = ()
    analysis_mode: AnalysisMode = AnalysisMode.PASS_ONLY
    inheritance_modes: FrozenSet[ModeOfInheritance] = frozenset()
    pedigree: Pedigree = field(default_factory=Pedigree, compare=False)
    frequency_sources: FrozenSet[FrequencySource] = frozenset()
    pathogenicity_sources: FrozenSet[PathogenicitySource] = frozenset()
    hpo_ids: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "steps", validate_steps(tuple(self.steps)))
        object.__setattr__(self, "analysis_mode", AnalysisMode.from_name(self.analysis_mode))
        object.__setattr__(self, "inheritance_modes", frozenset(self.inheritance_modes))
        object.__setattr__(self, "hpo_ids", tuple(self.hpo_ids))

    @property
    def step_ids(self) -> List[str]:
        return [step_id for step_id, _ in assign_step_ids(self.steps)]

    def variant_filters(self) -> List[VariantFilter]:
        return [s for s in self.steps if isinstance(s, VariantFilter)]

    def gene_filters(self) -> List[GeneFilter]:
        return [s for s in self.steps if isinstance(s, GeneFilter)]

    def prioritisers(self) -> List[Prioritiser]:
        return [s for s in self.steps if isinstance(s, Prioritiser)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "steps": self.step_ids,
            "analysis_mode": self.analysis_mode.value,
            "inheritance_modes": sorted(m.name for m in self.inheritance_modes),
            "pedigree": [i.id for i in self.pedigree],
            "hpo_ids": list(self.hpo_ids),
        }
