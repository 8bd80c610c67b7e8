"""
Variant Evaluations

A called variant together with everything the analysis learns about it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple
import threading

from .filter_result import FilterResult, FilterType
from .genotype import Genotype
from .modes import ModeOfInheritance
from .variant_effect import VariantEffect

_CHROMOSOME_ALIASES = {
    "M": "MT",
    "23": "X",
    "24": "Y",
    "25": "MT",
}


def normalise_chromosome(chrom: Any) -> str:
    """Normalise a contig name: "chr1" -> "1", "chrM" -> "MT", 23 -> "X"."""
    name = str(chrom).strip()
    if name.lower().startswith("chr"):
        name = name[3:]
    name = name.upper()
    return _CHROMOSOME_ALIASES.get(name, name)


@dataclass(eq=False)
class VariantEvaluation:
    """
    A variant under evaluation, with the per-step results attached to it.

    The filter result log is append-only and keyed by step identity; its
    insertion order is the evaluation order.
    """

    chromosome: str
    position: int
    ref: str
    alt: str
    gene_symbol: str = ""
    gene_id: Optional[int] = None
    quality: Optional[float] = None
    variant_effect: VariantEffect = VariantEffect.SEQUENCE_VARIANT
    vcf_filter_status: str = "PASS"
    genotypes: Dict[str, Genotype] = field(default_factory=dict)
    info: Dict[str, Any] = field(default_factory=dict)

    filter_results: Dict[str, FilterResult] = field(default_factory=dict, repr=False)
    compatible_inheritance_modes: Set[ModeOfInheritance] = field(
        default_factory=set, repr=False
    )

    def __post_init__(self):
        self.chromosome = normalise_chromosome(self.chromosome)
        self._lock = threading.Lock()

    @property
    def key(self) -> Tuple[str, int, str, str]:
        return (self.chromosome, self.position, self.ref, self.alt)

    @property
    def is_x_chromosomal(self) -> bool:
        return self.chromosome == "X"

    @property
    def is_mitochondrial(self) -> bool:
        return self.chromosome == "MT"

    def genotype(self, sample_id: str) -> Optional[Genotype]:
        """Genotype of an individual, or None when not called."""
        gt = self.genotypes.get(sample_id)
        if gt is None or not gt.is_called:
            return None
        return gt

    # ==================== Filter results ====================

    def add_filter_result(self, step_id: str, result: FilterResult) -> None:
        """
        Append the result of a step.

        Raises:
            ValueError: If a result for this step is already recorded
        """
        with self._lock:
            if step_id in self.filter_results:
                raise ValueError(
                    f"{self} already has a result for step {step_id!r}"
                )
            self.filter_results[step_id] = result

    def passed_filters(self) -> bool:
        """True until any step records a FAIL."""
        return not any(r.failed for r in self.filter_results.values())

    def passed_filter(self, filter_type: FilterType) -> bool:
        """True when every result of the given filter type passed."""
        return all(
            r.passed for r in self.filter_results.values()
            if r.filter_type == filter_type
        )

    def failed_filter_types(self) -> List[FilterType]:
        return [r.filter_type for r in self.filter_results.values() if r.failed]

    def get_filter_result(self, step_id: str) -> Optional[FilterResult]:
        return self.filter_results.get(step_id)

    def set_compatible_inheritance_modes(self, modes: Set[ModeOfInheritance]) -> None:
        with self._lock:
            self.compatible_inheritance_modes = set(modes)

    def is_compatible_with(self, mode: ModeOfInheritance) -> bool:
        return mode in self.compatible_inheritance_modes

    def __str__(self) -> str:
        return (
            f"{self.chromosome}-{self.position}-{self.ref}-{self.alt}"
            f" {self.gene_symbol or '.'}"
        )
