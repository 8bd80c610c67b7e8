"""
Genes

A gene owns its variant evaluations and accumulates gene-level filter
results, prioritiser scores and inheritance findings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple
import threading

from .filter_result import FilterResult
from .modes import ModeOfInheritance
from .priority import PriorityType
from .variant import VariantEvaluation

VariantPair = Tuple[VariantEvaluation, VariantEvaluation]


@dataclass(eq=False)
class Gene:
    """
    A gene and its variants.

    Attributes:
        symbol: HGNC symbol
        gene_id: Stable numeric identifier (Entrez)
        variant_evaluations: Variants assigned to this gene, in input order
        filter_results: Gene-level results keyed by step identity
        priority_scores: Prioritiser type -> score
        compatible_inheritance_modes: Modes the passing variants segregate with
        comp_het_pairs: Mode -> compound heterozygous variant pairs
    """

    symbol: str
    gene_id: int
    variant_evaluations: List[VariantEvaluation] = field(default_factory=list)
    filter_results: Dict[str, FilterResult] = field(default_factory=dict, repr=False)
    priority_scores: Dict[PriorityType, float] = field(default_factory=dict, repr=False)
    compatible_inheritance_modes: Set[ModeOfInheritance] = field(
        default_factory=set, repr=False
    )
    comp_het_pairs: Dict[ModeOfInheritance, List[VariantPair]] = field(
        default_factory=dict, repr=False
    )

    def __post_init__(self):
        self._lock = threading.Lock()

    def add_variant(self, variant: VariantEvaluation) -> None:
        self.variant_evaluations.append(variant)

    @property
    def n_variants(self) -> int:
        return len(self.variant_evaluations)

    def passed_variant_evaluations(self) -> List[VariantEvaluation]:
        """Variants with no FAIL result, in their original order."""
        return [v for v in self.variant_evaluations if v.passed_filters()]

    def has_passing_variant(self) -> bool:
        return any(v.passed_filters() for v in self.variant_evaluations)

    # ==================== Filter results ====================

    def add_filter_result(self, step_id: str, result: FilterResult) -> None:
        """
        Append a gene-level result.

        Raises:
            ValueError: If a result for this step is already recorded
        """
        with self._lock:
            if step_id in self.filter_results:
                raise ValueError(f"{self.symbol} already has a result for step {step_id!r}")
            self.filter_results[step_id] = result

    def passed_gene_filters(self) -> bool:
        return not any(r.failed for r in self.filter_results.values())

    def passed_filters(self) -> bool:
        """No gene-level FAIL and at least one variant still passing."""
        return self.passed_gene_filters() and self.has_passing_variant()

    # ==================== Priority scores ====================

    def add_priority_score(self, priority_type: PriorityType, score: float) -> None:
        with self._lock:
            self.priority_scores[priority_type] = float(score)

    def get_priority_score(self, priority_type: PriorityType) -> Optional[float]:
        return self.priority_scores.get(priority_type)

    @property
    def priority_score(self) -> float:
        """Product of all stored prioritiser scores (1.0 when none)."""
        score = 1.0
        for value in self.priority_scores.values():
            score *= value
        return score

    # ==================== Inheritance ====================

    def set_inheritance_findings(
        self,
        compatible_modes: Set[ModeOfInheritance],
        comp_het_pairs: Dict[ModeOfInheritance, List[VariantPair]],
    ) -> None:
        with self._lock:
            self.compatible_inheritance_modes = set(compatible_modes)
            self.comp_het_pairs = {
                mode: list(pairs) for mode, pairs in comp_het_pairs.items()
            }

    def is_compatible_with(self, mode: ModeOfInheritance) -> bool:
        return mode in self.compatible_inheritance_modes

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "symbol": self.symbol,
            "gene_id": self.gene_id,
            "passed": self.passed_filters(),
            "n_variants": self.n_variants,
            "priority_scores": {t.name: s for t, s in self.priority_scores.items()},
            "compatible_inheritance_modes": sorted(
                m.name for m in self.compatible_inheritance_modes
            ),
            "filter_results": {k: r.to_dict() for k, r in self.filter_results.items()},
        }

    def __str__(self) -> str:
        return f"{self.symbol} ({self.gene_id})"
