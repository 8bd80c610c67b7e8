"""
Gene Filters

Gene-level filters. They run after every variant filter has been applied,
so they see each gene's final set of passing variants.
"""

from typing import Iterable
import logging

from ..inheritance import InheritanceCompatibility, InheritanceModeChecker
from ..model import FilterResult, FilterType, Gene, ModeOfInheritance, Pedigree, PriorityType
from .base import GeneFilter

logger = logging.getLogger(__name__)


class InheritanceFilter(GeneFilter):
    """
    Keeps genes whose passing variants are compatible with at least one of
    the requested modes of inheritance.

    check() returns the full findings (compatible modes, per-variant modes
    and compound heterozygous pairs) so the runner can record them;
    evaluate() reduces them to a gene-level result.
    """

    kind = "inheritanceFilter"
    filter_type = FilterType.INHERITANCE_FILTER

    def __init__(self, modes: Iterable[ModeOfInheritance], pedigree: Pedigree):
        self.modes = frozenset(modes)
        self.pedigree = pedigree
        self.checker = InheritanceModeChecker(pedigree)

    def check(self, gene: Gene) -> InheritanceCompatibility:
        return self.checker.check(gene.passed_variant_evaluations(), self.modes)

    def result_for(self, compatibility: InheritanceCompatibility) -> FilterResult:
        if compatibility.is_compatible:
            return self.pass_result()
        return self.fail_result()

    def evaluate(self, gene: Gene) -> FilterResult:
        return self.result_for(self.check(gene))

    def __repr__(self) -> str:
        return f"InheritanceFilter(modes={sorted(m.name for m in self.modes)})"


class PriorityScoreFilter(GeneFilter):
    """Keeps genes whose score from one prioritiser meets a minimum."""

    kind = "priorityScoreFilter"
    filter_type = FilterType.PRIORITY_SCORE_FILTER

    def __init__(self, priority_type: PriorityType, min_priority_score: float):
        self.priority_type = priority_type
        self.min_priority_score = float(min_priority_score)

    def evaluate(self, gene: Gene) -> FilterResult:
        score = gene.get_priority_score(self.priority_type)
        if score is None:
            return self.fail_result(
                message=f"No {self.priority_type.name} score for {gene}"
            )
        if score >= self.min_priority_score:
            return self.pass_result(score)
        return self.fail_result(score)

    def __repr__(self) -> str:
        return (
            f"PriorityScoreFilter(priority_type={self.priority_type.name}, "
            f"min_priority_score={self.min_priority_score})"
        )
