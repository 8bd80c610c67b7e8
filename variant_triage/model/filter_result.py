"""
Filter Results

Pass/fail outcomes attached to variants and genes by analysis steps.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class FilterType(Enum):
    """Identity of the filter that produced a result."""

    FAILED_VARIANT_FILTER = "failed_variant_filter"
    INTERVAL_FILTER = "interval_filter"
    GENE_SYMBOL_FILTER = "gene_symbol_filter"
    VARIANT_EFFECT_FILTER = "variant_effect_filter"
    QUALITY_FILTER = "quality_filter"
    KNOWN_VARIANT_FILTER = "known_variant_filter"
    FREQUENCY_FILTER = "frequency_filter"
    PATHOGENICITY_FILTER = "pathogenicity_filter"
    REGULATORY_FEATURE_FILTER = "regulatory_feature_filter"
    INHERITANCE_FILTER = "inheritance_filter"
    PRIORITY_SCORE_FILTER = "priority_score_filter"


class FilterStatus(Enum):
    """Outcome of a filter."""

    PASS = "PASS"
    FAIL = "FAIL"


@dataclass(frozen=True)
class FilterResult:
    """
    Immutable outcome of one filter on one variant or gene.

    Attributes:
        filter_type: The filter that produced the result
        status: PASS or FAIL
        score: Numeric score reported alongside the outcome
        message: Diagnostic text (set for contained evaluation errors)
    """

    filter_type: FilterType
    status: FilterStatus
    score: float = 1.0
    message: str = ""

    @classmethod
    def pass_(cls, filter_type: FilterType, score: float = 1.0) -> "FilterResult":
        return cls(filter_type=filter_type, status=FilterStatus.PASS, score=score)

    @classmethod
    def fail(
        cls, filter_type: FilterType, score: float = 0.0, message: str = ""
    ) -> "FilterResult":
        return cls(
            filter_type=filter_type,
            status=FilterStatus.FAIL,
            score=score,
            message=message,
        )

    @property
    def passed(self) -> bool:
        return self.status == FilterStatus.PASS

    @property
    def failed(self) -> bool:
        return self.status == FilterStatus.FAIL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "filter_type": self.filter_type.value,
            "status": self.status.value,
            "score": self.score,
            "message": self.message,
        }
