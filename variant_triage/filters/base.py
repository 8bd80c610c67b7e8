"""
Filter Base Classes

Common interface for variant-level and gene-level filters.

Filters are pure decision units: they read a variant or gene plus any
injected data provider and return a FilterResult. They never mutate what
they are given; the runner records the result.
"""

from abc import ABC, abstractmethod

from ..model import FilterResult, FilterType, Gene, VariantEvaluation


class Filter(ABC):
    """
    Base class for all filters.

    Attributes:
        kind: Step kind as declared in an analysis (e.g. "qualityFilter")
        filter_type: Identity recorded on every result
    """

    kind: str = ""
    filter_type: FilterType

    def pass_result(self, score: float = 1.0) -> FilterResult:
        return FilterResult.pass_(self.filter_type, score)

    def fail_result(self, score: float = 0.0, message: str = "") -> FilterResult:
        return FilterResult.fail(self.filter_type, score, message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class VariantFilter(Filter):
    """A filter evaluated once per variant."""

    @abstractmethod
    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        """
        Decide whether a variant passes.

        Raises:
            PerItemEvaluationError: If the variant lacks data this filter needs
            DataProviderError: If an injected provider fails
        """


class GeneFilter(Filter):
    """A filter evaluated once per gene, over its currently passing variants."""

    @abstractmethod
    def evaluate(self, gene: Gene) -> FilterResult:
        """Decide whether a gene passes."""
