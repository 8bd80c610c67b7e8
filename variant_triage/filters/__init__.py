"""
Filters

Variant-level and gene-level filters applied by the analysis runner.
"""

from .base import Filter, GeneFilter, VariantFilter
from .gene_filters import InheritanceFilter, PriorityScoreFilter
from .variant_filters import (
    FailedVariantFilter,
    FrequencyFilter,
    GeneSymbolFilter,
    GeneticInterval,
    IntervalFilter,
    KnownVariantFilter,
    PathogenicityFilter,
    QualityFilter,
    RegulatoryFeatureFilter,
    VariantEffectFilter,
)

__all__ = [
    "Filter",
    "GeneFilter",
    "VariantFilter",
    # Variant filters
    "FailedVariantFilter",
    "FrequencyFilter",
    "GeneSymbolFilter",
    "GeneticInterval",
    "IntervalFilter",
    "KnownVariantFilter",
    "PathogenicityFilter",
    "QualityFilter",
    "RegulatoryFeatureFilter",
    "VariantEffectFilter",
    # Gene filters
    "InheritanceFilter",
    "PriorityScoreFilter",
]
