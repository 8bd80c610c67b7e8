"""
Variant Filters

Variant-level filters. Boolean filters (interval, gene panel, effect,
quality) are cheap; frequency, known-variant and pathogenicity filters
consult an injected data provider and are best declared after them.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional
import logging
import re

from ..errors import PerItemEvaluationError
from ..model import (
    FilterResult,
    FilterType,
    FrequencyData,
    FrequencySource,
    PathogenicityData,
    PathogenicitySource,
    VariantEffect,
    VariantEvaluation,
    normalise_chromosome,
)
from ..model.variant_effect import NON_REGULATORY_NON_CODING_EFFECTS
from ..providers import FrequencyDataProvider, PathogenicityDataProvider
from .base import VariantFilter

logger = logging.getLogger(__name__)

# VCF FILTER values meaning the caller raised no flags
PASSING_VCF_FILTER_STATUSES = frozenset({"PASS", ".", ""})

DEFAULT_PATHOGENICITY_THRESHOLD = 0.5

_INTERVAL_PATTERN = re.compile(r"^\s*([^:\s]+):([\d,]+)-([\d,]+)\s*$")


@dataclass(frozen=True)
class GeneticInterval:
    """An inclusive genomic region."""

    chromosome: str
    start: int
    end: int

    def __post_init__(self):
        object.__setattr__(self, "chromosome", normalise_chromosome(self.chromosome))
        if self.start > self.end:
            raise ValueError(
                f"Interval start {self.start} is after end {self.end}"
            )

    @classmethod
    def parse(cls, value: str) -> "GeneticInterval":
        """
        Parse a region string such as "chr10:122892600-122892700".

        Raises:
            ValueError: If the string is not a valid region
        """
        match = _INTERVAL_PATTERN.match(str(value))
        if match is None:
            raise ValueError(
                f"Invalid genetic interval {value!r}, expected e.g. 'chr10:122892600-122892700'"
            )
        chrom, start, end = match.groups()
        return cls(chrom, int(start.replace(",", "")), int(end.replace(",", "")))

    def contains(self, chromosome: str, position: int) -> bool:
        return (
            normalise_chromosome(chromosome) == self.chromosome
            and self.start <= position <= self.end
        )

    def __str__(self) -> str:
        return f"{self.chromosome}:{self.start}-{self.end}"


class FailedVariantFilter(VariantFilter):
    """Removes variants the variant caller did not mark as PASS."""

    kind = "failedVariantFilter"
    filter_type = FilterType.FAILED_VARIANT_FILTER

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        status = (variant.vcf_filter_status or "").strip()
        if status.upper() in PASSING_VCF_FILTER_STATUSES:
            return self.pass_result()
        return self.fail_result()


class IntervalFilter(VariantFilter):
    """Keeps variants inside a genomic region."""

    kind = "intervalFilter"
    filter_type = FilterType.INTERVAL_FILTER

    def __init__(self, interval: GeneticInterval):
        self.interval = interval

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        if self.interval.contains(variant.chromosome, variant.position):
            return self.pass_result()
        return self.fail_result()

    def __repr__(self) -> str:
        return f"IntervalFilter(interval={self.interval})"


class GeneSymbolFilter(VariantFilter):
    """Keeps variants assigned to one of a panel of genes."""

    kind = "genePanelFilter"
    filter_type = FilterType.GENE_SYMBOL_FILTER

    def __init__(self, gene_symbols: Iterable[str]):
        self.gene_symbols = frozenset(gene_symbols)

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        if variant.gene_symbol in self.gene_symbols:
            return self.pass_result()
        return self.fail_result()

    def __repr__(self) -> str:
        return f"GeneSymbolFilter(gene_symbols={sorted(self.gene_symbols)})"


class VariantEffectFilter(VariantFilter):
    """Removes variants whose effect is in the given set."""

    kind = "variantEffectFilter"
    filter_type = FilterType.VARIANT_EFFECT_FILTER

    def __init__(self, off_target_effects: Iterable[VariantEffect]):
        self.off_target_effects = frozenset(off_target_effects)

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        if variant.variant_effect in self.off_target_effects:
            return self.fail_result()
        return self.pass_result()

    def __repr__(self) -> str:
        names = sorted(e.name for e in self.off_target_effects)
        return f"VariantEffectFilter(off_target_effects={names})"


class QualityFilter(VariantFilter):
    """Keeps variants with a PHRED quality at or above a cutoff."""

    kind = "qualityFilter"
    filter_type = FilterType.QUALITY_FILTER

    def __init__(self, min_quality: float):
        self.min_quality = float(min_quality)

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        if variant.quality is None:
            raise PerItemEvaluationError(f"No quality score for {variant}", item=variant)
        if variant.quality >= self.min_quality:
            return self.pass_result()
        return self.fail_result()

    def __repr__(self) -> str:
        return f"QualityFilter(min_quality={self.min_quality})"


class RegulatoryFeatureFilter(VariantFilter):
    """Removes intergenic and upstream variants outside regulatory regions."""

    kind = "regulatoryFeatureFilter"
    filter_type = FilterType.REGULATORY_FEATURE_FILTER

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        if variant.variant_effect in NON_REGULATORY_NON_CODING_EFFECTS:
            return self.fail_result()
        return self.pass_result()


# =============================================================================
# Data provider filters
# =============================================================================

class KnownVariantFilter(VariantFilter):
    """Removes variants already represented in a frequency database."""

    kind = "knownVariantFilter"
    filter_type = FilterType.KNOWN_VARIANT_FILTER

    def __init__(
        self,
        provider: FrequencyDataProvider,
        sources: Iterable[FrequencySource],
    ):
        self.provider = provider
        self.sources: FrozenSet[FrequencySource] = frozenset(sources)

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        data = _frequency_data(self.provider, variant, self.sources)
        if data.is_represented_in_database():
            return self.fail_result()
        return self.pass_result()

    def __repr__(self) -> str:
        return f"KnownVariantFilter(sources={sorted(s.name for s in self.sources)})"


class FrequencyFilter(VariantFilter):
    """Keeps variants whose highest population frequency is at most a cutoff."""

    kind = "frequencyFilter"
    filter_type = FilterType.FREQUENCY_FILTER

    def __init__(
        self,
        provider: FrequencyDataProvider,
        sources: Iterable[FrequencySource],
        max_frequency: float,
    ):
        self.provider = provider
        self.sources: FrozenSet[FrequencySource] = frozenset(sources)
        self.max_frequency = float(max_frequency)

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        data = _frequency_data(self.provider, variant, self.sources)
        score = data.score()
        if data.max_frequency <= self.max_frequency:
            return self.pass_result(score)
        return self.fail_result(score)

    def __repr__(self) -> str:
        return (
            f"FrequencyFilter(max_frequency={self.max_frequency}, "
            f"sources={sorted(s.name for s in self.sources)})"
        )


class PathogenicityFilter(VariantFilter):
    """
    Keeps variants predicted to be pathogenic.

    The score is the predictor score for missense variants when one is
    available, otherwise the larger of the effect's default score and any
    predictor score. With keep_non_pathogenic every variant passes but is
    still scored.
    """

    kind = "pathogenicityFilter"
    filter_type = FilterType.PATHOGENICITY_FILTER

    def __init__(
        self,
        provider: PathogenicityDataProvider,
        sources: Iterable[PathogenicitySource],
        keep_non_pathogenic: bool,
        threshold: float = DEFAULT_PATHOGENICITY_THRESHOLD,
    ):
        self.provider = provider
        self.sources: FrozenSet[PathogenicitySource] = frozenset(sources)
        self.keep_non_pathogenic = bool(keep_non_pathogenic)
        self.threshold = threshold

    def score(self, variant: VariantEvaluation) -> float:
        data = self.provider.get_pathogenicity_data(variant, self.sources)
        if data is None:
            data = PathogenicityData()
        predicted = data.restricted_to(self.sources).most_pathogenic_score()

        default = variant.variant_effect.default_pathogenicity
        if variant.variant_effect == VariantEffect.MISSENSE_VARIANT and predicted is not None:
            return predicted
        return max(default, predicted or 0.0)

    def evaluate(self, variant: VariantEvaluation) -> FilterResult:
        score = self.score(variant)
        if self.keep_non_pathogenic or score >= self.threshold:
            return self.pass_result(score)
        return self.fail_result(score)

    def __repr__(self) -> str:
        return (
            f"PathogenicityFilter(keep_non_pathogenic={self.keep_non_pathogenic}, "
            f"sources={sorted(s.name for s in self.sources)})"
        )


def _frequency_data(
    provider: FrequencyDataProvider,
    variant: VariantEvaluation,
    sources: FrozenSet[FrequencySource],
) -> FrequencyData:
    data: Optional[FrequencyData] = provider.get_frequency_data(variant, sources)
    if data is None:
        return FrequencyData()
    return data.restricted_to(sources)
