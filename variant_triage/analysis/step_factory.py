"""
Analysis Step Factory

Builds typed analysis steps from their declared form: a step kind plus a
map of options, as produced by an external analysis parser. Every required
option is checked here, so a malformed analysis fails before any variant is
touched. Unknown option keys are ignored.

Example:
    >>> factory = AnalysisStepFactory(DataProviders(frequency=my_frequencies))
    >>> analysis = factory.build_analysis({
    ...     "analysisMode": "PASS_ONLY",
    ...     "frequencySources": ["GNOMAD_E_NFE"],
    ...     "steps": [
    ...         {"intervalFilter": {"interval": "chr10:122892600-122892700"}},
    ...         {"frequencyFilter": {"maxFrequency": 1.0}},
    ...     ],
    ... })
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple
import logging

from ..errors import ConfigurationError
from ..filters import (
    FailedVariantFilter,
    FrequencyFilter,
    GeneSymbolFilter,
    GeneticInterval,
    InheritanceFilter,
    IntervalFilter,
    KnownVariantFilter,
    PathogenicityFilter,
    PriorityScoreFilter,
    QualityFilter,
    RegulatoryFeatureFilter,
    VariantEffectFilter,
)
from ..model import (
    FrequencySource,
    ModeOfInheritance,
    PathogenicitySource,
    Pedigree,
    PriorityType,
    parse_frequency_sources,
    parse_inheritance_modes,
    parse_pathogenicity_sources,
    parse_variant_effects,
)
from ..prioritisers import (
    ExomeWalkerPrioritiser,
    HiPhiveOptions,
    HiPhivePrioritiser,
    OmimPrioritiser,
    PhenixPrioritiser,
    PhivePrioritiser,
)
from ..providers import DataProviders
from .analysis import Analysis, AnalysisMode, AnalysisStep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepDeclaration:
    """A step as declared: its kind and its options."""

    kind: str
    options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Any) -> "StepDeclaration":
        """
        Accept a StepDeclaration, a single-entry {kind: options} mapping, or
        a {"kind": ..., "options": ...} mapping.
        """
        if isinstance(value, StepDeclaration):
            return value
        if isinstance(value, Mapping):
            if "kind" in value:
                return cls(str(value["kind"]), value.get("options") or {})
            if len(value) == 1:
                kind, options = next(iter(value.items()))
                if options is not None and not isinstance(options, Mapping):
                    raise ConfigurationError(
                        f"Options of step '{kind}' must be a mapping", step=str(kind)
                    )
                return cls(str(kind), options or {})
        raise ConfigurationError(f"Cannot read step declaration: {value!r}")


@dataclass(frozen=True)
class _AnalysisContext:
    """Analysis-level settings steps may draw on."""

    inheritance_modes: FrozenSet[ModeOfInheritance] = frozenset()
    pedigree: Pedigree = field(default_factory=Pedigree)
    frequency_sources: FrozenSet[FrequencySource] = frozenset()
    pathogenicity_sources: FrozenSet[PathogenicitySource] = frozenset()
    hpo_ids: Tuple[str, ...] = ()


# =============================================================================
# Option helpers
# =============================================================================

def _require(options: Mapping[str, Any], key: str, kind: str) -> Any:
    value = options.get(key)
    if value is None or value == "" or value == []:
        raise ConfigurationError(f"Missing required option '{key}'", step=kind, option=key)
    return value


def _require_float(options: Mapping[str, Any], key: str, kind: str) -> float:
    value = _require(options, key, kind)
    if isinstance(value, bool):
        raise ConfigurationError(f"Option '{key}' must be a number, got {value!r}", step=kind, option=key)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Option '{key}' must be a number, got {value!r}", step=kind, option=key
        ) from None


def _require_bool(options: Mapping[str, Any], key: str, kind: str) -> bool:
    value = _require(options, key, kind)
    if isinstance(value, bool):
        return value
    token = str(value).strip().lower()
    if token in ("true", "yes", "1"):
        return True
    if token in ("false", "no", "0"):
        return False
    raise ConfigurationError(
        f"Option '{key}' must be true or false, got {value!r}", step=kind, option=key
    )


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v for v in (t.strip() for t in value.split(",")) if v]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def _require_list(options: Mapping[str, Any], key: str, kind: str) -> List[Any]:
    """A list option that must have at least one entry."""
    values = _as_list(options.get(key))
    if not values:
        raise ConfigurationError(f"Missing required option '{key}'", step=kind, option=key)
    return values


class AnalysisStepFactory:
    """
    Creates analysis steps and whole analyses from declared options.

    Args:
        providers: Data providers injected into the steps that need them
    """

    def __init__(self, providers: Optional[DataProviders] = None):
        self.providers = providers or DataProviders()
        self._builders: Dict[str, Callable[[Mapping[str, Any], _AnalysisContext], AnalysisStep]] = {
            "failedVariantFilter": self._failed_variant_filter,
            "intervalFilter": self._interval_filter,
            "genePanelFilter": self._gene_panel_filter,
            "variantEffectFilter": self._variant_effect_filter,
            "qualityFilter": self._quality_filter,
            "knownVariantFilter": self._known_variant_filter,
            "frequencyFilter": self._frequency_filter,
            "pathogenicityFilter": self._pathogenicity_filter,
            "regulatoryFeatureFilter": self._regulatory_feature_filter,
            "inheritanceFilter": self._inheritance_filter,
            "priorityScoreFilter": self._priority_score_filter,
            "omimPrioritiser": self._omim_prioritiser,
            "hiPhivePrioritiser": self._hiphive_prioritiser,
            "phivePrioritiser": self._phive_prioritiser,
            "phenixPrioritiser": self._phenix_prioritiser,
            "exomeWalkerPrioritiser": self._exome_walker_prioritiser,
        }

    @property
    def step_kinds(self) -> List[str]:
        return list(self._builders)

    def build_analysis(self, data: Mapping[str, Any]) -> Analysis:
        """
        Build a validated Analysis from its declared form.

        Args:
            data: Mapping with steps, analysisMode, inheritanceModes,
                pedigree, frequencySources, pathogenicitySources, hpoIds

        Returns:
            Analysis with validated steps

        Raises:
            ConfigurationError: On any invalid setting or step
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Analysis must be a mapping")

        modes_value = data.get("inheritanceModes", data.get("modeOfInheritance"))
        context = _AnalysisContext(
            inheritance_modes=parse_inheritance_modes(modes_value),
            pedigree=self._pedigree(data.get("pedigree")),
            frequency_sources=parse_frequency_sources(_as_list(data.get("frequencySources"))),
            pathogenicity_sources=parse_pathogenicity_sources(
                _as_list(data.get("pathogenicitySources"))
            ),
            hpo_ids=tuple(_as_list(data.get("hpoIds"))),
        )

        steps = self.make_steps(data.get("steps") or [], context)
        analysis = Analysis(
            steps=tuple(steps),
            analysis_mode=AnalysisMode.from_name(data.get("analysisMode", "PASS_ONLY")),
            inheritance_modes=context.inheritance_modes,
            pedigree=context.pedigree,
            frequency_sources=context.frequency_sources,
            pathogenicity_sources=context.pathogenicity_sources,
            hpo_ids=context.hpo_ids,
        )
        logger.info(
            f"Built {analysis.analysis_mode.value} analysis with {len(analysis.steps)} steps"
        )
        return analysis

    def make_steps(
        self,
        declarations: Iterable[Any],
        context: Optional[_AnalysisContext] = None,
    ) -> List[AnalysisStep]:
        context = context or _AnalysisContext()
        return [self.make_step(StepDeclaration.coerce(d), context) for d in declarations]

    def make_step(
        self,
        declaration: StepDeclaration,
        context: Optional[_AnalysisContext] = None,
    ) -> AnalysisStep:
        """
        Build one step.

        Raises:
            ConfigurationError: If the kind is unknown, a required option is
                missing or invalid, or a needed provider is not available
        """
        builder = self._builders.get(declaration.kind)
        if builder is None:
            raise ConfigurationError(
                f"Unknown step kind '{declaration.kind}'. Use one of: {', '.join(self.step_kinds)}",
                step=declaration.kind,
            )
        return builder(declaration.options or {}, context or _AnalysisContext())

    @staticmethod
    def _pedigree(records: Any) -> Pedigree:
        if records is None:
            return Pedigree()
        if isinstance(records, Pedigree):
            return records
        if isinstance(records, Mapping):
            records = records.get("individuals", [])
        return Pedigree.from_records(records)

    def _provider(self, name: str, kind: str):
        provider = getattr(self.providers, name)
        if provider is None:
            available = ", ".join(sorted(self.providers.available())) or "none"
            raise ConfigurationError(
                f"Step needs a {name} data provider but none is configured "
                f"(available: {available})",
                step=kind,
            )
        return provider

    def _frequency_sources(
        self, options: Mapping[str, Any], context: _AnalysisContext, kind: str
    ) -> FrozenSet[FrequencySource]:
        sources = parse_frequency_sources(_as_list(options.get("frequencySources")), step=kind)
        sources = sources or context.frequency_sources
        if not sources:
            raise ConfigurationError(
                "Missing required option 'frequencySources'", step=kind, option="frequencySources"
            )
        return sources

    def _pathogenicity_sources(
        self, options: Mapping[str, Any], context: _AnalysisContext, kind: str
    ) -> FrozenSet[PathogenicitySource]:
        sources = parse_pathogenicity_sources(
            _as_list(options.get("pathogenicitySources")), step=kind
        )
        sources = sources or context.pathogenicity_sources
        if not sources:
            raise ConfigurationError(
                "Missing required option 'pathogenicitySources'",
                step=kind,
                option="pathogenicitySources",
            )
        return sources

    # ==================== Variant filters ====================

    def _failed_variant_filter(self, options, context):
        return FailedVariantFilter()

    def _interval_filter(self, options, context):
        kind = "intervalFilter"
        value = _require(options, "interval", kind)
        try:
            return IntervalFilter(GeneticInterval.parse(value))
        except ValueError as e:
            raise ConfigurationError(str(e), step=kind, option="interval") from None

    def _gene_panel_filter(self, options, context):
        symbols = _require_list(options, "geneSymbols", "genePanelFilter")
        return GeneSymbolFilter(str(s) for s in symbols)

    def _variant_effect_filter(self, options, context):
        effects = _require_list(options, "remove", "variantEffectFilter")
        return VariantEffectFilter(parse_variant_effects(effects))

    def _quality_filter(self, options, context):
        return QualityFilter(_require_float(options, "minQuality", "qualityFilter"))

    def _known_variant_filter(self, options, context):
        kind = "knownVariantFilter"
        sources = self._frequency_sources(options, context, kind)
        return KnownVariantFilter(self._provider("frequency", kind), sources)

    def _frequency_filter(self, options, context):
        kind = "frequencyFilter"
        max_frequency = _require_float(options, "maxFrequency", kind)
        if not 0.0 <= max_frequency <= 100.0:
            raise ConfigurationError(
                f"maxFrequency must be a percentage between 0 and 100, got {max_frequency}",
                step=kind,
                option="maxFrequency",
            )
        sources = self._frequency_sources(options, context, kind)
        return FrequencyFilter(self._provider("frequency", kind), sources, max_frequency)

    def _pathogenicity_filter(self, options, context):
        kind = "pathogenicityFilter"
        keep = _require_bool(options, "keepNonPathogenic", kind)
        sources = self._pathogenicity_sources(options, context, kind)
        return PathogenicityFilter(self._provider("pathogenicity", kind), sources, keep)

    def _regulatory_feature_filter(self, options, context):
        return RegulatoryFeatureFilter()

    # ==================== Gene filters ====================

    def _inheritance_filter(self, options, context):
        # An empty mode set is dropped by the step checker
        return InheritanceFilter(context.inheritance_modes, context.pedigree)

    def _priority_score_filter(self, options, context):
        kind = "priorityScoreFilter"
        priority_type = PriorityType.from_name(_require(options, "priorityType", kind))
        min_score = _require_float(options, "minPriorityScore", kind)
        return PriorityScoreFilter(priority_type, min_score)

    # ==================== Prioritisers ====================

    def _omim_prioritiser(self, options, context):
        return OmimPrioritiser(self._provider("disease", "omimPrioritiser"))

    def _hiphive_prioritiser(self, options, context):
        kind = "hiPhivePrioritiser"
        hiphive_options = HiPhiveOptions(
            disease_id=str(options.get("diseaseId", "") or ""),
            candidate_gene_symbol=str(options.get("candidateGeneSymbol", "") or ""),
            run_params=HiPhiveOptions.parse_run_params(options.get("runParams")),
        )
        interactions = None
        if hiphive_options.use_ppi:
            interactions = self._provider("interactions", kind)
        return HiPhivePrioritiser(
            self._provider("phenotype", kind),
            context.hpo_ids,
            hiphive_options,
            interactions,
        )

    def _phive_prioritiser(self, options, context):
        return PhivePrioritiser(self._provider("phenotype", "phivePrioritiser"), context.hpo_ids)

    def _phenix_prioritiser(self, options, context):
        return PhenixPrioritiser(self._provider("phenotype", "phenixPrioritiser"), context.hpo_ids)

    def _exome_walker_prioritiser(self, options, context):
        kind = "exomeWalkerPrioritiser"
        values = _require_list(options, "seedGeneIds", kind)
        try:
            seeds = [int(v) for v in values]
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"seedGeneIds must be integers, got {values!r}", step=kind, option="seedGeneIds"
            ) from None
        return ExomeWalkerPrioritiser(self._provider("interactions", kind), seeds)
