"""
Analysis Runner

Executes a validated analysis over a collection of genes, annotating each
gene and variant with the result of every step.

Steps run strictly one after another. Each step finishes for every gene
before the next starts, so gene filters (inheritance in particular) always
see each gene's final set of passing variants. Steps are staged:

    1. Variant filters, in declared order
    2. Gene filters other than priority score filters, in declared order
    3. Prioritisers and priority score filters, in declared order

Within a step, genes are independent and may be processed by a thread
pool (RunnerConfig.max_workers). Each unit of work only appends results to
the gene it was handed and that gene's variants.
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import logging
import threading

from ..config import RunnerConfig, setup_logging
from ..errors import (
    AnalysisCancelledError,
    DataProviderError,
    PerItemEvaluationError,
)
from ..filters import GeneFilter, InheritanceFilter, PriorityScoreFilter, VariantFilter
from ..inheritance import InheritanceCompatibility
from ..model import FilterResult, FilterType, Gene, VariantPair
from ..prioritisers import Prioritiser
from ..providers import DataProviders
from .analysis import Analysis, AnalysisMode, AnalysisStep, assign_step_ids, step_kind
from .diagnostics import Diagnostic, DiagnosticLevel, DiagnosticsCollector, StepReport
from .step_factory import AnalysisStepFactory

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Lifecycle of a runner. No state is revisited."""

    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    ABORTED = "ABORTED"


@dataclass
class AnalysisResults:
    """
    Output of a run.

    In FULL mode genes holds every gene. In PASS_ONLY mode it holds only the
    genes that passed, each trimmed to its passing variants.
    """

    genes: List[Gene]
    analysis_mode: AnalysisMode
    step_reports: List[StepReport] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    n_input_genes: int = 0
    runtime_seconds: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def passed_genes(self) -> List[Gene]:
        return [g for g in self.genes if g.passed_filters()]

    def get_gene(self, symbol: str) -> Optional[Gene]:
        for gene in self.genes:
            if gene.symbol == symbol:
                return gene
        return None

    def compound_heterozygous_pairs(self) -> Dict[str, List[VariantPair]]:
        """Gene symbol -> compound heterozygous pairs, across recessive modes."""
        grouped: Dict[str, List[VariantPair]] = {}
        for gene in self.genes:
            pairs: List[VariantPair] = []
            for mode_pairs in gene.comp_het_pairs.values():
                for pair in mode_pairs:
                    if not any(pair[0] is p[0] and pair[1] is p[1] for p in pairs):
                        pairs.append(pair)
            if pairs:
                grouped[gene.symbol] = pairs
        return grouped

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == DiagnosticLevel.WARNING]

    def step_report(self, step_id: str) -> Optional[StepReport]:
        for report in self.step_reports:
            if report.step_id == step_id:
                return report
        return None

    @property
    def summary(self) -> str:
        """Generate a text summary."""
        passed = self.passed_genes()
        lines = [
            "=" * 60,
            "ANALYSIS RESULTS",
            "=" * 60,
            f"Mode: {self.analysis_mode.value}",
            f"Timestamp: {self.timestamp}",
            f"Runtime: {self.runtime_seconds:.2f} seconds",
            f"Genes: {len(passed)} passed of {self.n_input_genes}",
            "",
            "STEPS:",
        ]
        for report in self.step_reports:
            lines.append(f"  {report}")

        ranked = sorted(passed, key=lambda g: g.priority_score, reverse=True)
        if ranked:
            lines.extend(["", "TOP GENES:"])
            for gene in ranked[:10]:
                lines.append(
                    f"  {gene.symbol} ({gene.gene_id}): score={gene.priority_score:.3f}, "
                    f"variants={len(gene.passed_variant_evaluations())}"
                )

        warnings = self.warnings()
        if warnings:
            lines.extend(["", f"WARNINGS ({len(warnings)}):"])
            for diagnostic in warnings[:10]:
                lines.append(f"  [{diagnostic.step_id}] {diagnostic.item}: {diagnostic.message}")

        lines.extend(["", "=" * 60])
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "analysis_mode": self.analysis_mode.value,
            "genes": [g.to_dict() for g in self.genes],
            "step_reports": [r.to_dict() for r in self.step_reports],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "n_input_genes": self.n_input_genes,
            "runtime_seconds": self.runtime_seconds,
            "timestamp": self.timestamp,
        }


def plan_stages(analysis: Analysis) -> List[Tuple[str, AnalysisStep]]:
    """Order identified steps into the three execution stages."""
    identified = assign_step_ids(analysis.steps)

    def stage(step: AnalysisStep) -> int:
        if isinstance(step, VariantFilter):
            return 1
        if isinstance(step, GeneFilter) and not isinstance(step, PriorityScoreFilter):
            return 2
        return 3

    # sorted() is stable, so declared order holds within a stage
    return sorted(identified, key=lambda pair: stage(pair[1]))


class AnalysisRunner:
    """
    Runs an analysis once.

    Example:
        >>> runner = AnalysisRunner(providers, RunnerConfig(max_workers=4))
        >>> results = runner.run(analysis, genes)
        >>> print(results.summary)
    """

    def __init__(
        self,
        providers: Optional[DataProviders] = None,
        config: Optional[RunnerConfig] = None,
    ):
        """
        Initialize runner.

        Args:
            providers: Data providers used when the analysis is given in
                declared (mapping) form
            config: Execution settings
        """
        self.providers = providers or DataProviders()
        self.config = config or RunnerConfig()
        self.diagnostics = DiagnosticsCollector()

        self._state = RunState.NOT_STARTED
        self._current_step: Optional[int] = None
        self._cancel_requested = threading.Event()

        if self.config.configure_logging:
            setup_logging(self.config.verbose)

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def current_step(self) -> Optional[int]:
        """Index (in execution order) of the running or last started step."""
        return self._current_step

    def cancel(self) -> None:
        """Request the run to stop at the next step boundary."""
        self._cancel_requested.set()

    def run(
        self,
        analysis: Union[Analysis, Mapping[str, Any]],
        genes: Iterable[Gene],
    ) -> AnalysisResults:
        """
        Run every step of the analysis over the genes.

        Args:
            analysis: A validated Analysis, or its declared form, which is
                built with this runner's providers
            genes: Genes to analyse; annotated in place

        Returns:
            AnalysisResults

        Raises:
            ConfigurationError: If a declared analysis is invalid
            DataProviderError: If a provider fails and errors are not contained
            AnalysisCancelledError: If cancel() was called
        """
        if self._state != RunState.NOT_STARTED:
            raise RuntimeError("An AnalysisRunner can only run once; create a new runner")

        if not isinstance(analysis, Analysis):
            analysis = AnalysisStepFactory(self.providers).build_analysis(analysis)

        genes = list(genes)
        plan = plan_stages(analysis)
        mode = analysis.analysis_mode
        start_time = datetime.now()

        self._state = RunState.RUNNING
        logger.info(
            f"Starting {mode.value} analysis over {len(genes)} genes: "
            f"{len(analysis.variant_filters())} variant filters, "
            f"{len(analysis.gene_filters())} gene filters, "
            f"{len(analysis.prioritisers())} prioritisers"
        )

        reports = []
        try:
            for index, (step_id, step) in enumerate(plan):
                self._check_cancelled(step_id)
                self._current_step = index
                logger.info(f"Running step {index + 1}/{len(plan)}: {step_id}")
                report = self._run_step(step_id, step, genes, mode)
                reports.append(report)
                logger.info(f"Completed {report}")
        except Exception as e:
            self._state = RunState.ABORTED
            logger.error(f"Analysis aborted: {e}")
            raise

        self._state = RunState.COMPLETED
        runtime = (datetime.now() - start_time).total_seconds()
        logger.info(f"Analysis completed in {runtime:.2f} seconds")

        return AnalysisResults(
            genes=self._collect_genes(genes, mode),
            analysis_mode=mode,
            step_reports=reports,
            diagnostics=self.diagnostics.diagnostics,
            n_input_genes=len(genes),
            runtime_seconds=runtime,
        )

    def _check_cancelled(self, step_id: str) -> None:
        if self._cancel_requested.is_set():
            raise AnalysisCancelledError(f"Analysis cancelled before step {step_id}")

    @staticmethod
    def _collect_genes(genes: List[Gene], mode: AnalysisMode) -> List[Gene]:
        """
        FULL returns the input genes. PASS_ONLY returns shallow copies of the
        passing genes holding only their passing variants; the input genes
        keep every variant and result.
        """
        if mode == AnalysisMode.FULL:
            return list(genes)
        return [
            replace(gene, variant_evaluations=gene.passed_variant_evaluations())
            for gene in genes
            if gene.passed_filters()
        ]

    # =========================================================================
    # Step execution
    # =========================================================================

    def _run_step(
        self,
        step_id: str,
        step: AnalysisStep,
        genes: List[Gene],
        mode: AnalysisMode,
    ) -> StepReport:
        pass_only = mode == AnalysisMode.PASS_ONLY

        if isinstance(step, Prioritiser):
            counts = self._run_prioritiser(step_id, step, genes, pass_only)
        elif isinstance(step, VariantFilter):
            counts = self._for_each_gene(
                genes, lambda gene: self._run_variant_filter(step_id, step, gene, pass_only)
            )
        elif isinstance(step, InheritanceFilter):
            counts = self._for_each_gene(
                genes, lambda gene: self._run_inheritance_filter(step_id, step, gene, pass_only)
            )
        elif isinstance(step, GeneFilter):
            counts = self._for_each_gene(
                genes, lambda gene: self._run_gene_filter(step_id, step, gene, pass_only)
            )
        else:
            raise TypeError(f"Unsupported step type: {type(step).__name__}")

        return StepReport(
            step_id=step_id,
            kind=step_kind(step),
            evaluated=counts["evaluated"],
            passed=counts["passed"],
            failed=counts["failed"],
            skipped=counts["skipped"],
        )

    def _for_each_gene(self, genes: List[Gene], work: Callable[[Gene], Counter]) -> Counter:
        """Apply work to every gene and wait for all of it to finish."""
        totals: Counter = Counter()
        if self.config.max_workers <= 1 or len(genes) <= 1:
            for gene in genes:
                totals.update(work(gene))
            return totals

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [executor.submit(work, gene) for gene in genes]
            for future in futures:
                totals.update(future.result())
        return totals

    def _run_variant_filter(
        self,
        step_id: str,
        step: VariantFilter,
        gene: Gene,
        pass_only: bool,
    ) -> Counter:
        counts: Counter = Counter()
        for variant in gene.variant_evaluations:
            if pass_only and not variant.passed_filters():
                counts["skipped"] += 1
                continue
            result = self._evaluate(step_id, step, variant, step.evaluate)
            variant.add_filter_result(step_id, result)
            counts["evaluated"] += 1
            counts["passed" if result.passed else "failed"] += 1
        return counts

    def _run_gene_filter(
        self,
        step_id: str,
        step: GeneFilter,
        gene: Gene,
        pass_only: bool,
    ) -> Counter:
        if pass_only and not gene.passed_filters():
            return Counter(skipped=1)
        result = self._evaluate(step_id, step, gene, step.evaluate)
        gene.add_filter_result(step_id, result)
        return Counter(evaluated=1, **{"passed" if result.passed else "failed": 1})

    def _run_inheritance_filter(
        self,
        step_id: str,
        step: InheritanceFilter,
        gene: Gene,
        pass_only: bool,
    ) -> Counter:
        """
        Record the gene's inheritance findings, a gene-level result, and a
        result on each checked variant (PASS when it is compatible with at
        least one mode).
        """
        if pass_only and not gene.passed_filters():
            return Counter(skipped=1)

        checked = gene.passed_variant_evaluations()
        compatibility, failure = self._guarded(step_id, gene, step.check, gene)
        if compatibility is None:
            compatibility = InheritanceCompatibility()
            gene_result = step.fail_result(message=failure)
        else:
            gene_result = step.result_for(compatibility)

        gene.set_inheritance_findings(compatibility.compatible_modes, compatibility.comp_het_pairs)
        gene.add_filter_result(step_id, gene_result)

        for variant in checked:
            modes = compatibility.variant_modes.get(variant, set())
            variant.set_compatible_inheritance_modes(modes)
            if modes:
                variant.add_filter_result(step_id, FilterResult.pass_(FilterType.INHERITANCE_FILTER))
            else:
                variant.add_filter_result(
                    step_id, FilterResult.fail(FilterType.INHERITANCE_FILTER, message=failure or "")
                )

        return Counter(evaluated=1, **{"passed" if gene_result.passed else "failed": 1})

    def _run_prioritiser(
        self,
        step_id: str,
        step: Prioritiser,
        genes: List[Gene],
        pass_only: bool,
    ) -> Counter:
        """Score the passing genes (all genes in FULL mode) in one call."""
        targets = [g for g in genes if g.passed_filters()] if pass_only else list(genes)
        skipped = len(genes) - len(targets)

        scores, failure = self._guarded(step_id, step_kind(step), step.score, targets)
        if scores is None:
            logger.warning(f"{step_id}: no scores recorded ({failure})")
            return Counter(skipped=len(genes))

        for gene in targets:
            gene.add_priority_score(step.priority_type, scores.get(gene.gene_id, 0.0))
        return Counter(evaluated=len(targets), skipped=skipped)

    # =========================================================================
    # Error containment
    # =========================================================================

    def _evaluate(self, step_id: str, step, item, evaluate: Callable) -> FilterResult:
        result, failure = self._guarded(step_id, item, evaluate, item)
        if result is None:
            return step.fail_result(message=failure)
        return result

    def _guarded(self, step_id: str, item: Any, func: Callable, *args) -> Tuple[Any, Optional[str]]:
        """
        Call func, containing per-item errors (and data provider errors when
        configured to). Returns (value, None) or (None, message).
        """
        try:
            return func(*args), None
        except PerItemEvaluationError as e:
            message = str(e)
        except DataProviderError as e:
            if not self.config.contain_data_provider_errors:
                logger.error(f"{step_id}: data provider failure: {e}")
                self.diagnostics.error(step_id, item, f"Data provider error: {e}")
                raise
            message = f"Data provider error: {e}"

        logger.warning(f"{step_id}: {item}: {message}")
        self.diagnostics.warning(step_id, item, message)
        return None, message
