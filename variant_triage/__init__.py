"""
Variant Triage

Analysis pipeline engine for prioritising candidate disease-causing
variants: ordered filter and prioritiser steps over per-gene variant
collections, with pedigree-aware inheritance and compound heterozygosity
checks.
"""

__version__ = "0.1.0"

from .analysis import (
    Analysis,
    AnalysisMode,
    AnalysisResults,
    AnalysisRunner,
    AnalysisStepFactory,
    RunState,
)
from .config import RunnerConfig, setup_logging
from .errors import (
    AnalysisCancelledError,
    AnalysisError,
    ConfigurationError,
    DataProviderError,
    PerItemEvaluationError,
    StepOrderingError,
)
from .inheritance import CompHetChecker, InheritanceModeChecker
from .providers import DataProviders

__all__ = [
    "Analysis",
    "AnalysisMode",
    "AnalysisResults",
    "AnalysisRunner",
    "AnalysisStepFactory",
    "RunState",
    "RunnerConfig",
    "setup_logging",
    "DataProviders",
    "CompHetChecker",
    "InheritanceModeChecker",
    # Errors
    "AnalysisError",
    "AnalysisCancelledError",
    "ConfigurationError",
    "DataProviderError",
    "PerItemEvaluationError",
    "StepOrderingError",
    "__version__",
]
