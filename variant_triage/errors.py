"""
Errors

Exception taxonomy for analysis construction and execution.

Configuration and step-ordering errors are raised while an analysis is being
built, before any variant is touched. Data provider errors abort a run unless
the runner is configured to contain them. Per-item errors never escape a run:
the runner records them as FAIL results with a diagnostic message.
"""

from typing import Any, Optional


class AnalysisError(Exception):
    """Base class for all variant_triage errors."""


class ConfigurationError(AnalysisError):
    """
    A step or analysis setting is missing, invalid or not recognised.

    Attributes:
        step: Kind of the offending step (e.g. "frequencyFilter"), if any
        option: Name of the offending option (e.g. "maxFrequency"), if any
    """

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        option: Optional[str] = None,
    ):
        self.step = step
        self.option = option
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        context = []
        if self.step:
            context.append(f"step={self.step}")
        if self.option:
            context.append(f"option={self.option}")
        if context:
            return f"{message} [{', '.join(context)}]"
        return message


class StepOrderingError(ConfigurationError):
    """The declared step sequence is structurally inconsistent."""


class DataProviderError(AnalysisError):
    """An injected data provider is unreachable or returned malformed data."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        super().__init__(message)


class PerItemEvaluationError(AnalysisError):
    """A single variant or gene could not be evaluated by one step."""

    def __init__(self, message: str, item: Any = None):
        self.item = item
        super().__init__(message)


class AnalysisCancelledError(AnalysisError):
    """The caller cancelled a run; raised at the next per-step barrier."""
