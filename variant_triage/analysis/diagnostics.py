"""
Run Diagnostics

Structured record of what happened during a run: per-step counts, the
warnings raised by contained evaluation errors and the error that aborted
a run. Returned with the results so callers and tests can inspect them
without reading logs.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import threading


class DiagnosticLevel(Enum):
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Diagnostic:
    """One diagnostic message, tied to a step and optionally to an item."""

    level: DiagnosticLevel
    step_id: str
    item: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "step_id": self.step_id,
            "item": self.item,
            "message": self.message,
        }


class DiagnosticsCollector:
    """Thread-safe, append-only collection of diagnostics."""

    def __init__(self):
        self._diagnostics: List[Diagnostic] = []
        self._lock = threading.Lock()

    def add(self, level: DiagnosticLevel, step_id: str, item: Any, message: str) -> None:
        diagnostic = Diagnostic(level, step_id, "" if item is None else str(item), message)
        with self._lock:
            self._diagnostics.append(diagnostic)

    def warning(self, step_id: str, item: Any, message: str) -> None:
        self.add(DiagnosticLevel.WARNING, step_id, item, message)

    def error(self, step_id: str, item: Any, message: str) -> None:
        self.add(DiagnosticLevel.ERROR, step_id, item, message)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._diagnostics)

    def __len__(self) -> int:
        with self._lock:
            return len(self._diagnostics)


@dataclass
class StepReport:
    """
    Counts for one executed step.

    Variant filters count variants; gene filters and prioritisers count
    genes. In PASS_ONLY mode items that already failed are skipped, so
    failures are undercounted relative to FULL mode.
    """

    step_id: str
    kind: str
    evaluated: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"{self.step_id}: evaluated={self.evaluated} passed={self.passed} "
            f"failed={self.failed} skipped={self.skipped}"
        )
