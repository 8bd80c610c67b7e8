"""
Analysis

Analysis definition, step construction and validation, and the runner.
"""

from .analysis import Analysis, AnalysisMode, AnalysisStep, assign_step_ids
from .diagnostics import Diagnostic, DiagnosticLevel, DiagnosticsCollector, StepReport
from .runner import AnalysisResults, AnalysisRunner, RunState, plan_stages
from .step_checker import validate_steps
from .step_factory import AnalysisStepFactory, StepDeclaration

__all__ = [
    # Definition
    "Analysis",
    "AnalysisMode",
    "AnalysisStep",
    "assign_step_ids",
    # Construction
    "AnalysisStepFactory",
    "StepDeclaration",
    "validate_steps",
    # Execution
    "AnalysisRunner",
    "AnalysisResults",
    "RunState",
    "plan_stages",
    # Diagnostics
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticsCollector",
    "StepReport",
]
