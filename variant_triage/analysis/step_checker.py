"""
Step Order Checker

Static checks over a declared step sequence, run before any variant is
touched. Validation is all-or-nothing: the sequence is either returned
sanitised or rejected with a configuration error.

Rules:
    1. At most one inheritance filter.
    2. An inheritance filter with no modes to test, or only ANY, is a no-op
       and is dropped.
    3. A priority score filter needs an earlier prioritiser of the same type.

Steps are otherwise kept in declared order. Putting cheap boolean filters
ahead of data-provider filters is left to whoever writes the analysis.
"""

from typing import List, Sequence, Tuple
import logging

from ..errors import ConfigurationError, StepOrderingError
from ..filters import GeneFilter, InheritanceFilter, PriorityScoreFilter, VariantFilter
from ..model import ModeOfInheritance
from ..prioritisers import Prioritiser

logger = logging.getLogger(__name__)

STEP_TYPES = (VariantFilter, GeneFilter, Prioritiser)


def check_step_types(steps: Sequence) -> None:
    """Every step must be a variant filter, gene filter or prioritiser."""
    for index, step in enumerate(steps):
        if not isinstance(step, STEP_TYPES):
            raise ConfigurationError(
                f"Step {index + 1} ({type(step).__name__}) is not a filter or prioritiser"
            )


def check_single_inheritance_filter(steps: Sequence) -> None:
    count = sum(1 for step in steps if isinstance(step, InheritanceFilter))
    if count > 1:
        raise StepOrderingError(
            f"Only one inheritance filter may be declared, found {count}",
            step=InheritanceFilter.kind,
        )


def check_priority_score_filters(steps: Sequence) -> None:
    """Each priority score filter must follow a prioritiser of its type."""
    seen = set()
    for step in steps:
        if isinstance(step, Prioritiser):
            seen.add(step.priority_type)
        elif isinstance(step, PriorityScoreFilter) and step.priority_type not in seen:
            raise ConfigurationError(
                f"No {step.priority_type.name} prioritiser declared before this filter",
                step=PriorityScoreFilter.kind,
                option="priorityType",
            )


def remove_no_op_steps(steps: Sequence) -> List:
    kept = []
    for step in steps:
        if isinstance(step, InheritanceFilter) and step.modes <= {ModeOfInheritance.ANY}:
            logger.warning(
                "Dropping inheritance filter: no specific inheritance modes declared"
            )
            continue
        kept.append(step)
    return kept


def validate_steps(steps: Sequence) -> Tuple:
    """
    Validate and sanitise a declared step sequence.

    Args:
        steps: Steps in declared order

    Returns:
        The sanitised steps, in declared order

    Raises:
        StepOrderingError: If more than one inheritance filter is declared
        ConfigurationError: If a step is of an unknown type or a priority
            score filter has no matching prioritiser before it
    """
    check_step_types(steps)
    check_single_inheritance_filter(steps)
    kept = remove_no_op_steps(steps)
    check_priority_score_filters(kept)
    return tuple(kept)
