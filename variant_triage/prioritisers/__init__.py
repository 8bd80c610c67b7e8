"""
Prioritisers

Gene scoring steps: disease (OMIM), phenotype (HiPhive, Phive, Phenix) and
interaction network (ExomeWalker) evidence.
"""

from .base import Prioritiser
from .network import InteractionNetwork, RandomWalkConfig, RandomWalkResult
from .prioritisers import (
    ExomeWalkerPrioritiser,
    HiPhiveOptions,
    HiPhivePrioritiser,
    OmimPrioritiser,
    PhenixPrioritiser,
    PhivePrioritiser,
)

__all__ = [
    "Prioritiser",
    "OmimPrioritiser",
    "HiPhiveOptions",
    "HiPhivePrioritiser",
    "PhivePrioritiser",
    "PhenixPrioritiser",
    "ExomeWalkerPrioritiser",
    # Network
    "InteractionNetwork",
    "RandomWalkConfig",
    "RandomWalkResult",
]
