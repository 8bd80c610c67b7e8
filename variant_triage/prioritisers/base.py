"""
Prioritiser Base Class

A prioritiser assigns each gene a relevance score in [0, 1] from phenotype,
network or disease evidence. It sees the whole gene set at once so that
relative (rank or max-normalised) scoring is possible.
"""

from abc import ABC, abstractmethod
from typing import Dict, Sequence

from ..model import Gene, PriorityType


class Prioritiser(ABC):
    """
    Base class for all prioritisers.

    Attributes:
        kind: Step kind as declared in an analysis (e.g. "omimPrioritiser")
        priority_type: Key under which scores are stored on each gene
    """

    kind: str = ""
    priority_type: PriorityType

    @abstractmethod
    def score(self, genes: Sequence[Gene]) -> Dict[int, float]:
        """
        Score genes.

        Args:
            genes: Genes to score; not modified

        Returns:
            Gene id -> score, with an entry for every gene given
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
