"""
Data Providers

Interfaces for the external annotation, frequency, pathogenicity and
phenotype resources that analysis steps consult, plus the context object
that carries them into the step factory and runner.

Providers are shared across worker threads during a step and must be safe
for concurrent reads. Implementations signal an outage or malformed
response with DataProviderError, and an unevaluable single item with
PerItemEvaluationError.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from .model import (
    FrequencyData,
    FrequencySource,
    Gene,
    ModeOfInheritance,
    PathogenicityData,
    PathogenicitySource,
    VariantEvaluation,
)


class FrequencyDataProvider(ABC):
    """Population frequency lookups."""

    @abstractmethod
    def get_frequency_data(
        self,
        variant: VariantEvaluation,
        sources: FrozenSet[FrequencySource],
    ) -> FrequencyData:
        """
        Frequencies of a variant in the requested sources.

        Returns an empty FrequencyData for variants never observed.
        """


class PathogenicityDataProvider(ABC):
    """Pathogenicity predictor lookups."""

    @abstractmethod
    def get_pathogenicity_data(
        self,
        variant: VariantEvaluation,
        sources: FrozenSet[PathogenicitySource],
    ) -> PathogenicityData:
        """Predictor scores of a variant in the requested sources."""


@dataclass(frozen=True)
class Disease:
    """A known disease associated with a gene."""

    disease_id: str
    name: str = ""
    inheritance_modes: FrozenSet[ModeOfInheritance] = frozenset()


class DiseaseDataProvider(ABC):
    """Gene -> known Mendelian disease associations (e.g. OMIM)."""

    @abstractmethod
    def get_diseases(self, gene_id: int) -> List[Disease]:
        """Diseases associated with a gene; empty if none are known."""


class PhenotypeScoreProvider(ABC):
    """Phenotype similarity between the patient's HPO terms and gene models."""

    @abstractmethod
    def score_genes(
        self,
        hpo_ids: Sequence[str],
        genes: Sequence[Gene],
        organisms: FrozenSet[str],
        disease_id: str = "",
        candidate_gene_symbol: str = "",
    ) -> Dict[int, float]:
        """
        Raw phenotype similarity scores.

        Args:
            hpo_ids: Patient phenotype terms
            genes: Genes to score
            organisms: Model organisms to use ("human", "mouse", "fish")
            disease_id: Optional disease of interest (benchmarking)
            candidate_gene_symbol: Optional known candidate (benchmarking)

        Returns:
            Gene id -> score; genes without evidence may be omitted
        """


class InteractionNetworkProvider(ABC):
    """Gene-gene interaction network (e.g. STRING protein interactions)."""

    @abstractmethod
    def get_interactions(self) -> List[Tuple[int, int, float]]:
        """Undirected weighted edges as (gene_id, gene_id, weight)."""


@dataclass
class DataProviders:
    """
    The data capabilities available to an analysis.

    Steps that need a provider that is not set are rejected when the
    analysis is built.
    """

    frequency: Optional[FrequencyDataProvider] = None
    pathogenicity: Optional[PathogenicityDataProvider] = None
    disease: Optional[DiseaseDataProvider] = None
    phenotype: Optional[PhenotypeScoreProvider] = None
    interactions: Optional[InteractionNetworkProvider] = None

    def available(self) -> Set[str]:
        """Names of the providers that are set."""
        return {
            name for name in ("frequency", "pathogenicity", "disease", "phenotype", "interactions")
            if getattr(self, name) is not None
        }
