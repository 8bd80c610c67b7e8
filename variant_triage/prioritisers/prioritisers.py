"""
Gene Prioritisers

Disease, phenotype and network based gene scoring. Each prioritiser turns
evidence from an injected provider into a score in [0, 1] per gene; the
runner stores the score on the gene under the prioritiser's PriorityType.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence
import logging

from ..errors import ConfigurationError
from ..model import Gene, PriorityType
from ..providers import (
    DiseaseDataProvider,
    InteractionNetworkProvider,
    PhenotypeScoreProvider,
)
from .base import Prioritiser
from .network import InteractionNetwork, RandomWalkConfig

logger = logging.getLogger(__name__)

# Score for genes whose known diseases disagree with the observed inheritance
OMIM_INCOMPATIBLE_MODE_SCORE = 0.5

# Score for genes with no mouse model phenotype data
NO_MOUSE_MODEL_SCORE = 0.6

# Weight given to interaction-network evidence relative to direct phenotype matches
PPI_EVIDENCE_WEIGHT = 0.5

HIPHIVE_RUN_PARAMS = ("human", "mouse", "fish", "ppi")


def _max_normalised(raw: Dict[int, float], genes: Sequence[Gene]) -> Dict[int, float]:
    best = max((raw.get(gene.gene_id, 0.0) for gene in genes), default=0.0)
    if best <= 0.0:
        return {gene.gene_id: 0.0 for gene in genes}
    return {gene.gene_id: raw.get(gene.gene_id, 0.0) / best for gene in genes}


class OmimPrioritiser(Prioritiser):
    """
    Down-weights genes whose known Mendelian diseases are inherited in a
    different way from the modes the gene's variants were found compatible
    with. Genes with no known disease, no disease mode data or no
    inheritance findings score 1.0.
    """

    kind = "omimPrioritiser"
    priority_type = PriorityType.OMIM_PRIORITY

    def __init__(self, provider: DiseaseDataProvider):
        self.provider = provider

    def score(self, genes: Sequence[Gene]) -> Dict[int, float]:
        scores = {}
        for gene in genes:
            scores[gene.gene_id] = self._score_gene(gene)
        return scores

    def _score_gene(self, gene: Gene) -> float:
        diseases = self.provider.get_diseases(gene.gene_id)
        disease_modes = set()
        for disease in diseases:
            disease_modes.update(disease.inheritance_modes)

        if not disease_modes or not gene.compatible_inheritance_modes:
            return 1.0
        if disease_modes & gene.compatible_inheritance_modes:
            return 1.0
        logger.debug(f"{gene}: known disease modes do not match observed inheritance")
        return OMIM_INCOMPATIBLE_MODE_SCORE


@dataclass(frozen=True)
class HiPhiveOptions:
    """
    Options of the HiPhive prioritiser.

    Attributes:
        disease_id: Disease of interest, used for benchmarking
        candidate_gene_symbol: Known candidate, used for benchmarking
        run_params: Evidence sources, a subset of human, mouse, fish, ppi
    """

    disease_id: str = ""
    candidate_gene_symbol: str = ""
    run_params: FrozenSet[str] = frozenset(HIPHIVE_RUN_PARAMS)

    @staticmethod
    def parse_run_params(value: Optional[str]) -> FrozenSet[str]:
        """
        Parse a comma separated runParams string. Empty means all sources.

        Raises:
            ConfigurationError: If a token is not a known source
        """
        if not value:
            return frozenset(HIPHIVE_RUN_PARAMS)
        tokens = [t.strip().lower() for t in str(value).split(",") if t.strip()]
        for token in tokens:
            if token not in HIPHIVE_RUN_PARAMS:
                raise ConfigurationError(
                    f"Unknown runParams value '{token}'. Use any of: {', '.join(HIPHIVE_RUN_PARAMS)}",
                    step="hiPhivePrioritiser",
                    option="runParams",
                )
        return frozenset(tokens) or frozenset(HIPHIVE_RUN_PARAMS)

    @property
    def organisms(self) -> FrozenSet[str]:
        return frozenset(p for p in self.run_params if p != "ppi")

    @property
    def use_ppi(self) -> bool:
        return "ppi" in self.run_params


class HiPhivePrioritiser(Prioritiser):
    """
    Cross-species phenotype matching (human, mouse and fish models), with
    optional spreading of the evidence over the protein interaction network.

    A gene's score is its best direct phenotype score. With ppi, genes close
    in the network to well-matched genes also gain a weighted share of that
    evidence.
    """

    kind = "hiPhivePrioritiser"
    priority_type = PriorityType.HIPHIVE_PRIORITY

    def __init__(
        self,
        provider: PhenotypeScoreProvider,
        hpo_ids: Sequence[str],
        options: Optional[HiPhiveOptions] = None,
        interactions: Optional[InteractionNetworkProvider] = None,
    ):
        self.provider = provider
        self.hpo_ids = list(hpo_ids)
        self.options = options or HiPhiveOptions()
        self.interactions = interactions
        self._network: Optional[InteractionNetwork] = None

    def score(self, genes: Sequence[Gene]) -> Dict[int, float]:
        raw = self.provider.score_genes(
            self.hpo_ids,
            genes,
            self.options.organisms,
            disease_id=self.options.disease_id,
            candidate_gene_symbol=self.options.candidate_gene_symbol,
        )
        scores = {gene.gene_id: min(1.0, raw.get(gene.gene_id, 0.0)) for gene in genes}

        if self.options.use_ppi and self.interactions is not None:
            self._add_network_evidence(scores)
        return scores

    def _add_network_evidence(self, scores: Dict[int, float]) -> None:
        seeds = [gene_id for gene_id, s in scores.items() if s > 0]
        if not seeds:
            return
        if self._network is None:
            self._network = InteractionNetwork.from_edges(self.interactions.get_interactions())

        best = max(scores.values())
        proximity = self._network.walk(seeds).gene_scores
        for gene_id, current in scores.items():
            if gene_id in seeds:
                continue
            spread = PPI_EVIDENCE_WEIGHT * best * proximity.get(gene_id, 0.0)
            scores[gene_id] = max(current, spread)

    def __repr__(self) -> str:
        return f"HiPhivePrioritiser(run_params={sorted(self.options.run_params)})"


class PhivePrioritiser(Prioritiser):
    """Mouse model phenotype matching."""

    kind = "phivePrioritiser"
    priority_type = PriorityType.PHIVE_PRIORITY

    def __init__(self, provider: PhenotypeScoreProvider, hpo_ids: Sequence[str]):
        self.provider = provider
        self.hpo_ids = list(hpo_ids)

    def score(self, genes: Sequence[Gene]) -> Dict[int, float]:
        raw = self.provider.score_genes(self.hpo_ids, genes, frozenset({"mouse"}))
        return {
            gene.gene_id: raw.get(gene.gene_id, NO_MOUSE_MODEL_SCORE) for gene in genes
        }


class PhenixPrioritiser(Prioritiser):
    """
    Human disease phenotype matching. Scores are relative: each gene's raw
    similarity is divided by the best raw similarity in the scored set.
    """

    kind = "phenixPrioritiser"
    priority_type = PriorityType.PHENIX_PRIORITY

    def __init__(self, provider: PhenotypeScoreProvider, hpo_ids: Sequence[str]):
        self.provider = provider
        self.hpo_ids = list(hpo_ids)

    def score(self, genes: Sequence[Gene]) -> Dict[int, float]:
        raw = self.provider.score_genes(self.hpo_ids, genes, frozenset({"human"}))
        return _max_normalised(raw, genes)


class ExomeWalkerPrioritiser(Prioritiser):
    """
    Scores genes by proximity to known seed genes in the interaction
    network, using a random walk with restart.
    """

    kind = "exomeWalkerPrioritiser"
    priority_type = PriorityType.EXOMEWALKER_PRIORITY

    def __init__(
        self,
        interactions: InteractionNetworkProvider,
        seed_gene_ids: Iterable[int],
        config: Optional[RandomWalkConfig] = None,
    ):
        self.interactions = interactions
        self.seed_gene_ids: List[int] = list(seed_gene_ids)
        self.config = config
        self._network: Optional[InteractionNetwork] = None

    def score(self, genes: Sequence[Gene]) -> Dict[int, float]:
        if self._network is None:
            self._network = InteractionNetwork.from_edges(
                self.interactions.get_interactions(), self.config
            )
        result = self._network.walk(self.seed_gene_ids)
        logger.info(
            f"ExomeWalker: walk from {len(self.seed_gene_ids)} seeds reached "
            f"{len(result.gene_scores)} genes in {result.n_iterations} iterations"
        )
        return {gene.gene_id: result.gene_scores.get(gene.gene_id, 0.0) for gene in genes}

    def __repr__(self) -> str:
        return f"ExomeWalkerPrioritiser(seed_gene_ids={self.seed_gene_ids})"
