"""
Tests for the interaction network random walk.
"""

import pytest

from variant_triage.prioritisers import InteractionNetwork, RandomWalkConfig


class TestInteractionNetwork:
    """Tests for InteractionNetwork."""

    def test_build_from_edges(self):
        edges = [
            (1, 2, 0.8),
            (2, 3, 0.6),
            (1, 3, 0.5),
            (3, 4, 0.7),
        ]
        network = InteractionNetwork.from_edges(edges)

        stats = network.get_network_stats()
        assert stats["n_nodes"] == 4
        assert stats["n_edges"] == 4
        assert 1 in network
        assert 99 not in network

    def test_walk_before_build_raises(self):
        network = InteractionNetwork()
        assert not network.is_built
        with pytest.raises(RuntimeError, match="Network not built"):
            network.walk([1])
        assert network.get_network_stats() == {"error": "Network not built"}

    def test_built_network_reports_built(self):
        assert InteractionNetwork.from_edges([(1, 2, 1.0)]).is_built

    def test_seed_scores_highest(self):
        edges = [(1, 2, 1.0), (2, 3, 1.0), (3, 4, 1.0), (1, 4, 1.0)]
        network = InteractionNetwork.from_edges(edges, RandomWalkConfig(restart_prob=0.5))

        result = network.walk([1])

        assert result.converged
        assert result.gene_scores[1] == pytest.approx(1.0)
        assert all(score <= 1.0 for score in result.gene_scores.values())
        assert len(result.gene_scores) == 4

    def test_signal_decays_with_distance(self):
        # Linear chain: 1 - 2 - 3 - 4 - 5
        edges = [(1, 2, 1.0), (2, 3, 1.0), (3, 4, 1.0), (4, 5, 1.0)]
        network = InteractionNetwork.from_edges(edges, RandomWalkConfig(restart_prob=0.5))

        scores = network.walk([1]).gene_scores

        assert scores[1] > scores[2] > scores[3] > scores[4] > scores[5]

    def test_unknown_seeds(self):
        network = InteractionNetwork.from_edges([(1, 2, 1.0)])
        result = network.walk([42])
        assert result.gene_scores == {}

    def test_disconnected_component_unreached(self):
        network = InteractionNetwork.from_edges([(1, 2, 1.0), (3, 4, 1.0)])
        scores = network.walk([1]).gene_scores
        assert 3 not in scores
        assert 4 not in scores
