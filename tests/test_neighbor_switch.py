import pytest
import numpy as np

from jdm_synth.exceptions import RepairExhaustionError
from jdm_synth.fast_graph import FastGraph
from jdm_synth.neighbor_switch import neighbor_switch


@pytest.fixture
def star_graph():
    """Vertex 0 is saturated by its single edge to 3; vertices 1 and 2 have free stubs."""
    g = FastGraph(5)
    g.add_edge(0, 3)
    return g


class TestNeighborSwitch:

    def test_moves_edge_to_partner(self, star_graph):
        residual = np.array([0, 1, 1, 0, 0])

        w_prime, t = neighbor_switch(star_graph, 0, [0, 1, 2], residual)

        assert (w_prime, t) == (1, 3)
        assert not star_graph.has_edge(0, 3)
        assert star_graph.has_edge(1, 3)
        assert residual.tolist() == [1, 0, 1, 0, 0]

    def test_degrees_are_preserved(self, star_graph):
        residual = np.array([0, 1, 1, 0, 0])
        degree_before = star_graph.degrees() + residual

        neighbor_switch(star_graph, 0, [0, 1, 2], residual)

        np.testing.assert_array_equal(star_graph.degrees() + residual, degree_before)

    def test_avoid_with_single_stub_is_skipped(self, star_graph):
        residual = np.array([0, 1, 1, 0, 0])

        w_prime, _ = neighbor_switch(star_graph, 0, [0, 1, 2], residual, avoid=1)

        assert w_prime == 2

    def test_avoid_with_spare_stubs_is_deprioritized(self, star_graph):
        residual = np.array([0, 2, 1, 0, 0])

        w_prime, _ = neighbor_switch(star_graph, 0, [0, 1, 2], residual, avoid=1)

        assert w_prime == 2

    def test_avoid_is_fallback_when_it_has_spare_stubs(self, star_graph):
        residual = np.array([0, 2, 0, 0, 0])

        w_prime, _ = neighbor_switch(star_graph, 0, [0, 1, 2], residual, avoid=1)

        assert w_prime == 1
        assert residual[1] == 1

    def test_no_partner(self, star_graph):
        residual = np.array([0, 1, 0, 0, 0])

        with pytest.raises(RepairExhaustionError) as exc_info:
            neighbor_switch(star_graph, 0, [0, 1, 2], residual, avoid=1)
        assert exc_info.value.vertex == 0

    def test_no_valid_neighbor_leaves_graph_untouched(self, star_graph):
        star_graph.add_edge(1, 3)
        residual = np.array([0, 1, 0, 0, 0])

        with pytest.raises(RepairExhaustionError):
            neighbor_switch(star_graph, 0, [1], residual)

        assert star_graph.has_edge(0, 3)
        assert star_graph.has_edge(1, 3)
        assert residual.tolist() == [0, 1, 0, 0, 0]
