"""Unit tests for VC3: double cover and paired twins."""

import networkx as nx
import pytest

from pnsim.core import PrematureInspectionError, RoundEngine, Topology, complete, path, ring, star
from pnsim.algorithms.matching import (
    BipartiteMatching,
    Color,
    Matched,
    ProvisionallyMatched,
    Signal,
    UnmatchedBlack,
    Unselected,
)
from pnsim.algorithms.vertex_cover import (
    PairedVertexCover,
    TwinMessage,
    TwinState,
    bipartite_double_cover,
    cover_from_twins,
    in_cover,
    paired_vertex_cover,
    twins_terminal,
    vertex_cover,
)
from pnsim.analysis import (
    check_matching,
    is_vertex_cover,
    maximum_matching_size,
    minimum_vertex_cover_size,
)


def sample_networks():
    yield complete(3)
    yield ring(4)
    yield ring(5)
    yield path(5)
    yield star(4)
    yield complete(5)
    yield Topology.from_networkx(nx.petersen_graph())
    yield Topology.from_edges(3, [(0, 0), (0, 1), (1, 2), (1, 2)])
    for seed in range(6):
        yield Topology.from_networkx(nx.gnp_random_graph(9, 0.4, seed=seed))


class TestDoubleCover:
    """Tests for the doubled topology."""

    def test_size(self, petersen):
        doubled, colors = bipartite_double_cover(petersen)
        assert doubled.num_nodes == 20
        assert doubled.num_edges == 30
        assert colors == [Color.WHITE] * 10 + [Color.BLACK] * 10

    def test_wiring(self, ring4):
        doubled, _ = bipartite_double_cover(ring4)
        # White 0 keeps its ports but talks to black twins
        assert list(doubled[0]) == [(7, 1), (5, 0)]
        assert list(doubled[4]) == [(3, 1), (1, 0)]

    def test_symmetric(self):
        for topo in sample_networks():
            doubled, _ = bipartite_double_cover(topo)
            assert doubled.is_symmetric()

    def test_links_join_opposite_colors(self, triangle):
        doubled, colors = bipartite_double_cover(triangle)
        for a, b in doubled.edges():
            assert colors[a.node] != colors[b.node]


class TestVertexCover:
    """Tests for vertex_cover() on the doubled topology."""

    def test_triangle(self, triangle):
        result = vertex_cover(triangle)
        assert result.size <= 2
        assert result.cover == frozenset({0, 1})
        assert is_vertex_cover(triangle, result.cover)

    def test_always_a_cover(self):
        for topo in sample_networks():
            result = vertex_cover(topo)
            assert is_vertex_cover(topo, result.cover)

    def test_three_approximation(self):
        for topo in sample_networks():
            result = vertex_cover(topo)
            assert result.size <= 3 * minimum_vertex_cover_size(topo)

    @pytest.mark.parametrize("topo", [complete(3), ring(4), path(5)])
    def test_bounded_by_maximum_matching(self, topo):
        result = vertex_cover(topo)
        assert result.size <= 3 * maximum_matching_size(topo)

    def test_underlying_matching_valid(self):
        for topo in sample_networks():
            doubled, _ = bipartite_double_cover(topo)
            result = vertex_cover(topo)
            report = check_matching(doubled, result.white_states + result.black_states)
            assert report.valid
            assert report.maximal

    def test_empty_graph(self):
        result = vertex_cover(Topology([[], [], []]))
        assert result.cover == frozenset()


class TestPairedTwins:
    """Tests for the paired-instance composition."""

    def test_init(self):
        state = PairedVertexCover().init(2)
        bmm = BipartiteMatching()
        assert state == TwinState(bmm.init(2, Color.WHITE), bmm.init(2, Color.BLACK))

    def test_send_pairs_halves(self):
        alg = PairedVertexCover()
        messages = alg.send(2, alg.init(2))
        assert messages == [TwinMessage(Signal.PROPOSAL, None), TwinMessage(None, None)]

    def test_receive_cross_wires(self):
        alg = PairedVertexCover()
        state = alg.init(1)
        # The neighbour's black twin accepted nothing; its white twin proposed
        new = alg.receive(state, [TwinMessage(white=Signal.PROPOSAL, black=None)])
        assert new.black.proposers == frozenset({0})
        assert new.white.round == 2

    def test_matches_double_cover(self):
        for topo in sample_networks():
            doubled = vertex_cover(topo)
            paired = paired_vertex_cover(topo)
            assert paired.cover == doubled.cover
            assert paired.white_states == doubled.white_states
            assert paired.black_states == doubled.black_states
            assert paired.rounds == doubled.rounds

    def test_triangle(self, triangle):
        assert paired_vertex_cover(triangle).cover == frozenset({0, 1})


class TestPrematureInspection:
    """Cover membership must not be read before termination."""

    def test_in_cover(self, triangle):
        engine = RoundEngine(triangle, PairedVertexCover(), [None] * 3)
        with pytest.raises(PrematureInspectionError):
            in_cover(engine.states[0])

    def test_cover_from_twins(self, ring4):
        doubled, colors = bipartite_double_cover(ring4)
        engine = RoundEngine(doubled, BipartiteMatching(), colors)
        engine.step()
        with pytest.raises(PrematureInspectionError):
            cover_from_twins(engine.states[:4], engine.states[4:])

    def test_cover_from_twins_checks_black_twin(self):
        pending = UnmatchedBlack(round=3, candidates=frozenset({0}))
        with pytest.raises(PrematureInspectionError):
            cover_from_twins([Matched(0)], [pending])

    def test_cover_from_twins_checks_white_twin(self):
        with pytest.raises(PrematureInspectionError):
            cover_from_twins([ProvisionallyMatched(0)], [Matched(0)])

    def test_in_cover_checks_both_twins(self):
        with pytest.raises(PrematureInspectionError):
            in_cover(TwinState(Matched(0), ProvisionallyMatched(1)))

    def test_in_cover_after_termination(self):
        assert in_cover(TwinState(Matched(0), Unselected()))
        assert not in_cover(TwinState(Unselected(), Unselected()))

    def test_twins_terminal(self, ring4):
        engine = RoundEngine(ring4, PairedVertexCover(), [None] * 4)
        assert not twins_terminal(engine.states)
        engine.run_until(twins_terminal)
        assert twins_terminal(engine.states)

    def test_mismatched_twin_counts(self):
        with pytest.raises(ValueError):
            cover_from_twins([Unselected()], [])
