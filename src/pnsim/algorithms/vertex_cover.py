"""
3-approximate vertex cover (VC3) from bipartite maximal matching.

Bipartite double cover: each node v becomes a WHITE twin and a BLACK
twin. A link (u, p) ↔ (v, q) of the original network becomes two links,
white-u ↔ black-v and black-u ↔ white-v, on the same port numbers. The
doubled network is bipartite whatever the original looks like, so BMM
runs on it directly.

v is in the cover iff at least one of its twins ends up Matched. Every
original link u-v has a copy white-u ↔ black-v; maximality leaves one of
those two matched, so the result is always a cover.

Two equivalent ways to run it:
- vertex_cover(): build the doubled topology and run BMM on 2n nodes
- paired_vertex_cover(): keep the original topology and run both twins
  inside every node, each twin reading what the neighbour's opposite
  twin sent
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Sequence
import logging

from pnsim.core.engine import EngineConfig, RoundEngine
from pnsim.core.topology import Topology
from pnsim.algorithms.matching import (
    BipartiteMatching,
    Color,
    MatchingState,
    Signal,
    all_terminal,
    is_terminal,
    matched_port,
)

logger = logging.getLogger(__name__)


def bipartite_double_cover(topology: Topology) -> tuple[Topology, list[Color]]:
    """
    Build the doubled topology and its coloring.

    Node v < n is the white twin of v, node n + v its black twin.
    """
    n = topology.num_nodes
    white = [[(n + v, q) for v, q in topology[u]] for u in range(n)]
    black = [[(v, q) for v, q in topology[u]] for u in range(n)]
    return Topology(white + black), [Color.WHITE] * n + [Color.BLACK] * n


def cover_from_twins(
    white_states: Sequence[MatchingState],
    black_states: Sequence[MatchingState],
) -> frozenset[int]:
    """
    Original nodes with at least one Matched twin.

    Raises:
        PrematureInspectionError: a twin has not terminated
    """
    if len(white_states) != len(black_states):
        raise ValueError(
            f"{len(white_states)} white twins but {len(black_states)} black twins"
        )
    cover = set()
    for v, (w, b) in enumerate(zip(white_states, black_states)):
        # Both twins are inspected so neither can be read mid-run
        white, black = matched_port(w), matched_port(b)
        if white is not None or black is not None:
            cover.add(v)
    return frozenset(cover)


@dataclass
class VertexCoverResult:
    """Final outcome of a VC3 run."""

    cover: frozenset[int]
    rounds: int
    white_states: tuple = field(repr=False)
    black_states: tuple = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.cover)


def vertex_cover(topology: Topology, config: EngineConfig | None = None) -> VertexCoverResult:
    """Run VC3 on the bipartite double cover of `topology`."""
    n = topology.num_nodes
    doubled, colors = bipartite_double_cover(topology)
    engine = RoundEngine(doubled, BipartiteMatching(), colors, config or EngineConfig())
    rounds = engine.run_until(all_terminal)

    states = engine.states
    logger.debug("double cover of %d nodes terminated after %d rounds", n, rounds)
    return VertexCoverResult(
        cover=cover_from_twins(states[:n], states[n:]),
        rounds=rounds,
        white_states=states[:n],
        black_states=states[n:],
    )


# ═════════════════════════════════════════════════════════════════════
# Paired instances: no doubled topology
# ═════════════════════════════════════════════════════════════════════


class TwinState(NamedTuple):
    white: MatchingState
    black: MatchingState


class TwinMessage(NamedTuple):
    white: Signal | None  # Sent by the white twin
    black: Signal | None  # Sent by the black twin


def twins_terminal(states: Sequence[TwinState]) -> bool:
    """Termination predicate for paired runs."""
    return all(is_terminal(s.white) and is_terminal(s.black) for s in states)


def in_cover(state: TwinState) -> bool:
    """
    Whether a terminated node belongs to the cover.

    Raises:
        PrematureInspectionError: a twin has not terminated
    """
    white = matched_port(state.white)
    black = matched_port(state.black)
    return white is not None or black is not None


@dataclass(frozen=True)
class PairedVertexCover:
    """
    VC3 with both twins run by the same node.

    The inner BipartiteMatching never learns it is composed: outgoing
    halves are paired per port, and incoming pairs are split so the white
    twin hears the neighbour's black twin and vice versa. Node input is
    ignored.
    """

    matching: BipartiteMatching = field(default_factory=BipartiteMatching)

    def init(self, k: int, value: Any = None) -> TwinState:
        return TwinState(
            white=self.matching.init(k, Color.WHITE),
            black=self.matching.init(k, Color.BLACK),
        )

    def send(self, k: int, state: TwinState) -> list[TwinMessage]:
        white = self.matching.send(k, state.white)
        black = self.matching.send(k, state.black)
        return [TwinMessage(w, b) for w, b in zip(white, black)]

    def receive(self, state: TwinState, inbox: Sequence[TwinMessage]) -> TwinState:
        return TwinState(
            white=self.matching.receive(state.white, [m.black for m in inbox]),
            black=self.matching.receive(state.black, [m.white for m in inbox]),
        )


def paired_vertex_cover(topology: Topology, config: EngineConfig | None = None) -> VertexCoverResult:
    """Run VC3 with paired twins on the original topology."""
    engine = RoundEngine(
        topology, PairedVertexCover(), [None] * topology.num_nodes, config or EngineConfig()
    )
    rounds = engine.run_until(twins_terminal)

    states = engine.states
    return VertexCoverResult(
        cover=frozenset(v for v, s in enumerate(states) if in_cover(s)),
        rounds=rounds,
        white_states=tuple(s.white for s in states),
        black_states=tuple(s.black for s in states),
    )
