"""
Bipartite maximal matching (BMM) by proposals.

Precondition: every node is colored WHITE or BLACK and every link joins
two different colors. The algorithm does not check this; running it on
a badly colored network gives no guarantee about the result.

Phases alternate on each node's own round counter k (starting at 1):

- Odd k:  unmatched white nodes propose on port (k-1)//2, cycling
          through their ports one per two rounds. A white node with no
          port left becomes Unselected. Unmatched black nodes collect
          proposals and drop ports whose neighbour announced Matched.
- Even k: an unmatched black node with proposers accepts the one on its
          smallest port. A black node with no candidate left becomes
          Unselected. A white node that got an Accept is provisionally
          matched.

A provisionally matched node announces Matched on all ports for one
round and then settles into Matched. Matched and Unselected never change.
All nodes terminate within 2·Δ + 2 rounds, Δ the maximum port count.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Union
import logging

import networkx as nx

from pnsim.core.engine import EngineConfig, RoundEngine
from pnsim.core.errors import PrematureInspectionError, TopologyError
from pnsim.core.topology import Address, Topology

logger = logging.getLogger(__name__)


class Color(Enum):
    WHITE = "white"
    BLACK = "black"


class Signal(Enum):
    """Messages of the matching protocol. Silence on a port is None."""

    PROPOSAL = "proposal"
    ACCEPT = "accept"
    MATCHED = "matched"


# ═════════════════════════════════════════════════════════════════════
# States
# ═════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class UnmatchedWhite:
    round: int = 1


@dataclass(frozen=True)
class UnmatchedBlack:
    round: int = 1
    proposers: frozenset[int] = frozenset()   # Ports that proposed this phase
    candidates: frozenset[int] = frozenset()  # Ports that may still propose


@dataclass(frozen=True)
class ProvisionallyMatched:
    port: int


@dataclass(frozen=True)
class Unselected:
    pass


@dataclass(frozen=True)
class Matched:
    port: int


MatchingState = Union[UnmatchedWhite, UnmatchedBlack, ProvisionallyMatched, Unselected, Matched]


def is_terminal(state: MatchingState) -> bool:
    """True once a node is Matched or Unselected for good."""
    return isinstance(state, (Matched, Unselected))


def all_terminal(states: Sequence[MatchingState]) -> bool:
    """Termination predicate for a whole run."""
    return all(is_terminal(s) for s in states)


def matched_port(state: MatchingState) -> int | None:
    """
    Port a terminated node is matched on, or None if it is Unselected.

    Raises:
        PrematureInspectionError: the node has not terminated yet
    """
    if isinstance(state, Matched):
        return state.port
    if isinstance(state, Unselected):
        return None
    raise PrematureInspectionError(f"node has not terminated yet: {state!r}")


# ═════════════════════════════════════════════════════════════════════
# Algorithm
# ═════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class BipartiteMatching:
    """BMM as a PN algorithm; the input of each node is its Color."""

    def init(self, k: int, color: Color) -> MatchingState:
        if color is Color.WHITE:
            return UnmatchedWhite(round=1)
        if color is Color.BLACK:
            return UnmatchedBlack(round=1, candidates=frozenset(range(k)))
        raise ValueError(f"expected a Color, got {color!r}")

    def send(self, k: int, state: MatchingState) -> list[Signal | None]:
        silent: list[Signal | None] = [None] * k

        if isinstance(state, UnmatchedWhite):
            target = (state.round - 1) // 2
            if state.round % 2 == 1 and target < k:
                silent[target] = Signal.PROPOSAL
            return silent

        if isinstance(state, UnmatchedBlack):
            if state.round % 2 == 0 and state.proposers:
                silent[min(state.proposers)] = Signal.ACCEPT
            return silent

        if isinstance(state, (ProvisionallyMatched, Matched)):
            return [Signal.MATCHED] * k

        return silent

    def receive(self, state: MatchingState, inbox: Sequence[Signal | None]) -> MatchingState:
        if isinstance(state, UnmatchedWhite):
            return self._receive_white(state, inbox)
        if isinstance(state, UnmatchedBlack):
            return self._receive_black(state, inbox)
        if isinstance(state, ProvisionallyMatched):
            return Matched(state.port)
        return state

    def _receive_white(self, state: UnmatchedWhite, inbox: Sequence[Signal | None]) -> MatchingState:
        if state.round % 2 == 1:
            if (state.round - 1) // 2 >= len(inbox):
                return Unselected()
            return UnmatchedWhite(round=state.round + 1)

        for port, signal in enumerate(inbox):
            if signal is Signal.ACCEPT:
                return ProvisionallyMatched(port)
        return UnmatchedWhite(round=state.round + 1)

    def _receive_black(self, state: UnmatchedBlack, inbox: Sequence[Signal | None]) -> MatchingState:
        if state.round % 2 == 1:
            proposed = {p for p, signal in enumerate(inbox) if signal is Signal.PROPOSAL}
            taken = {p for p, signal in enumerate(inbox) if signal is Signal.MATCHED}
            return UnmatchedBlack(
                round=state.round + 1,
                proposers=state.proposers | proposed,
                candidates=state.candidates - taken,
            )

        if state.proposers:
            return ProvisionallyMatched(min(state.proposers))
        if not state.candidates:
            return Unselected()
        return UnmatchedBlack(
            round=state.round + 1,
            proposers=frozenset(),
            candidates=state.candidates,
        )


# ═════════════════════════════════════════════════════════════════════
# Driving and reading results
# ═════════════════════════════════════════════════════════════════════


def matching_edges(topology: Topology, states: Sequence[MatchingState]) -> list[tuple[Address, Address]]:
    """
    Matched links, each once, as (endpoint, endpoint) with the smaller first.

    Raises:
        PrematureInspectionError: some node has not terminated
    """
    edges = []
    for v, state in enumerate(states):
        port = matched_port(state)
        if port is None:
            continue
        local = Address(v, port)
        remote = topology.address(v, port)
        if local <= remote:
            edges.append((local, remote))
    return edges


def two_coloring(topology: Topology) -> list[Color]:
    """
    A proper WHITE/BLACK coloring of a bipartite topology.

    Raises:
        TopologyError: the topology is not bipartite
    """
    graph = topology.to_networkx()
    try:
        sides = nx.bipartite.color(graph)
    except nx.NetworkXError as exc:
        raise TopologyError(f"topology is not two-colorable: {exc}") from exc
    return [Color.WHITE if sides[v] == 1 else Color.BLACK for v in range(topology.num_nodes)]


@dataclass
class MatchingResult:
    """Final outcome of a BMM run."""

    states: tuple
    rounds: int
    edges: list[tuple[Address, Address]] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.edges)


def run_bipartite_matching(
    topology: Topology,
    colors: Sequence[Color] | None = None,
    config: EngineConfig | None = None,
) -> MatchingResult:
    """
    Run BMM to its fixed point.

    Args:
        topology: Network to match on
        colors: Node colors; computed with two_coloring() if omitted
        config: Engine configuration

    Returns:
        MatchingResult with final states, rounds used and matched links
    """
    if colors is None:
        colors = two_coloring(topology)
    engine = RoundEngine(topology, BipartiteMatching(), list(colors), config or EngineConfig())
    rounds = engine.run_until(all_terminal)
    edges = matching_edges(topology, engine.states)
    logger.debug("BMM matched %d links in %d rounds", len(edges), rounds)
    return MatchingResult(states=engine.states, rounds=rounds, edges=edges)
