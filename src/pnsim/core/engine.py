"""
Round Engine: lock-step execution of a PN algorithm over a topology.

Each round:
1. Every node computes send() from its current state
2. Every message is scattered into the inbox slot its port is wired to
3. Every inbox slot must be filled exactly once
4. Every node computes receive() and its state is replaced

Steps 1-2 finish for ALL nodes before step 4 starts for ANY node, so a
node's round-r messages only ever depend on round-(r-1) states.

The engine has no notion of termination. Callers stop it with a
predicate (run_until) or a round count (run).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Any, Callable, NoReturn, Sequence

from pnsim.core.algorithm import Algorithm
from pnsim.core.errors import (
    ContractViolation,
    DuplicateDeliveryError,
    MessageCountError,
    MissingDeliveryError,
    RoundLimitExceeded,
)
from pnsim.core.topology import Topology

logger = logging.getLogger(__name__)

# Marks an inbox slot nobody has written yet; messages themselves may be None
_EMPTY = object()


@dataclass
class EngineConfig:
    """Configuration for the round engine."""

    validate_topology: bool = False  # Check link symmetry up front
    record_history: bool = False     # Keep the state vector of every round
    max_rounds: int = 10_000         # Default bound for run_until


@dataclass(frozen=True)
class RoundStats:
    """
    Message accounting for one round.

    The three counts are taken at different stages (send, scatter,
    receive). A round that completes has all three equal to the number
    of port slots, since the delivery checks abort any round where they
    would differ. is_conserved() is meant for stats from other sources.
    """

    round: int
    messages_sent: int
    slots_filled: int
    messages_delivered: int


@dataclass
class RoundEngine:
    """
    Drives an algorithm over a topology one synchronous round at a time.

    States are opaque to the engine. They are created once from `inputs`
    and replaced wholesale by receive() every round.
    """

    topology: Topology
    algorithm: Algorithm
    inputs: Sequence[Any]
    config: EngineConfig = field(default_factory=EngineConfig)

    round: int = field(default=0, init=False)
    stats: list[RoundStats] = field(default_factory=list, init=False)
    history: list[tuple] = field(default_factory=list, init=False)
    _states: list = field(default=None, init=False, repr=False)

    def __post_init__(self):
        n = self.topology.num_nodes
        if len(self.inputs) != n:
            raise ValueError(
                f"got {len(self.inputs)} inputs for a topology with {n} nodes"
            )
        if self.config.validate_topology:
            self.topology.validate()

        self._states = [
            self.algorithm.init(self.topology.port_count(v), value)
            for v, value in enumerate(self.inputs)
        ]
        if self.config.record_history:
            self.history.append(tuple(self._states))

    @property
    def states(self) -> tuple:
        """Snapshot of the current state of every node."""
        return tuple(self._states)

    def step(self) -> RoundStats:
        """
        Execute one synchronous round.

        Raises:
            MessageCountError: a node sent the wrong number of messages
            DuplicateDeliveryError: two ports are wired to the same slot
            MissingDeliveryError: a slot received nothing

        Returns:
            Message accounting for the round
        """
        topo = self.topology
        inboxes = [[_EMPTY] * topo.port_count(v) for v in range(topo.num_nodes)]
        sent = 0

        # Gather and scatter: all sends use the previous round's states
        for u, state in enumerate(self._states):
            k = topo.port_count(u)
            outgoing = list(self.algorithm.send(k, state))
            if len(outgoing) != k:
                self._abort(MessageCountError(
                    f"node {u} sent {len(outgoing)} messages but has {k} ports",
                    node=u,
                ))
            for p, message in enumerate(outgoing):
                v, q = topo.address(u, p)
                if inboxes[v][q] is not _EMPTY:
                    self._abort(DuplicateDeliveryError(
                        f"inbox slot (node {v}, port {q}) written twice; "
                        f"second write came from (node {u}, port {p})",
                        node=v, port=q,
                    ))
                inboxes[v][q] = message
                sent += 1

        # Unreachable once the two checks above pass: every port wrote one
        # distinct slot and there are as many ports as slots
        filled = 0
        for v, inbox in enumerate(inboxes):
            for q, message in enumerate(inbox):
                if message is _EMPTY:
                    self._abort(MissingDeliveryError(
                        f"inbox slot (node {v}, port {q}) is empty: no port is wired to it",
                        node=v, port=q,
                    ))
                filled += 1

        # Deliver
        delivered = 0
        new_states = []
        for state, inbox in zip(self._states, inboxes):
            new_states.append(self.algorithm.receive(state, tuple(inbox)))
            delivered += len(inbox)

        self._states = new_states
        self.round += 1

        round_stats = RoundStats(
            round=self.round,
            messages_sent=sent,
            slots_filled=filled,
            messages_delivered=delivered,
        )
        self.stats.append(round_stats)
        if self.config.record_history:
            self.history.append(tuple(new_states))

        logger.debug("round %d complete: %d messages delivered", self.round, delivered)
        return round_stats

    def run(self, n_rounds: int) -> dict:
        """Run exactly n_rounds rounds."""
        for _ in range(n_rounds):
            self.step()

        return {
            "n_rounds": n_rounds,
            "current_round": self.round,
            "total_messages": sum(s.messages_delivered for s in self.stats),
        }

    def run_until(
        self,
        predicate: Callable[[tuple], bool],
        max_rounds: int | None = None,
    ) -> int:
        """
        Step until predicate(states) holds.

        The predicate is checked before every round, so a run that already
        satisfies it executes no rounds.

        Args:
            predicate: Termination test over the full state vector
            max_rounds: Bound on rounds executed by this call
                        (defaults to config.max_rounds)

        Returns:
            Number of rounds executed by this call

        Raises:
            RoundLimitExceeded: the bound was hit first
        """
        if max_rounds is None:
            max_rounds = self.config.max_rounds

        executed = 0
        while not predicate(self.states):
            if executed >= max_rounds:
                raise RoundLimitExceeded(
                    f"predicate still false after {executed} rounds", rounds=executed
                )
            self.step()
            executed += 1

        logger.info("terminated after %d rounds (total %d)", executed, self.round)
        return executed

    def _abort(self, error: ContractViolation) -> NoReturn:
        logger.error("round %d aborted: %s", self.round + 1, error)
        raise error
