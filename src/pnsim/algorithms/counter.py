"""
Counter: a single token walking through the network.

The node holding the token forwards it on every port except the one it
arrived on. A node that receives it keeps the copy from its lowest port
and counts how many times it has taken the token. On a ring this moves
the token exactly one hop per round.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple, Sequence


class CounterState(NamedTuple):
    """Per-node counter state."""

    count: int    # Times this node has taken the token
    port: int     # Port the token last arrived on
    holding: bool


@dataclass(frozen=True)
class Counter:
    """Token-passing algorithm; input is True for the initial holder."""

    def init(self, k: int, value: bool) -> CounterState:
        return CounterState(count=0, port=0, holding=bool(value))

    def send(self, k: int, state: CounterState) -> list[bool]:
        return [state.holding and p != state.port for p in range(k)]

    def receive(self, state: CounterState, inbox: Sequence[bool]) -> CounterState:
        for port, token in enumerate(inbox):
            if token:
                return CounterState(count=state.count + 1, port=port, holding=True)
        return CounterState(count=state.count, port=state.port, holding=False)


def token_holders(states: Sequence[CounterState]) -> list[int]:
    """Nodes currently holding a token."""
    return [v for v, s in enumerate(states) if s.holding]
