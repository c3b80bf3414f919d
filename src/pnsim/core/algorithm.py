"""
Algorithms define the local state machine every node runs.

An algorithm is three pure functions, each given only what a node in the
port-numbering model can know: its own port count, its own state and the
messages on its own ports.

- init(k, input)        → initial state
- send(k, state)        → exactly k messages, one per port, in port order
- receive(state, inbox) → next state, inbox holding one message per port

No operation may depend on a global round number. Algorithms that need
phases keep their own counter inside the state.
"""

from __future__ import annotations
from typing import Protocol, Sequence, TypeVar

InputT = TypeVar("InputT")
StateT = TypeVar("StateT")
MsgT = TypeVar("MsgT")


class Algorithm(Protocol[InputT, StateT, MsgT]):
    """Protocol for PN algorithms driven by the RoundEngine."""

    def init(self, k: int, value: InputT) -> StateT:
        """
        Create the initial state of a node with k ports.

        Args:
            k: Port count of the node
            value: Algorithm-specific input for this node

        Returns:
            The node's state before round 1
        """
        ...

    def send(self, k: int, state: StateT) -> Sequence[MsgT]:
        """
        Compute the messages a node emits this round.

        Must return exactly k messages; message i leaves through port i.
        """
        ...

    def receive(self, state: StateT, inbox: Sequence[MsgT]) -> StateT:
        """
        Fold this round's inbox into a new state.

        inbox[i] is the message that arrived on port i. The returned value
        replaces the old state wholesale.
        """
        ...
