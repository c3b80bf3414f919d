"""
Fatal errors raised by the engine and the result accessors.

None of these are recoverable: a contract violation means the topology is
malformed or the algorithm is buggy, and the run must stop.
"""

from __future__ import annotations


class PNSimError(Exception):
    """Base class for all simulator errors."""


class TopologyError(PNSimError):
    """A topology is not a valid set of bidirectional links."""

    def __init__(self, message: str, node: int | None = None, port: int | None = None):
        super().__init__(message)
        self.node = node
        self.port = port


class ContractViolation(PNSimError):
    """An algorithm or topology broke the round delivery contract."""

    def __init__(self, message: str, node: int, port: int | None = None):
        super().__init__(message)
        self.node = node
        self.port = port


class MessageCountError(ContractViolation):
    """send() returned a different number of messages than the node has ports."""


class DuplicateDeliveryError(ContractViolation):
    """Two senders targeted the same inbox slot in one round."""


class MissingDeliveryError(ContractViolation):
    """An inbox slot was still empty when receive() was about to run."""


class PrematureInspectionError(PNSimError):
    """A result was queried from a state that has not terminated yet."""


class RoundLimitExceeded(PNSimError):
    """run_until() reached its round bound before the predicate held."""

    def __init__(self, message: str, rounds: int):
        super().__init__(message)
        self.rounds = rounds
