"""
Core engine primitives.

This layer knows NOTHING about matchings, covers or tokens.
It only knows:
- Nodes identified by index, each with ordered ports
- Which remote (node, port) each port is wired to
- Algorithms as init/send/receive over opaque states and messages
- Delivering every message exactly once per synchronous round
"""

from pnsim.core.topology import Address, Topology, ring, path, complete, star
from pnsim.core.algorithm import Algorithm
from pnsim.core.engine import RoundEngine, EngineConfig, RoundStats
from pnsim.core.errors import (
    PNSimError,
    TopologyError,
    ContractViolation,
    MessageCountError,
    DuplicateDeliveryError,
    MissingDeliveryError,
    PrematureInspectionError,
    RoundLimitExceeded,
)

__all__ = [
    "Address",
    "Topology",
    "ring",
    "path",
    "complete",
    "star",
    "Algorithm",
    "RoundEngine",
    "EngineConfig",
    "RoundStats",
    "PNSimError",
    "TopologyError",
    "ContractViolation",
    "MessageCountError",
    "DuplicateDeliveryError",
    "MissingDeliveryError",
    "PrematureInspectionError",
    "RoundLimitExceeded",
]
