"""
pnsim: Port-Numbering Model Simulator

A synchronous simulator for distributed algorithms in the port-numbering
(PN) model: anonymous nodes that only know their own ports, executing a
deterministic state machine in lock-step rounds.

Core concepts:
- A Topology wires each (node, port) to exactly one remote (node, port)
- An Algorithm maps input → state, state → outgoing messages, and
  (state, incoming messages) → new state
- The RoundEngine delivers every message of round r before any node
  receives, so nobody sees a peer's round-r state during round r

Bundled algorithms: a token Counter, bipartite maximal matching (BMM) and
the 3-approximate vertex cover built on it (VC3).
"""

__version__ = "0.1.0"
