"""
Validity and maximality of a terminated BMM run.

This is NOT seen by the engine. It reads final states and the topology
from outside and reports what it finds.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from pnsim.core.topology import Address
from pnsim.algorithms.matching import MatchingState, matched_port

if TYPE_CHECKING:
    from pnsim.core.topology import Topology


@dataclass
class MatchingReport:
    """What check_matching() found."""

    size: int
    inconsistent: list[Address] = field(default_factory=list)  # Matched to a node not matched back
    unmatched_links: list[tuple[Address, Address]] = field(default_factory=list)  # Could still grow

    @property
    def valid(self) -> bool:
        return not self.inconsistent

    @property
    def maximal(self) -> bool:
        return not self.unmatched_links


def check_matching(topology: "Topology", states: Sequence[MatchingState]) -> MatchingReport:
    """
    Check the matching defined by terminated states.

    Valid: whenever (A, p) is Matched, the node at the other end of p is
    Matched on the very port that leads back to A.
    Maximal: no link joins two Unselected nodes. Self-loops are ignored.

    Raises:
        PrematureInspectionError: some node has not terminated
    """
    ports = [matched_port(s) for s in states]

    inconsistent = []
    size = 0
    for a, p in enumerate(ports):
        if p is None:
            continue
        b, q = topology.address(a, p)
        if ports[b] != q:
            inconsistent.append(Address(a, p))
        elif Address(a, p) <= Address(b, q):
            size += 1

    unmatched_links = [
        (x, y) for x, y in topology.edges()
        if x.node != y.node and ports[x.node] is None and ports[y.node] is None
    ]

    return MatchingReport(size=size, inconsistent=inconsistent, unmatched_links=unmatched_links)
