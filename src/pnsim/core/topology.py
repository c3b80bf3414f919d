"""
Topology: the fixed port-addressed network an algorithm runs on.

A topology stores ONLY wiring:
- Nodes are indices 0..n-1
- Each node has an ordered list of ports
- Each port names exactly one remote endpoint (node, port)

Nodes never hold references to each other. All neighbor access goes
through index lookup in this immutable structure.
"""

from __future__ import annotations
from typing import Iterable, Iterator, NamedTuple, Sequence

import numpy as np
import networkx as nx
from scipy import sparse

from pnsim.core.errors import TopologyError


class Address(NamedTuple):
    """A specific endpoint: port `port` of node `node`."""

    node: int
    port: int


class Topology:
    """
    Immutable port-numbered network.

    ports[v][p] is the Address that node v's port p is wired to. For a real
    bidirectional link the wiring must be symmetric: if (u, p) → (v, q)
    then (v, q) → (u, p). Construction only checks that addresses are in
    range; call validate() to check symmetry as well.
    """

    def __init__(self, ports: Sequence[Sequence[tuple[int, int]]]):
        self._ports: tuple[tuple[Address, ...], ...] = tuple(
            tuple(Address(int(v), int(q)) for v, q in node_ports)
            for node_ports in ports
        )

        n = len(self._ports)
        for u, node_ports in enumerate(self._ports):
            for p, (v, q) in enumerate(node_ports):
                if not 0 <= v < n:
                    raise TopologyError(
                        f"node {u} port {p} points to unknown node {v}", node=u, port=p
                    )
                if not 0 <= q < len(self._ports[v]):
                    raise TopologyError(
                        f"node {u} port {p} points to missing port {q} of node {v}",
                        node=u, port=p,
                    )

    # ─────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def from_edges(cls, n_nodes: int, edges: Iterable[tuple[int, int]]) -> "Topology":
        """
        Build a topology from an undirected edge list.

        Ports are assigned in edge-list order: the i-th edge touching a node
        occupies that node's next free port. A self-loop (v, v) uses two
        ports of v wired to each other.
        """
        if n_nodes < 0:
            raise ValueError(f"n_nodes must be non-negative, got {n_nodes}")

        ports: list[list[tuple[int, int]]] = [[] for _ in range(n_nodes)]
        for u, v in edges:
            if not (0 <= u < n_nodes and 0 <= v < n_nodes):
                raise TopologyError(f"edge ({u}, {v}) references a node outside 0..{n_nodes - 1}")
            pu = len(ports[u])
            pv = pu + 1 if u == v else len(ports[v])
            ports[u].append((v, pv))
            ports[v].append((u, pu))
        return cls(ports)

    @classmethod
    def from_networkx(cls, graph: nx.Graph) -> "Topology":
        """
        Build a topology from a simple undirected networkx graph.

        Graph nodes are relabelled 0..n-1 in iteration order; each node's
        ports follow the sorted order of its neighbours' new indices.
        """
        if graph.is_directed():
            raise ValueError("port-numbered topologies need an undirected graph")
        if nx.number_of_selfloops(graph) > 0:
            raise ValueError("self-loops are not supported by from_networkx; use from_edges")

        index = {node: i for i, node in enumerate(graph.nodes)}
        neighbours = [
            sorted(index[w] for w in graph.neighbors(node)) for node in graph.nodes
        ]
        ports = [
            [(v, neighbours[v].index(u)) for v in neighbours[u]]
            for u in range(len(neighbours))
        ]
        return cls(ports)

    # ─────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────

    @property
    def num_nodes(self) -> int:
        return len(self._ports)

    def __len__(self) -> int:
        return len(self._ports)

    def __getitem__(self, node: int) -> tuple[Address, ...]:
        return self._ports[node]

    def __iter__(self) -> Iterator[tuple[Address, ...]]:
        return iter(self._ports)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Topology):
            return NotImplemented
        return self._ports == other._ports

    def __hash__(self) -> int:
        return hash(self._ports)

    def __repr__(self) -> str:
        return f"Topology(nodes={self.num_nodes}, edges={self.num_edges})"

    def port_count(self, node: int) -> int:
        """Number of ports of a node."""
        return len(self._ports[node])

    def degrees(self) -> np.ndarray:
        """Port counts of every node as an integer array."""
        return np.array([len(p) for p in self._ports], dtype=np.int64)

    def address(self, node: int, port: int) -> Address:
        """The remote endpoint wired to (node, port)."""
        return self._ports[node][port]

    def neighbor(self, node: int, port: int) -> int:
        """The node on the other end of (node, port)."""
        return self._ports[node][port].node

    def iter_ports(self) -> Iterator[tuple[Address, Address]]:
        """Iterate over all (local, remote) port pairs, one per directed port."""
        for u, node_ports in enumerate(self._ports):
            for p, remote in enumerate(node_ports):
                yield Address(u, p), remote

    def edges(self) -> list[tuple[Address, Address]]:
        """
        Each undirected link exactly once, as (endpoint, endpoint).

        The endpoint with the smaller (node, port) comes first.
        """
        return [(local, remote) for local, remote in self.iter_ports() if local <= remote]

    @property
    def num_edges(self) -> int:
        return len(self.edges())

    # ─────────────────────────────────────────────────────────────────
    # Validation
    # ─────────────────────────────────────────────────────────────────

    def asymmetric_ports(self) -> list[Address]:
        """All (node, port) whose remote endpoint does not point back."""
        return [
            local for local, remote in self.iter_ports()
            if self.address(*remote) != local
        ]

    def is_symmetric(self) -> bool:
        """True if every link is bidirectional."""
        return not self.asymmetric_ports()

    def validate(self) -> None:
        """Raise TopologyError naming the first asymmetric port, if any."""
        bad = self.asymmetric_ports()
        if bad:
            u, p = bad[0]
            v, q = self.address(u, p)
            back = self.address(v, q)
            raise TopologyError(
                f"link ({u}, {p}) -> ({v}, {q}) is not symmetric: "
                f"({v}, {q}) -> ({back.node}, {back.port})",
                node=u, port=p,
            )

    # ─────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────

    def adjacency_matrix(self) -> sparse.csr_matrix:
        """
        Sparse n×n link-count matrix.

        Entry (u, v) counts the ports of u wired to v, so parallel links and
        self-loops are kept.
        """
        n = self.num_nodes
        rows = [local.node for local, _ in self.iter_ports()]
        cols = [remote.node for _, remote in self.iter_ports()]
        data = np.ones(len(rows), dtype=np.int64)
        return sparse.csr_matrix((data, (rows, cols)), shape=(n, n))

    def to_networkx(self) -> nx.MultiGraph:
        """Export as a networkx MultiGraph; edge keys carry the port pair."""
        graph = nx.MultiGraph()
        graph.add_nodes_from(range(self.num_nodes))
        for a, b in self.edges():
            graph.add_edge(a.node, b.node, ports=(a, b))
        return graph


# ═════════════════════════════════════════════════════════════════════
# Standard topologies
# ═════════════════════════════════════════════════════════════════════


def ring(n: int) -> Topology:
    """
    Cycle of n nodes.

    Node i's port 0 leads back to node i-1 (arriving on its port 1) and
    port 1 leads forward to node i+1 (arriving on its port 0).
    """
    if n < 3:
        raise ValueError(f"a ring needs at least 3 nodes, got {n}")
    return Topology([[((i - 1) % n, 1), ((i + 1) % n, 0)] for i in range(n)])


def path(n: int) -> Topology:
    """Path 0 - 1 - ... - (n-1)."""
    if n < 1:
        raise ValueError(f"a path needs at least 1 node, got {n}")
    return Topology.from_edges(n, [(i, i + 1) for i in range(n - 1)])


def complete(n: int) -> Topology:
    """Complete graph K_n, ports in increasing neighbour order."""
    if n < 1:
        raise ValueError(f"a complete graph needs at least 1 node, got {n}")
    return Topology.from_networkx(nx.complete_graph(n))


def star(n_leaves: int) -> Topology:
    """Star with centre 0 and leaves 1..n_leaves."""
    if n_leaves < 0:
        raise ValueError(f"n_leaves must be non-negative, got {n_leaves}")
    return Topology.from_edges(n_leaves + 1, [(0, i) for i in range(1, n_leaves + 1)])
