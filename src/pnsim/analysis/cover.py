"""
Reference quantities for judging a vertex cover.

- is_vertex_cover / uncovered_edges: validity of a node set
- minimum_vertex_cover_size: exact optimum by enumeration (small graphs)
- maximum_matching_size: ν(G) of the original graph (networkx)
- maximum_bipartite_matching_size: ν of a two-colored graph (scipy)
"""

from __future__ import annotations
from itertools import combinations
from typing import TYPE_CHECKING, Iterable, Sequence

import numpy as np
import networkx as nx
from scipy.sparse.csgraph import maximum_bipartite_matching

from pnsim.algorithms.matching import Color

if TYPE_CHECKING:
    from pnsim.core.topology import Topology

# Enumeration is 2^n; refuse anything bigger
MAX_EXHAUSTIVE_NODES = 20


def _endpoints(topology: "Topology") -> tuple[np.ndarray, np.ndarray]:
    """Arrays of the two endpoint nodes of every link."""
    edges = topology.edges()
    us = np.array([a.node for a, _ in edges], dtype=np.int64)
    vs = np.array([b.node for _, b in edges], dtype=np.int64)
    return us, vs


def _selected_mask(n: int, cover: Iterable[int]) -> np.ndarray:
    mask = np.zeros(n, dtype=bool)
    mask[np.asarray(list(cover), dtype=np.int64)] = True
    return mask


def uncovered_edges(topology: "Topology", cover: Iterable[int]) -> list[tuple[int, int]]:
    """Links with neither endpoint in `cover`."""
    us, vs = _endpoints(topology)
    mask = _selected_mask(topology.num_nodes, cover)
    missing = ~(mask[us] | mask[vs])
    return [(int(u), int(v)) for u, v in zip(us[missing], vs[missing])]


def is_vertex_cover(topology: "Topology", cover: Iterable[int]) -> bool:
    """True if every link has at least one endpoint in `cover`."""
    return not uncovered_edges(topology, cover)


def minimum_vertex_cover_size(topology: "Topology") -> int:
    """
    Size of a minimum vertex cover, by trying all node sets smallest first.

    Raises:
        ValueError: more than MAX_EXHAUSTIVE_NODES nodes
    """
    n = topology.num_nodes
    if n > MAX_EXHAUSTIVE_NODES:
        raise ValueError(f"exhaustive search limited to {MAX_EXHAUSTIVE_NODES} nodes, got {n}")

    us, vs = _endpoints(topology)
    for size in range(n + 1):
        for subset in combinations(range(n), size):
            mask = _selected_mask(n, subset)
            if np.all(mask[us] | mask[vs]):
                return size
    return n


def maximum_matching_size(topology: "Topology") -> int:
    """Maximum matching size ν(G) of the original graph; self-loops ignored."""
    graph = nx.Graph()
    graph.add_nodes_from(range(topology.num_nodes))
    graph.add_edges_from((a.node, b.node) for a, b in topology.edges() if a.node != b.node)
    return len(nx.max_weight_matching(graph, maxcardinality=True))


def maximum_bipartite_matching_size(topology: "Topology", colors: Sequence[Color]) -> int:
    """
    Maximum matching size of a WHITE/BLACK colored topology.

    Only WHITE-BLACK links are considered.
    """
    is_white = np.array([c is Color.WHITE for c in colors], dtype=bool)
    white = np.flatnonzero(is_white)
    black = np.flatnonzero(~is_white)
    if len(white) == 0 or len(black) == 0:
        return 0

    adjacency = topology.adjacency_matrix()
    biadjacency = adjacency[white][:, black]
    biadjacency.data[:] = 1
    matches = maximum_bipartite_matching(biadjacency, perm_type="column")
    return int(np.count_nonzero(matches >= 0))
