"""
Network drawings of topologies and algorithm outcomes.

Nodes are placed with a networkx layout and drawn with plain matplotlib,
so parallel links and port labels stay visible:
- plot_topology: nodes, links and (optionally) port numbers
- plot_matching: matched links highlighted, node fill by outcome
- plot_cover: cover members highlighted, uncovered links in red
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

import numpy as np
import networkx as nx
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from pnsim.algorithms.matching import Matched, Unselected

if TYPE_CHECKING:
    from pnsim.core.topology import Topology


COLOR_NODE = "#4c72b0"
COLOR_MATCHED = "#dd8452"
COLOR_UNSELECTED = "#bbbbbb"
COLOR_PENDING = "#8172b3"
COLOR_COVER = "#c44e52"
COLOR_EDGE = "#555555"


def layout_positions(
    topology: "Topology",
    layout: str = "circular",
    seed: int = 0,
) -> dict[int, np.ndarray]:
    """
    Node positions for drawing.

    Args:
        topology: Network to lay out
        layout: "circular", "spring" or "kamada_kawai"
        seed: Seed for the spring layout

    Returns:
        {node: array([x, y])}
    """
    graph = nx.Graph()
    graph.add_nodes_from(range(topology.num_nodes))
    graph.add_edges_from((a.node, b.node) for a, b in topology.edges())

    if layout == "circular":
        return nx.circular_layout(graph)
    elif layout == "spring":
        return nx.spring_layout(graph, seed=seed)
    elif layout == "kamada_kawai":
        return nx.kamada_kawai_layout(graph)
    else:
        raise ValueError(f"Unknown layout: {layout}")


def plot_topology(
    topology: "Topology",
    title: str = "Topology",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (6, 6),
    layout: str = "circular",
    node_colors: Sequence[str] | None = None,
    edge_colors: dict[tuple[int, int], str] | None = None,
    show_ports: bool = True,
) -> tuple[Figure, Axes]:
    """
    Draw a port-numbered network.

    Args:
        topology: Network to draw
        title: Plot title
        ax: Existing axes (creates new if None)
        layout: Node layout, see layout_positions
        node_colors: One color per node
        edge_colors: Color per link, keyed by (node, port) of either endpoint
        show_ports: Write port numbers next to each link end

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    pos = layout_positions(topology, layout)
    edge_colors = edge_colors or {}
    if node_colors is None:
        node_colors = [COLOR_NODE] * topology.num_nodes

    for a, b in topology.edges():
        color = edge_colors.get(tuple(a), edge_colors.get(tuple(b), COLOR_EDGE))
        width = 3.0 if color != COLOR_EDGE else 1.2
        pa, pb = pos[a.node], pos[b.node]
        if a.node == b.node:
            ax.add_patch(plt.Circle(pa + [0.0, 0.08], 0.08, fill=False, color=color, lw=width))
        else:
            ax.plot([pa[0], pb[0]], [pa[1], pb[1]], color=color, linewidth=width, zorder=1)

        if show_ports:
            for (node, port), other in ((a, pb), (b, pa)):
                here = pos[node]
                label_at = here + 0.18 * (other - here)
                ax.text(label_at[0], label_at[1], str(port), fontsize=8,
                        ha="center", va="center", zorder=3)

    xy = np.array([pos[v] for v in range(topology.num_nodes)]).reshape(-1, 2)
    ax.scatter(xy[:, 0], xy[:, 1], s=400, c=list(node_colors),
               edgecolors="black", linewidths=1.0, zorder=2)
    for v, (x, y) in enumerate(xy):
        ax.text(x, y, str(v), color="white", fontsize=10,
                ha="center", va="center", zorder=4)

    ax.set_title(title)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig, ax


def plot_matching(
    topology: "Topology",
    states: Sequence[object],
    title: str = "Matching",
    ax: Axes | None = None,
    **kwargs,
) -> tuple[Figure, Axes]:
    """
    Draw BMM states: matched links thick, nodes colored by outcome.

    States need not be terminal; nodes still running are drawn in
    COLOR_PENDING.
    """
    node_colors = []
    edge_colors = {}
    for v, state in enumerate(states):
        if isinstance(state, Matched):
            node_colors.append(COLOR_MATCHED)
            edge_colors[(v, state.port)] = COLOR_MATCHED
        elif isinstance(state, Unselected):
            node_colors.append(COLOR_UNSELECTED)
        else:
            node_colors.append(COLOR_PENDING)

    return plot_topology(
        topology, title=title, ax=ax,
        node_colors=node_colors, edge_colors=edge_colors, **kwargs,
    )


def plot_cover(
    topology: "Topology",
    cover: Iterable[int],
    title: str = "Vertex Cover",
    ax: Axes | None = None,
    **kwargs,
) -> tuple[Figure, Axes]:
    """Draw a vertex cover; links it misses are drawn red."""
    cover = set(cover)
    node_colors = [COLOR_COVER if v in cover else COLOR_UNSELECTED
                   for v in range(topology.num_nodes)]
    edge_colors = {
        tuple(a): "red"
        for a, b in topology.edges()
        if a.node not in cover and b.node not in cover
    }
    return plot_topology(
        topology, title=f"{title} (size {len(cover)})", ax=ax,
        node_colors=node_colors, edge_colors=edge_colors, **kwargs,
    )


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
