"""
Round-by-round plots: message traffic and when nodes terminate.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from pnsim.core.engine import RoundStats
from pnsim.analysis.rounds import message_counts


def plot_round_stats(
    stats: Sequence[RoundStats],
    title: str = "Messages per Round",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 4),
) -> tuple[Figure, Axes]:
    """Plot sent and delivered message counts against round number."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    counts = message_counts(stats)
    rounds = np.array([s.round for s in stats], dtype=np.int64)

    ax.plot(rounds, counts[:, 0], "o-", label="sent", linewidth=2)
    ax.plot(rounds, counts[:, 2], "x--", label="delivered", linewidth=1)

    ax.set_title(title)
    ax.set_xlabel("Round")
    ax.set_ylabel("Messages")
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)

    return fig, ax


def plot_termination(
    first_round: np.ndarray,
    title: str = "Termination Round per Node",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 4),
) -> tuple[Figure, Axes]:
    """
    Bar chart of the round each node terminated in.

    Args:
        first_round: Output of analysis.termination_rounds (-1 = never)
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    nodes = np.arange(len(first_round))
    done = first_round >= 0
    ax.bar(nodes[done], first_round[done], color="#4c72b0", label="terminated")
    if np.any(~done):
        top = first_round.max() + 1 if np.any(done) else 1
        ax.bar(nodes[~done], np.full(np.count_nonzero(~done), top),
               color="#c44e52", alpha=0.4, label="still running")

    ax.set_title(title)
    ax.set_xlabel("Node")
    ax.set_ylabel("Round")
    ax.legend(loc="upper right")

    return fig, ax
