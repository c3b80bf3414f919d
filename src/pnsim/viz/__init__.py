"""
Visualization utilities.

- Network drawings (topology, matching, cover)
- Round statistics and termination profiles
"""

from pnsim.viz.network import (
    layout_positions,
    plot_topology,
    plot_matching,
    plot_cover,
    save_figure,
)
from pnsim.viz.rounds import plot_round_stats, plot_termination

__all__ = [
    "layout_positions",
    "plot_topology",
    "plot_matching",
    "plot_cover",
    "save_figure",
    "plot_round_stats",
    "plot_termination",
]
