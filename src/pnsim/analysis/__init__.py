"""
Analysis layer: derived checks for validation and comparison.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- check_matching: validity and maximality of BMM results
- is_vertex_cover / minimum_vertex_cover_size: judge VC3 covers
- maximum_matching_size / maximum_bipartite_matching_size: reference optima
- message_counts / is_conserved / termination_rounds: round accounting
"""

from pnsim.analysis.matching import MatchingReport, check_matching
from pnsim.analysis.cover import (
    is_vertex_cover,
    uncovered_edges,
    minimum_vertex_cover_size,
    maximum_matching_size,
    maximum_bipartite_matching_size,
)
from pnsim.analysis.rounds import message_counts, is_conserved, termination_rounds

__all__ = [
    "MatchingReport",
    "check_matching",
    "is_vertex_cover",
    "uncovered_edges",
    "minimum_vertex_cover_size",
    "maximum_matching_size",
    "maximum_bipartite_matching_size",
    "message_counts",
    "is_conserved",
    "termination_rounds",
]
