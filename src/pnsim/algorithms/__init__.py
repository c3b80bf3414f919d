"""
Algorithms: concrete PN state machines run by the RoundEngine.

- Counter: a token forwarded one hop per round
- BipartiteMatching: maximal matching on a WHITE/BLACK colored network
- PairedVertexCover / vertex_cover: 3-approximate vertex cover through
  the bipartite double cover
"""

from pnsim.algorithms.counter import Counter, CounterState, token_holders
from pnsim.algorithms.matching import (
    Color,
    Signal,
    UnmatchedWhite,
    UnmatchedBlack,
    ProvisionallyMatched,
    Unselected,
    Matched,
    BipartiteMatching,
    MatchingResult,
    is_terminal,
    all_terminal,
    matched_port,
    matching_edges,
    two_coloring,
    run_bipartite_matching,
)
from pnsim.algorithms.vertex_cover import (
    TwinState,
    TwinMessage,
    PairedVertexCover,
    VertexCoverResult,
    bipartite_double_cover,
    cover_from_twins,
    in_cover,
    twins_terminal,
    vertex_cover,
    paired_vertex_cover,
)

__all__ = [
    "Counter",
    "CounterState",
    "token_holders",
    "Color",
    "Signal",
    "UnmatchedWhite",
    "UnmatchedBlack",
    "ProvisionallyMatched",
    "Unselected",
    "Matched",
    "BipartiteMatching",
    "MatchingResult",
    "is_terminal",
    "all_terminal",
    "matched_port",
    "matching_edges",
    "two_coloring",
    "run_bipartite_matching",
    # Vertex cover
    "TwinState",
    "TwinMessage",
    "PairedVertexCover",
    "VertexCoverResult",
    "bipartite_double_cover",
    "cover_from_twins",
    "in_cover",
    "twins_terminal",
    "vertex_cover",
    "paired_vertex_cover",
]
