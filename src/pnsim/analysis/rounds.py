"""
Per-round accounting derived from engine stats and history.
"""

from __future__ import annotations
from typing import Callable, Sequence

import numpy as np

from pnsim.core.engine import RoundStats


def message_counts(stats: Sequence[RoundStats]) -> np.ndarray:
    """
    Stack round stats into an array.

    Returns:
        [n_rounds, 3] int array of (sent, slots filled, delivered)
    """
    if not stats:
        return np.zeros((0, 3), dtype=np.int64)
    return np.array(
        [(s.messages_sent, s.slots_filled, s.messages_delivered) for s in stats],
        dtype=np.int64,
    )


def is_conserved(stats: Sequence[RoundStats]) -> bool:
    """
    True if every round sent, filled and delivered the same number of messages.

    Always true for stats the RoundEngine produced; it aborts a
    non-conserving round before recording it.
    """
    counts = message_counts(stats)
    return bool(np.all(counts == counts[:, :1]))


def termination_rounds(
    history: Sequence[tuple],
    is_done: Callable[[object], bool],
) -> np.ndarray:
    """
    First round in which each node satisfies `is_done`.

    Args:
        history: engine.history (index 0 is the initial state vector)
        is_done: Per-node termination test

    Returns:
        int array, one entry per node; -1 where the node never got there
    """
    if not history:
        return np.zeros(0, dtype=np.int64)

    done = np.array([[is_done(s) for s in states] for states in history], dtype=bool)
    first = np.argmax(done, axis=0)
    return np.where(done.any(axis=0), first, -1).astype(np.int64)
