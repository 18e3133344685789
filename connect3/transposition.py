"""
Transposition table for the exact solvers.

Entries are kept in insertion order and the oldest one is dropped once the
table reaches `max_entries` (FIFO). Re-storing an existing key replaces its
entry in place without moving it in the eviction order.

Scores that encode "win/loss in N plies" depend on how deep the position sat
in the tree when it was searched. `to_table_value`/`from_table_value` convert
them to a depth-independent form so one entry serves every caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, Optional


class Bound(Enum):
    EXACT = 0  # searched with an open window
    LOWER = 1  # fail-high: true value >= stored value
    UPPER = 2  # fail-low: true value <= stored value


@dataclass
class TTEntry:
    value: int
    bound: Bound
    best_move: Optional[int] = None


def to_table_value(value: int, depth: int, threshold: int) -> int:
    if value > threshold:
        return value + depth
    if value < -threshold:
        return value - depth
    return value


def from_table_value(value: int, depth: int, threshold: int) -> int:
    if value > threshold:
        return value - depth
    if value < -threshold:
        return value + depth
    return value


def classify_bound(value: int, alpha: int, beta: int) -> Bound:
    if value <= alpha:
        return Bound.UPPER
    if value >= beta:
        return Bound.LOWER
    return Bound.EXACT


class TranspositionTable:
    def __init__(self, max_entries: int = 1_000_000) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self._entries: Dict[Hashable, TTEntry] = {}
        self.hits = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable) -> Optional[TTEntry]:
        entry = self._entries.get(key)
        if entry is not None:
            self.hits += 1
        return entry

    def store(self, key: Hashable, value: int, bound: Bound, best_move: Optional[int] = None) -> None:
        if key not in self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]
            self.evictions += 1
        self._entries[key] = TTEntry(value=value, bound=bound, best_move=best_move)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.evictions = 0
