"""
Connect-3 on a 5x5 grid with gravity: config, discs, board and errors.

The board is mutated in place. Search engines apply a move, recurse, and undo
it again, so `drop`/`undo` are O(1) and `undo` insists on strict reverse order.
Columns are 1-based at this API (1..width), matching what a player types.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Tuple

import numpy as np


class Connect3Error(Exception):
    """Base class for board errors."""


class InvalidColumn(Connect3Error, ValueError):
    """Column index outside 1..width."""


class ColumnFull(Connect3Error, ValueError):
    """Column has no free row left."""


class EngineMisuse(Connect3Error, RuntimeError):
    """Unpaired or out-of-order undo, or a non-disc dropped on the board."""


@dataclass(frozen=True)
class Connect3Config:
    width: int = 5
    height: int = 5
    k: int = 3

    def validate(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("width/height must be >= 1")
        if self.k < 2:
            raise ValueError("k must be >= 2")
        if self.k > max(self.width, self.height):
            raise ValueError("k must be <= max(width, height)")

    @property
    def center_column(self) -> int:
        return (self.width + 1) // 2


EMPTY = 0


class Disc(IntEnum):
    A = 1
    B = -1

    @property
    def opponent(self) -> "Disc":
        return Disc(-int(self))

    @property
    def symbol(self) -> str:
        return "X" if self is Disc.A else "O"


# (dr, dc) with rows counted from the top: horizontal, vertical, and both diagonals.
_DIRECTIONS = ((0, 1), (1, 0), (1, 1), (-1, 1))


class Board:
    def __init__(self, cfg: Connect3Config = Connect3Config()) -> None:
        cfg.validate()
        self.cfg = cfg
        self.grid = np.zeros((cfg.height, cfg.width), dtype=np.int8)  # row 0 is the top row
        self.heights = np.zeros((cfg.width,), dtype=np.int16)
        self._history: List[int] = []

    @classmethod
    def from_moves(
        cls,
        columns: Iterable[int],
        *,
        first: Disc = Disc.A,
        cfg: Connect3Config = Connect3Config(),
    ) -> "Board":
        """Replay 1-based columns, alternating colors starting with `first`."""
        board = cls(cfg)
        disc = first
        for column in columns:
            board.play(column, disc)
            disc = disc.opponent
        return board

    @property
    def history(self) -> Tuple[int, ...]:
        return tuple(self._history)

    @property
    def moves_played(self) -> int:
        return len(self._history)

    def is_valid_column(self, column: int) -> bool:
        return 1 <= column <= self.cfg.width

    def available_columns(self) -> List[int]:
        return [c + 1 for c in range(self.cfg.width) if self.heights[c] < self.cfg.height]

    def is_empty(self) -> bool:
        return not self._history

    def is_full(self) -> bool:
        return self.moves_played >= self.cfg.width * self.cfg.height

    def play(self, column: int, disc: Disc) -> int:
        """Drop `disc` into `column` and return the grid row it landed on."""
        if disc not in (Disc.A, Disc.B):
            raise EngineMisuse(f"cannot drop {disc!r}")
        if not self.is_valid_column(column):
            raise InvalidColumn(f"column {column} out of range 1..{self.cfg.width}")
        c = column - 1
        filled = int(self.heights[c])
        if filled >= self.cfg.height:
            raise ColumnFull(f"column {column} is full")

        row = self.cfg.height - 1 - filled
        self.grid[row, c] = int(disc)
        self.heights[c] = filled + 1
        self._history.append(column)
        return row

    def drop(self, column: int, disc: Disc) -> bool:
        try:
            self.play(column, disc)
        except (InvalidColumn, ColumnFull):
            return False
        return True

    def undo(self, column: int) -> None:
        if not self.is_valid_column(column):
            raise EngineMisuse(f"undo on column {column} out of range")
        c = column - 1
        filled = int(self.heights[c])
        if filled == 0:
            raise EngineMisuse(f"undo on empty column {column}")
        if not self._history or self._history[-1] != column:
            raise EngineMisuse(f"undo on column {column} is not the most recent move")

        row = self.cfg.height - filled
        self.grid[row, c] = EMPTY
        self.heights[c] = filled - 1
        self._history.pop()

    @contextmanager
    def hypothetical(self, column: int, disc: Disc) -> Iterator["Board"]:
        """Apply a move for the duration of a `with` block."""
        self.play(column, disc)
        try:
            yield self
        finally:
            self.undo(column)

    def check_win(self, disc: Disc) -> bool:
        own = self.grid == int(disc)
        height, width, k = self.cfg.height, self.cfg.width, self.cfg.k
        span = k - 1

        for dr, dc in _DIRECTIONS:
            rows = height - span * abs(dr)
            cols = width - span * dc
            if rows <= 0 or cols <= 0:
                continue
            # Anti-diagonals start `span` rows down and climb.
            r0 = span if dr < 0 else 0
            run = own[r0 : r0 + rows, 0:cols].copy()
            for i in range(1, k):
                r = r0 + i * dr
                c = i * dc
                run &= own[r : r + rows, c : c + cols]
            if run.any():
                return True
        return False

    def clone(self) -> "Board":
        other = Board.__new__(Board)
        other.cfg = self.cfg
        other.grid = self.grid.copy()
        other.heights = self.heights.copy()
        other._history = list(self._history)
        return other

    def mirror(self) -> "Board":
        """Left-right reflected copy (history columns reflected too)."""
        other = self.clone()
        other.grid = np.ascontiguousarray(self.grid[:, ::-1])
        other.heights = self.heights[::-1].copy()
        other._history = [self.cfg.width + 1 - c for c in self._history]
        return other

    def __repr__(self) -> str:
        return f"Board(history={self._history!r})"
