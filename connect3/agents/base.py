"""Abstract base class for Connect-3 agents."""

from __future__ import annotations

import abc
import random
from enum import Enum
from typing import Dict, Optional, Union

from connect3.engine import Board, Disc


class Signal(Enum):
    DRAW = "draw"  # no legal column left
    QUIT = "quit"  # human asked to stop


Decision = Union[int, Signal]


class Agent(abc.ABC):
    name: str
    disc: Disc

    @abc.abstractmethod
    def decide(self, board: Board) -> Decision:
        raise NotImplementedError


class Verbosity:
    """Tracks whether the current decision should emit analysis output."""

    OFF = 0
    FIRST_MOVE = 1
    EVERY_MOVE = 2

    def __init__(self, level: int = OFF) -> None:
        self.level = level
        self._decisions = 0

    def next_decision(self) -> bool:
        show = self.level >= self.EVERY_MOVE or (self.level == self.FIRST_MOVE and self._decisions == 0)
        self._decisions += 1
        return show

    def __bool__(self) -> bool:
        return self.level > self.OFF


def opening_move(board: Board) -> Optional[int]:
    """Center column on an empty board, which is the strongest first move."""
    if board.is_empty():
        return board.cfg.center_column
    return None


def pick_best(scores: Dict[int, float], rng: random.Random) -> int:
    """Uniform random choice among the columns sharing the top score."""
    best = max(scores.values())
    best_cols = [col for col, score in scores.items() if score == best]
    return rng.choice(best_cols)


def center_first(board: Board, columns: Optional[list] = None) -> list:
    cols = board.available_columns() if columns is None else columns
    center = board.cfg.center_column
    return sorted(cols, key=lambda c: (abs(c - center), c))
