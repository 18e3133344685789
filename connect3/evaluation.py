"""Static heuristic evaluation of a Connect-3 board for depth-limited search."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from connect3.engine import EMPTY, Board, Connect3Config, Disc

CENTER_WEIGHT = 3

# Own lines are worth more than blocking the same opponent line, to bias toward attack.
OWN_TWO = 10
OWN_ONE = 2
OPP_TWO = -8
OPP_ONE = -1


def score_board(board: Board, disc: Disc) -> int:
    """
    Heuristic score of `board` from `disc`'s point of view.

    Only open windows count: a length-k window with k-1 own discs and one gap
    is a threat, one own disc and two gaps is a start. Immediate wins and
    losses are left to the search.
    """

    cfg = board.cfg
    center = board.grid[:, cfg.center_column - 1]
    score = CENTER_WEIGHT * int(np.sum(center == int(disc)))

    for window in iter_windows(cfg, board.grid):
        score += _score_window(window, int(disc))

    return score


def iter_windows(cfg: Connect3Config, grid: np.ndarray) -> Iterable[np.ndarray]:
    k = cfg.k

    # Horizontal windows.
    for r in range(cfg.height):
        for c in range(cfg.width - k + 1):
            yield grid[r, c : c + k]

    # Vertical windows.
    for c in range(cfg.width):
        for r in range(cfg.height - k + 1):
            yield grid[r : r + k, c]

    # Diagonal (top-left to bottom-right).
    for r in range(cfg.height - k + 1):
        for c in range(cfg.width - k + 1):
            yield np.array([grid[r + i, c + i] for i in range(k)])

    # Diagonal (bottom-left to top-right).
    for r in range(k - 1, cfg.height):
        for c in range(cfg.width - k + 1):
            yield np.array([grid[r - i, c + i] for i in range(k)])


def _score_window(window: np.ndarray, disc: int) -> int:
    k = len(window)
    own = int(np.sum(window == disc))
    opp = int(np.sum(window == -disc))
    empty = int(np.sum(window == EMPTY))

    score = 0
    if own == k - 1 and empty == 1:
        score += OWN_TWO
    elif own == 1 and empty == k - 1:
        score += OWN_ONE

    if opp == k - 1 and empty == 1:
        score += OPP_TWO
    elif opp == 1 and empty == k - 1:
        score += OPP_ONE

    return score
