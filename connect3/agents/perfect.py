"""Exact solver on the grid board: alpha-beta minimax with a transposition table."""

from __future__ import annotations

import math
import random
from typing import Dict, Optional, Tuple

import numpy as np

from connect3.agents.base import Agent, Decision, Signal, Verbosity, center_first, pick_best
from connect3.agents.report import SearchStats, log_root_analysis
from connect3.engine import Board, Disc
from connect3.transposition import (
    Bound,
    TranspositionTable,
    classify_bound,
    from_table_value,
    to_table_value,
)

GridKey = Tuple[bytes, bool]


def grid_key(board: Board, maximizing: bool) -> GridKey:
    """Exact grid identity shared with the mirror image, plus the side to move."""
    raw = board.grid.tobytes()
    mirrored = np.ascontiguousarray(board.grid[:, ::-1]).tobytes()
    return (min(raw, mirrored), maximizing)


class PerfectAgent(Agent):
    """
    Full-depth minimax from our own disc's point of view.

    A win detected `depth` plies below the root scores `WIN_SCORE - depth`, a
    loss `depth - WIN_SCORE`, a draw 0. Scores are stored depth-normalized so an
    entry stays valid wherever the position reappears. The table lives as long
    as the agent.
    """

    WIN_SCORE = 100

    def __init__(
        self,
        disc: Disc,
        name: str,
        *,
        verbose: int = Verbosity.OFF,
        seed: Optional[int] = None,
        max_entries: int = 1_000_000,
        use_table: bool = True,
    ) -> None:
        self.disc = disc
        self.name = name
        self.verbosity = Verbosity(verbose)
        self.rng = random.Random(seed)
        self.table: Optional[TranspositionTable] = TranspositionTable(max_entries) if use_table else None
        self.stats = SearchStats("perfect")

    def decide(self, board: Board) -> Decision:
        if not board.available_columns():
            return Signal.DRAW

        show = self.verbosity.next_decision()
        scores = self.root_scores(board)
        if show:
            log_root_analysis(self.name, scores, self.WIN_SCORE)
        if self.verbosity:
            self.stats.log_summary()
        return pick_best(scores, self.rng)

    def root_scores(self, board: Board) -> Dict[int, int]:
        """Exact score of every available column (each searched with an open window)."""
        self.stats.reset()
        scores: Dict[int, int] = {}
        for col in center_first(board):
            with board.hypothetical(col, self.disc):
                scores[col] = int(self._minimax(board, 1, -math.inf, math.inf, maximizing=False))
        return scores

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float, *, maximizing: bool) -> float:
        key = grid_key(board, maximizing)

        if self.table is not None:
            entry = self.table.get(key)
            if entry is not None:
                score = from_table_value(entry.value, depth, 0)
                if entry.bound is Bound.EXACT:
                    return score
                if entry.bound is Bound.LOWER:
                    alpha = max(alpha, score)
                else:
                    beta = min(beta, score)
                if alpha >= beta:
                    return score

        self.stats.tick()
        alpha_orig, beta_orig = alpha, beta
        opponent = self.disc.opponent

        if board.check_win(self.disc):
            return self._store(key, self.WIN_SCORE - depth, depth, Bound.EXACT)
        if board.check_win(opponent):
            return self._store(key, depth - self.WIN_SCORE, depth, Bound.EXACT)

        legal = center_first(board)
        if not legal:
            return self._store(key, 0, depth, Bound.EXACT)

        if maximizing:
            value = -math.inf
            for col in legal:
                with board.hypothetical(col, self.disc):
                    value = max(value, self._minimax(board, depth + 1, alpha, beta, maximizing=False))
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
        else:
            value = math.inf
            for col in legal:
                with board.hypothetical(col, opponent):
                    value = min(value, self._minimax(board, depth + 1, alpha, beta, maximizing=True))
                beta = min(beta, value)
                if beta <= alpha:
                    break

        return self._store(key, value, depth, classify_bound(value, alpha_orig, beta_orig))

    def _store(self, key: GridKey, value: float, depth: int, bound: Bound) -> float:
        if self.table is not None:
            self.table.store(key, to_table_value(int(value), depth, 0), bound)
        return value
