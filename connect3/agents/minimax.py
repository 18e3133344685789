"""Fixed-depth minimax agent (no pruning, no heuristic by default)."""

from __future__ import annotations

import random
from typing import Callable, Dict, Optional

from connect3.agents.base import Agent, Decision, Signal, opening_move, pick_best
from connect3.engine import Board, Disc

Evaluator = Callable[[Board, Disc], int]


class MinimaxAgent(Agent):
    """
    Plain minimax over every available column, `depth` plies deep counting the
    root move. Wins score `win_score + remaining depth` so that, among equal
    outcomes, the faster win (and the slower loss) is preferred. Leaves are
    worth 0 unless an evaluator is given.
    """

    WIN_SCORE = 100

    def __init__(
        self,
        disc: Disc,
        name: str,
        *,
        depth: int = 3,
        win_score: int = WIN_SCORE,
        evaluator: Optional[Evaluator] = None,
        seed: Optional[int] = None,
    ) -> None:
        if depth < 1:
            raise ValueError("depth must be >= 1")
        self.disc = disc
        self.name = name
        self.depth = depth
        self.win_score = win_score
        self.evaluator = evaluator
        self.rng = random.Random(seed)
        self._nodes = 0

    def decide(self, board: Board) -> Decision:
        opening = opening_move(board)
        if opening is not None:
            return opening

        if not board.available_columns():
            return Signal.DRAW
        return pick_best(self.root_scores(board), self.rng)

    def root_scores(self, board: Board) -> Dict[int, int]:
        self._nodes = 0
        scores: Dict[int, int] = {}
        for col in board.available_columns():
            with board.hypothetical(col, self.disc):
                scores[col] = self._minimax(board, self.depth - 1, maximizing=False)
        return scores

    def _minimax(self, board: Board, depth: int, *, maximizing: bool) -> int:
        self._nodes += 1
        opponent = self.disc.opponent

        if board.check_win(self.disc):
            return self.win_score + depth
        if board.check_win(opponent):
            return -self.win_score - depth

        legal = board.available_columns()
        if depth == 0 or not legal:
            return self.evaluator(board, self.disc) if self.evaluator is not None else 0

        mover = self.disc if maximizing else opponent
        scores = []
        for col in legal:
            with board.hypothetical(col, mover):
                scores.append(self._minimax(board, depth - 1, maximizing=not maximizing))
        return max(scores) if maximizing else min(scores)
