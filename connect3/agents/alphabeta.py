"""Alpha-beta (minimax) agent with a simple heuristic evaluation."""

from __future__ import annotations

import math
import random
from typing import Dict, Optional

from connect3.agents.base import Agent, Decision, Signal, opening_move, pick_best
from connect3.agents.minimax import Evaluator
from connect3.engine import Board, Disc
from connect3.evaluation import score_board


class AlphaBetaAgent(Agent):
    """
    Depth-limited alpha-beta agent.

      - maximize for our own disc, minimize for the opponent
      - prune with alpha/beta when a branch cannot change the final decision
      - stop at `depth` plies and fall back to the heuristic evaluation

    Every root move is searched with a fully open window so that all root
    scores are exact and ties can be broken at random.
    """

    WIN_SCORE = 100_000

    def __init__(
        self,
        disc: Disc,
        name: str,
        *,
        depth: int = 5,
        win_score: int = WIN_SCORE,
        evaluator: Optional[Evaluator] = score_board,
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

    def root_scores(self, board: Board) -> Dict[int, float]:
        self._nodes = 0
        scores: Dict[int, float] = {}
        for col in board.available_columns():
            with board.hypothetical(col, self.disc):
                scores[col] = self._search(
                    board,
                    self.depth - 1,
                    alpha=-math.inf,
                    beta=math.inf,
                    maximizing=False,
                )
        return scores

    def _search(self, board: Board, depth: int, *, alpha: float, beta: float, maximizing: bool) -> float:
        self._nodes += 1
        opponent = self.disc.opponent

        if board.check_win(self.disc):
            return self.win_score + depth
        if board.check_win(opponent):
            return -self.win_score - depth

        legal = board.available_columns()
        if depth == 0 or not legal:
            return self.evaluator(board, self.disc) if self.evaluator is not None else 0

        if maximizing:
            value = -math.inf
            for col in legal:
                with board.hypothetical(col, self.disc):
                    value = max(value, self._search(board, depth - 1, alpha=alpha, beta=beta, maximizing=False))
                alpha = max(alpha, value)
                if beta <= alpha:
                    break  # beta cut-off
            return value

        value = math.inf
        for col in legal:
            with board.hypothetical(col, opponent):
                value = min(value, self._search(board, depth - 1, alpha=alpha, beta=beta, maximizing=True))
            beta = min(beta, value)
            if beta <= alpha:
                break  # alpha cut-off
        return value
