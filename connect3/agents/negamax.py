"""
Exact bitboard negamax solver and the agents built on it.

`solve(position, mask, depth, alpha, beta)` scores a position for the player
to move. The opponent having just completed a line is checked first (the
player to move cannot have won on the opponent's move), then a full board is
a draw, then every playable column is tried in center-first order.

Scores: a loss detected `depth` plies below the root is
`-(WIN_SCORE - depth + 1)`, so after negation a win found sooner scores higher
and a loss found later scores higher. Draws are 0.

Options layered on the plain search:
  - use_table: transposition table keyed by the mirror-canonical (position, mask)
  - hints:     remember the best column per entry and try it first next time
  - pvs:       principal variation search; only the first move gets the full
               window, the rest are probed with a null window and re-searched
               when the probe lands strictly inside (alpha, beta)
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from connect3 import bitboard as bb
from connect3.agents.base import Agent, Decision, Signal, Verbosity, pick_best
from connect3.agents.report import SearchStats, log_root_analysis
from connect3.engine import Board, Disc
from connect3.transposition import (
    Bound,
    TranspositionTable,
    classify_bound,
    from_table_value,
    to_table_value,
)

WIN_SCORE = 10_000
INF = 2 * WIN_SCORE
WIN_THRESHOLD = WIN_SCORE // 2


class NegamaxSolver:
    def __init__(
        self,
        *,
        pvs: bool = False,
        hints: bool = False,
        use_table: bool = True,
        max_entries: int = 1_000_000,
        layout: bb.BitLayout = bb.STANDARD,
        label: str = "negamax",
    ) -> None:
        self.pvs = pvs
        self.hints = hints
        self.layout = layout
        self.table: Optional[TranspositionTable] = TranspositionTable(max_entries) if use_table else None
        self.stats = SearchStats(label)

    def root_scores(self, position: int, mask: int) -> Dict[int, int]:
        """
        Exact score of every playable column (0-based), each searched with the
        full window.
        """
        self.stats.reset()
        scores: Dict[int, int] = {}
        opponent = position ^ mask
        for col in self.layout.center_order:
            if not bb.can_play(mask, col, self.layout):
                continue
            new_mask = mask | bb.drop_bit(mask, col, self.layout)
            scores[col] = -self.solve(opponent, new_mask, 1, -INF, INF)
        return scores

    def best_score(self, position: int, mask: int) -> int:
        """Exact value of the position for the player to move."""
        self.stats.reset()
        return self.solve(position, mask, 0, -INF, INF)

    def solve(self, position: int, mask: int, depth: int, alpha: int, beta: int) -> int:
        layout = self.layout
        opponent = mask ^ position
        if bb.check_win(opponent, layout):
            return -(WIN_SCORE - depth + 1)
        if bb.is_full(mask, layout):
            return 0

        key = 0
        mirrored = False
        hint: Optional[int] = None
        if self.table is not None:
            key, mirrored = bb.canonical_key(position, mask, layout)
            entry = self.table.get(key)
            if entry is not None:
                score = from_table_value(entry.value, depth, WIN_THRESHOLD)
                if self.hints and entry.best_move is not None:
                    hint = _reflect(entry.best_move, mirrored, layout)
                if entry.bound is Bound.EXACT:
                    return score
                if entry.bound is Bound.LOWER:
                    alpha = max(alpha, score)
                else:
                    beta = min(beta, score)
                if alpha >= beta:
                    return score

        self.stats.tick()
        alpha_orig = alpha
        best_score = -INF
        best_col: Optional[int] = None
        searched = 0

        for col in self._move_order(hint):
            if not bb.can_play(mask, col, layout):
                continue
            new_mask = mask | bb.drop_bit(mask, col, layout)

            if not self.pvs or searched == 0:
                score = -self.solve(opponent, new_mask, depth + 1, -beta, -alpha)
            else:
                score = -self.solve(opponent, new_mask, depth + 1, -alpha - 1, -alpha)
                if alpha < score < beta:
                    score = -self.solve(opponent, new_mask, depth + 1, -beta, -alpha)
            searched += 1

            if score > best_score:
                best_score = score
                best_col = col
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        if self.table is not None:
            stored_move = _reflect(best_col, mirrored, layout) if self.hints and best_col is not None else None
            self.table.store(
                key,
                to_table_value(best_score, depth, WIN_THRESHOLD),
                classify_bound(best_score, alpha_orig, beta),
                stored_move,
            )
        return best_score

    def _move_order(self, hint: Optional[int]) -> List[int]:
        order = list(self.layout.center_order)
        if hint is not None:
            order.remove(hint)
            order.insert(0, hint)
        return order


def _reflect(col: int, mirrored: bool, layout: bb.BitLayout) -> int:
    return layout.width - 1 - col if mirrored else col


class NegamaxAgent(Agent):
    """Exact player on top of `NegamaxSolver`; the solver's table lives as long as the agent."""

    def __init__(
        self,
        disc: Disc,
        name: str,
        *,
        pvs: bool = False,
        hints: bool = False,
        verbose: int = Verbosity.OFF,
        seed: Optional[int] = None,
        max_entries: int = 1_000_000,
        use_table: bool = True,
        label: str = "negamax",
    ) -> None:
        self.disc = disc
        self.name = name
        self.verbosity = Verbosity(verbose)
        self.rng = random.Random(seed)
        self.solver = NegamaxSolver(pvs=pvs, hints=hints, use_table=use_table, max_entries=max_entries, label=label)

    def decide(self, board: Board) -> Decision:
        if not board.available_columns():
            return Signal.DRAW

        show = self.verbosity.next_decision()
        scores = self.root_scores(board)
        if show:
            log_root_analysis(self.name, scores, WIN_SCORE + 1)
        if self.verbosity:
            self.solver.stats.log_summary()
        return pick_best(scores, self.rng)

    def root_scores(self, board: Board) -> Dict[int, int]:
        """Exact score per 1-based column for this agent's disc to move."""
        position, mask = bb.encode(board, self.disc, self.solver.layout)
        scores = self.solver.root_scores(position, mask)
        return {col + 1: score for col, score in scores.items()}


class Perfect2Agent(NegamaxAgent):
    def __init__(self, disc: Disc, name: str, **kwargs) -> None:
        super().__init__(disc, name, pvs=False, hints=False, label="p2", **kwargs)


class Perfect3Agent(NegamaxAgent):
    def __init__(self, disc: Disc, name: str, **kwargs) -> None:
        super().__init__(disc, name, pvs=True, hints=True, label="p3", **kwargs)
