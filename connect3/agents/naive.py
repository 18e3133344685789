"""One-ply tactical agent: take a win, block a loss, otherwise play randomly."""

from __future__ import annotations

import random
from typing import Optional

from connect3.agents.base import Agent, Decision, Signal, opening_move
from connect3.engine import Board, Disc


class NaiveAgent(Agent):
    def __init__(self, disc: Disc, name: str, seed: Optional[int] = None) -> None:
        self.disc = disc
        self.name = name
        self.rng = random.Random(seed)

    def decide(self, board: Board) -> Decision:
        opening = opening_move(board)
        if opening is not None:
            return opening

        legal = board.available_columns()
        if not legal:
            return Signal.DRAW

        win = _winning_column(board, legal, self.disc)
        if win is not None:
            return win
        block = _winning_column(board, legal, self.disc.opponent)
        if block is not None:
            return block
        return self.rng.choice(legal)


def _winning_column(board: Board, legal: list, disc: Disc) -> Optional[int]:
    for col in legal:
        with board.hypothetical(col, disc):
            if board.check_win(disc):
                return col
    return None
