"""Random baseline agent."""

from __future__ import annotations

import random
from typing import Optional

from connect3.agents.base import Agent, Decision, Signal
from connect3.engine import Board, Disc


class RandomAgent(Agent):
    def __init__(self, disc: Disc, name: str, seed: Optional[int] = None) -> None:
        self.disc = disc
        self.name = name
        self.rng = random.Random(seed)

    def decide(self, board: Board) -> Decision:
        legal = board.available_columns()
        if not legal:
            return Signal.DRAW
        return self.rng.choice(legal)
