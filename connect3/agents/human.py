"""Human-in-the-loop agent that defers input handling to a CLI prompt function."""

from __future__ import annotations

from typing import Callable

from connect3.agents.base import Agent, Decision
from connect3.engine import Board, Disc

PromptFn = Callable[[Board, "HumanAgent"], Decision]


class HumanAgent(Agent):
    """
    The prompt function returns whatever column the human typed (it may be out
    of range or full; the match loop validates it) or `Signal.QUIT`.
    """

    def __init__(self, disc: Disc, name: str, prompt_fn: PromptFn) -> None:
        self.disc = disc
        self.name = name
        self.prompt_fn = prompt_fn

    def decide(self, board: Board) -> Decision:
        return self.prompt_fn(board, self)
