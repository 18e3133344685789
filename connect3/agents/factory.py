"""Build agents from short type strings such as `a7`, `e500` or `p3`."""

from __future__ import annotations

import re
from typing import Optional

from connect3.agents.alphabeta import AlphaBetaAgent
from connect3.agents.base import Agent
from connect3.agents.human import HumanAgent, PromptFn
from connect3.agents.mcts import MCTSAgent
from connect3.agents.minimax import MinimaxAgent
from connect3.agents.naive import NaiveAgent
from connect3.agents.negamax import Perfect2Agent, Perfect3Agent
from connect3.agents.perfect import PerfectAgent
from connect3.agents.random_agent import RandomAgent
from connect3.engine import Disc

DEFAULT_ADVANCED_DEPTH = 5
DEFAULT_EXPERT_ITERATIONS = 1000

_ADVANCED = re.compile(r"^a(?:dvanced)?(\d+)?$")
_EXPERT = re.compile(r"^e(?:xpert)?(\d+)?$")

_ALIASES = {
    "human": "human",
    "h": "human",
    "random": "random",
    "r": "random",
    "naive": "naive",
    "n": "naive",
    "intermediate": "intermediate",
    "i": "intermediate",
    "perfect": "perfect",
    "p": "perfect",
    "perfect2": "perfect2",
    "p2": "perfect2",
    "perfect3": "perfect3",
    "p3": "perfect3",
}


def describe_kind(kind: str) -> str:
    """Display name for a type string, e.g. `a7` -> `Advanced(7)`."""
    t = kind.strip().lower()
    m = _ADVANCED.match(t)
    if m:
        return f"Advanced({int(m.group(1) or DEFAULT_ADVANCED_DEPTH)})"
    m = _EXPERT.match(t)
    if m:
        return f"Expert({int(m.group(1) or DEFAULT_EXPERT_ITERATIONS)})"
    if t not in _ALIASES:
        # Rejected rather than displayed as Naive, matching create_agent.
        raise ValueError(f"unsupported agent choice: {kind}")
    return _ALIASES[t].capitalize()


def create_agent(
    kind: str,
    disc: Disc,
    name: str,
    *,
    verbose: int = 0,
    seed: Optional[int] = None,
    prompt_fn: Optional[PromptFn] = None,
) -> Agent:
    t = kind.strip().lower()

    m = _ADVANCED.match(t)
    if m:
        depth = int(m.group(1) or DEFAULT_ADVANCED_DEPTH)
        return AlphaBetaAgent(disc, name, depth=depth, seed=seed)
    m = _EXPERT.match(t)
    if m:
        iterations = int(m.group(1) or DEFAULT_EXPERT_ITERATIONS)
        return MCTSAgent(disc, name, iterations=iterations, seed=seed, verbose=verbose)

    choice = _ALIASES.get(t)
    if choice == "human":
        if prompt_fn is None:
            raise ValueError("a human agent needs a prompt function")
        return HumanAgent(disc, name, prompt_fn)
    if choice == "random":
        return RandomAgent(disc, name, seed=seed)
    if choice == "naive":
        return NaiveAgent(disc, name, seed=seed)
    if choice == "intermediate":
        return MinimaxAgent(disc, name, seed=seed)
    if choice == "perfect":
        return PerfectAgent(disc, name, verbose=verbose, seed=seed)
    if choice == "perfect2":
        return Perfect2Agent(disc, name, verbose=verbose, seed=seed)
    if choice == "perfect3":
        return Perfect3Agent(disc, name, verbose=verbose, seed=seed)

    # Unknown strings are an error, never a silent Naive player.
    raise ValueError(f"unsupported agent choice: {kind}")
