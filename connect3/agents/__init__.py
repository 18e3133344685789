"""Agent implementations for Connect-3."""

from connect3.agents.alphabeta import AlphaBetaAgent
from connect3.agents.base import Agent, Decision, Signal
from connect3.agents.factory import create_agent, describe_kind
from connect3.agents.human import HumanAgent
from connect3.agents.mcts import MCTSAgent
from connect3.agents.minimax import MinimaxAgent
from connect3.agents.naive import NaiveAgent
from connect3.agents.negamax import NegamaxAgent, NegamaxSolver, Perfect2Agent, Perfect3Agent
from connect3.agents.perfect import PerfectAgent
from connect3.agents.random_agent import RandomAgent

__all__ = [
    "Agent",
    "Decision",
    "Signal",
    "HumanAgent",
    "RandomAgent",
    "NaiveAgent",
    "MinimaxAgent",
    "AlphaBetaAgent",
    "MCTSAgent",
    "PerfectAgent",
    "NegamaxSolver",
    "NegamaxAgent",
    "Perfect2Agent",
    "Perfect3Agent",
    "create_agent",
    "describe_kind",
]
