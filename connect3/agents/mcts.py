"""Monte-Carlo Tree Search agent with UCT selection and random rollouts."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from connect3.agents.base import Agent, Decision, Signal, Verbosity, opening_move
from connect3.engine import Board, Disc

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Node:
    move: Optional[int] = None
    parent: Optional["Node"] = None
    untried_moves: List[int] = field(default_factory=list)
    player_just_moved: Optional[Disc] = None
    children: List["Node"] = field(default_factory=list)
    visits: int = 0
    wins: float = 0.0

    def win_rate(self) -> float:
        return 0.0 if self.visits == 0 else self.wins / self.visits

    def add_child(self, move: int, untried_moves: List[int], player_just_moved: Disc) -> "Node":
        child = Node(move=move, parent=self, untried_moves=untried_moves, player_just_moved=player_just_moved)
        self.children.append(child)
        return child


def uct_select_child(node: Node) -> Node:
    # Only fully expanded nodes are descended into, so every child has been visited once.
    log_parent = math.log(node.visits)

    def uct(child: Node) -> float:
        return child.win_rate() + math.sqrt(2.0 * log_parent / child.visits)

    return max(node.children, key=uct)


class MCTSAgent(Agent):
    """
    Each decision grows a fresh tree with `iterations` playouts:

      1) selection:   follow UCT while the node is fully expanded
      2) expansion:   add one random untried move
      3) simulation:  play uniformly random moves on a private board copy
      4) backup:      credit 1 / 0.5 / 0 to nodes whose mover won / drew / lost

    The most visited root child is played.
    """

    def __init__(
        self,
        disc: Disc,
        name: str,
        *,
        iterations: int = 1000,
        seed: Optional[int] = None,
        verbose: int = Verbosity.OFF,
    ) -> None:
        if iterations < 1:
            raise ValueError("iterations must be >= 1")
        self.disc = disc
        self.name = name
        self.iterations = iterations
        self.rng = random.Random(seed)
        self.verbosity = Verbosity(verbose)

    def decide(self, board: Board) -> Decision:
        legal = board.available_columns()
        if not legal:
            return Signal.DRAW

        opening = opening_move(board)
        if opening is not None:
            return opening

        root = self.search(board)
        if self.verbosity.next_decision():
            _log_root_children(self.name, root)

        if not root.children:
            return self.rng.choice(legal)
        return max(root.children, key=lambda child: child.visits).move

    def search(self, board: Board) -> Node:
        root = Node(untried_moves=board.available_columns())
        for _ in range(self.iterations):
            self._iterate(root, board.clone())
        return root

    def _iterate(self, root: Node, sim: Board) -> None:
        node = root
        to_move = self.disc

        # Selection
        while not node.untried_moves and node.children:
            node = uct_select_child(node)
            sim.play(node.move, to_move)
            to_move = to_move.opponent

        # Expansion
        if node.untried_moves:
            move = self.rng.choice(node.untried_moves)
            node.untried_moves.remove(move)
            sim.play(move, to_move)
            # A winning move ends the game, so that node is never expanded further.
            untried = [] if sim.check_win(to_move) else sim.available_columns()
            node = node.add_child(move, untried, to_move)
            to_move = to_move.opponent

        # Simulation
        winner = self._rollout(sim, to_move)

        # Backpropagation
        cur: Optional[Node] = node
        while cur is not None:
            cur.visits += 1
            if cur.player_just_moved is not None:
                if winner is None:
                    cur.wins += 0.5
                elif winner == cur.player_just_moved:
                    cur.wins += 1.0
            cur = cur.parent

    def _rollout(self, sim: Board, to_move: Disc) -> Optional[Disc]:
        last_mover = to_move.opponent
        if sim.moves_played and sim.check_win(last_mover):
            return last_mover

        while True:
            legal = sim.available_columns()
            if not legal:
                return None
            sim.play(self.rng.choice(legal), to_move)
            if sim.check_win(to_move):
                return to_move
            to_move = to_move.opponent


def _log_root_children(name: str, root: Node) -> None:
    logger.info("--- %s: root children (column -> visits, win rate) ---", name)
    for child in sorted(root.children, key=lambda c: c.visits, reverse=True):
        logger.info("column %d -> %d, %.3f", child.move, child.visits, child.win_rate())
