"""CLI rendering, input helpers and the match loop for Connect-3."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import trange

from connect3.agents import Agent, Decision, HumanAgent, Signal, create_agent, describe_kind
from connect3.engine import Board, ColumnFull, Connect3Config, Disc, EngineMisuse, InvalidColumn

app = typer.Typer(add_completion=False)
console = Console()
logger = logging.getLogger(__name__)


def render_board(board: Board) -> str:
    sym = {int(Disc.A): Disc.A.symbol, int(Disc.B): Disc.B.symbol, 0: "."}
    width = board.cfg.width
    lines: List[str] = []
    for r in range(board.cfg.height):
        lines.append(" ".join(sym[int(board.grid[r, c])] for c in range(width)))
    lines.append("-" * (2 * width - 1))
    lines.append(" ".join(str(c) for c in range(1, width + 1)))
    return "\n".join(lines)


def format_move_history(history: Sequence[int]) -> str:
    return ",".join(str(c) for c in history)


def _parse_column(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def prompt_for_human_move(board: Board, agent: HumanAgent) -> Decision:
    prompt = f"{agent.name} ({agent.disc.symbol}) to move. Column 1-{board.cfg.width}, '!' to quit"
    while True:
        raw = typer.prompt(prompt)
        if raw.strip() == "!":
            return Signal.QUIT
        col = _parse_column(raw)
        if col is None:
            console.print("Enter a column number.")
            continue
        return col


@dataclass(frozen=True)
class GameResult:
    outcome: str  # "win" / "draw" / "quit"
    winner: Optional[Agent]
    history: Tuple[int, ...]


def play_game(
    first: Agent,
    second: Agent,
    *,
    cfg: Connect3Config = Connect3Config(),
    display: bool = True,
    wait: float = 0.0,
) -> GameResult:
    board = Board(cfg)
    agents = (first, second)
    turn = 0

    while True:
        agent = agents[turn % 2]
        if display:
            console.print(render_board(board))
            console.print("")

        decision = agent.decide(board) if board.available_columns() else Signal.DRAW
        if decision is Signal.QUIT:
            if display:
                console.print("Game aborted.")
            return GameResult("quit", None, board.history)
        if decision is Signal.DRAW:
            if display:
                console.print("Result: draw")
                console.print(f"Moves: {format_move_history(board.history)}")
            return GameResult("draw", None, board.history)

        col = int(decision)
        try:
            board.play(col, agent.disc)
        except InvalidColumn:
            if not isinstance(agent, HumanAgent):
                raise EngineMisuse(f"{agent.name} chose column {col} out of range")
            if display:
                console.print(f"Enter a column between 1 and {cfg.width}.")
            continue
        except ColumnFull:
            if not isinstance(agent, HumanAgent):
                raise EngineMisuse(f"{agent.name} chose full column {col}")
            if display:
                console.print("That column is full, pick another one.")
            continue

        if display and not isinstance(agent, HumanAgent):
            console.print(f"{agent.name} -> column {col}")

        if board.check_win(agent.disc):
            if display:
                console.print(render_board(board))
                console.print(f"Result: {agent.name} wins")
                console.print(f"Moves: {format_move_history(board.history)}")
            return GameResult("win", agent, board.history)

        if display and wait > 0 and not isinstance(agent, HumanAgent):
            time.sleep(wait)
        turn += 1


def _pick_seed(base: Optional[int], offset: int) -> Optional[int]:
    if base is None:
        return None
    return base + offset


def run_series(
    p1_kind: str,
    p2_kind: str,
    *,
    count: int = 1,
    fixed_order: bool = False,
    display: bool = True,
    wait: float = 0.0,
    verbose: int = 0,
    seed: Optional[int] = None,
) -> Dict[str, int]:
    """
    Play `count` matches and tally them as p1 / p2 / draw.

    Player 1 moves first in even-numbered games and second in odd ones unless
    `fixed_order` is set. Fresh agents are built for every game. A quit stops
    the series.
    """

    p1_name = f"Player 1 ({describe_kind(p1_kind)})"
    p2_name = f"Player 2 ({describe_kind(p2_kind)})"
    results = {"p1": 0, "p2": 0, "draw": 0}

    games = range(count) if display or count == 1 else trange(count, desc="matches", leave=False)
    for i in games:
        p1_first = fixed_order or i % 2 == 0
        p1_disc, p2_disc = (Disc.A, Disc.B) if p1_first else (Disc.B, Disc.A)
        p1 = create_agent(
            p1_kind, p1_disc, p1_name, verbose=verbose, seed=_pick_seed(seed, 2 * i), prompt_fn=prompt_for_human_move
        )
        p2 = create_agent(
            p2_kind, p2_disc, p2_name, verbose=verbose, seed=_pick_seed(seed, 2 * i + 1), prompt_fn=prompt_for_human_move
        )
        first, second = (p1, p2) if p1_first else (p2, p1)

        if display:
            console.print(f"=== Game {i + 1} ===")
        result = play_game(first, second, display=display, wait=wait)

        if result.outcome == "quit":
            break
        if result.winner is p1:
            results["p1"] += 1
        elif result.winner is p2:
            results["p2"] += 1
        else:
            results["draw"] += 1

        if display and count > 1:
            console.print(_results_table(results, p1_name, p2_name, title=f"After {i + 1}/{count} games"))

    return results


def _results_table(results: Dict[str, int], p1_name: str, p2_name: str, *, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Player")
    table.add_column("Wins", justify="right")
    table.add_row(p1_name, str(results["p1"]))
    table.add_row(p2_name, str(results["p2"]))
    table.add_row("Draws", str(results["draw"]))
    return table


def _configure_logging(verbose: int) -> None:
    if verbose >= 3:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
    )


@app.command()
def play(
    p1: str = typer.Argument("human", help="Agent for player 1: h, r, n, i, a[DEPTH], e[ITERS], p, p2, p3."),
    p2: str = typer.Argument("naive", help="Agent for player 2 (same choices as player 1)."),
    count: int = typer.Option(1, "--count", "-c", min=1, help="Number of matches to play."),
    no_display: bool = typer.Option(False, "--no-display", "-d", help="Do not render boards, only the final tally."),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="-v: analysis of the first move, -vv: every move, -vvv: node progress."
    ),
    fixed_order: bool = typer.Option(False, "--fixed-order", "-f", help="Player 1 always moves first."),
    seed: Optional[int] = typer.Option(None, help="Base random seed for all agents."),
    wait: Optional[float] = typer.Option(None, help="Seconds to pause after each engine move (display only)."),
) -> None:
    """Play Connect-3 on a 5x5 board between two agents."""
    for kind in (p1, p2):
        try:
            describe_kind(kind)
        except ValueError as exc:
            raise typer.BadParameter(str(exc))

    _configure_logging(verbose)
    display = not no_display
    if wait is None:
        wait = (0.5 if count > 1 else 1.0) if display else 0.0

    results = run_series(
        p1,
        p2,
        count=count,
        fixed_order=fixed_order,
        display=display,
        wait=wait,
        verbose=min(verbose, 2),
        seed=seed,
    )

    played = results["p1"] + results["p2"] + results["draw"]
    console.print(
        _results_table(
            results,
            f"Player 1 ({describe_kind(p1)})",
            f"Player 2 ({describe_kind(p2)})",
            title=f"Total ({played} games)",
        )
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
