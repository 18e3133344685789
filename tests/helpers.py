"""Board builders and reference searches shared by the tests."""

import random
from typing import Callable, List, Tuple

from connect3.agents.negamax import INF, WIN_SCORE
from connect3.engine import Board, Connect3Config, Disc

CFG = Connect3Config()
CELLS = CFG.width * CFG.height
MAX_ATTEMPTS = 10000

# A moved first: A (2,1) B (5,1) A (1,1) B (1,2) A (2,2), as (column, level from bottom).
# B is to move and A threatens both column 3 (bottom row) and column 2 (vertical).
DOUBLE_THREAT = [2, 5, 1, 1, 2]

# Columns 4 and 5 full, 1-3 open, B to move. A wins next move in column 2
# (vertical) or column 3 (bottom row, also a falling diagonal) whatever B does.
#
#   . . . O O
#   . . . X O
#   X . . O X
#   O X . O X
#   X X . X O
FORCED_LOSS = [1, 1, 4, 4, 1, 4, 4, 5, 5, 4, 5, 5, 2, 5, 2]

# Fills the board row by row (XXOOX / OOXXO alternating) without any line.
DRAWN_GAME_A = [1, 2, 5, 3, 4, 1, 2, 5, 3, 4, 1, 2, 5]
DRAWN_GAME_B = [3, 4, 1, 2, 5, 3, 4, 1, 2, 5, 3, 4]


def full_board() -> Board:
    """Every cell filled (lines are irrelevant here, only fullness matters)."""
    return Board.from_moves([c for c in range(1, CFG.width + 1) for _ in range(CFG.height)])


def random_position(
    seed: int,
    stop: Callable[[Board], bool],
    *,
    allow_wins: bool = False,
    quiet: bool = False,
) -> Tuple[Board, Disc]:
    """
    Random playout from the empty board until `stop(board)` holds.

    Unless `allow_wins` is set, movers avoid completing a line whenever they
    can and playouts that end in a win are retried, so the result is a live
    position. With `quiet`, movers also avoid handing the opponent a win and
    the playout is retried until neither side can win on the next move.
    Returns the board and the disc to move.
    """
    rng = random.Random(seed)
    for _ in range(MAX_ATTEMPTS):
        board = Board(CFG)
        disc = Disc.A
        alive = True
        while not stop(board) and board.available_columns():
            legal = board.available_columns()
            if not allow_wins:
                calm = [c for c in legal if not _wins(board, c, disc)]
                if quiet:
                    calm = [c for c in calm if not _gives_win(board, c, disc)] or calm
                legal = calm or legal
            board.play(rng.choice(legal), disc)
            if board.check_win(disc) and not allow_wins:
                alive = False
                break
            disc = disc.opponent
        if not alive or not stop(board):
            continue
        if quiet and (winning_columns(board, disc) or winning_columns(board, disc.opponent)):
            continue
        return board, disc
    raise RuntimeError(f"no position found for seed {seed}")


def with_empty_cells(n: int) -> Callable[[Board], bool]:
    return lambda board: CELLS - board.moves_played <= n


def with_open_columns(n: int) -> Callable[[Board], bool]:
    return lambda board: len(board.available_columns()) <= n


def _wins(board: Board, col: int, disc: Disc) -> bool:
    with board.hypothetical(col, disc):
        return board.check_win(disc)


def winning_columns(board: Board, disc: Disc) -> List[int]:
    return [c for c in board.available_columns() if _wins(board, c, disc)]


def _gives_win(board: Board, col: int, disc: Disc) -> bool:
    with board.hypothetical(col, disc):
        return bool(winning_columns(board, disc.opponent))


def brute_force(board: Board, to_move: Disc, depth: int = 0) -> int:
    """Unpruned negamax on the grid, scored like the bitboard solver."""
    if board.check_win(to_move.opponent):
        return -(WIN_SCORE - depth + 1)
    if board.is_full():
        return 0
    best = -INF
    for col in board.available_columns():
        with board.hypothetical(col, to_move):
            best = max(best, -brute_force(board, to_move.opponent, depth + 1))
    return best


class ScriptedAgent:
    """Plays a fixed list of decisions (duck-types the Agent interface)."""

    def __init__(self, disc: Disc, name: str, moves: List) -> None:
        self.disc = disc
        self.name = name
        self.moves = list(moves)

    def decide(self, board: Board):
        return self.moves.pop(0)


def live_positions(stop: Callable[[Board], bool], seeds=range(6)) -> List[Tuple[Board, Disc]]:
    return [random_position(seed, stop) for seed in seeds]


def quiet_positions(stop: Callable[[Board], bool], seeds=range(6)) -> List[Tuple[Board, Disc]]:
    """Live positions where neither side has a win on the next move."""
    return [random_position(seed, stop, quiet=True) for seed in seeds]
