import pytest

from helpers import CFG, DOUBLE_THREAT, FORCED_LOSS

from connect3.engine import Board


@pytest.fixture
def double_threat() -> Board:
    return Board.from_moves(DOUBLE_THREAT)


@pytest.fixture
def forced_loss() -> Board:
    return Board.from_moves(FORCED_LOSS)


@pytest.fixture
def empty_board() -> Board:
    return Board(CFG)
