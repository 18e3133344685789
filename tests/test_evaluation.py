import numpy as np

from connect3.engine import Board, Disc
from connect3.evaluation import iter_windows, score_board


class TestWindows:
    def test_window_count(self, empty_board):
        windows = list(iter_windows(empty_board.cfg, empty_board.grid))
        # 15 horizontal, 15 vertical, 9 per diagonal direction.
        assert len(windows) == 48
        assert all(len(w) == 3 for w in windows)

    def test_every_cell_is_covered(self, empty_board):
        grid = np.arange(25, dtype=np.int16).reshape(5, 5)
        seen = set()
        for window in iter_windows(empty_board.cfg, grid):
            seen.update(int(v) for v in window)
        assert seen == set(range(25))


class TestScoreBoard:
    def test_empty_board_is_neutral(self, empty_board):
        assert score_board(empty_board, Disc.A) == 0
        assert score_board(empty_board, Disc.B) == 0

    def test_center_disc(self, empty_board):
        empty_board.drop(3, Disc.A)
        # Center weight plus six open windows through the cell.
        assert score_board(empty_board, Disc.A) == 15
        assert score_board(empty_board, Disc.B) == -6

    def test_open_two_outweighs_opponent_view(self):
        board = Board()
        board.drop(1, Disc.A)
        board.drop(2, Disc.A)
        assert score_board(board, Disc.A) == 20
        assert score_board(board, Disc.B) == -13

    def test_blocked_window_is_worthless(self):
        board = Board()
        board.drop(1, Disc.A)
        board.drop(2, Disc.B)
        # The shared bottom window scores nothing for either side.
        assert score_board(board, Disc.A) == 1
        assert score_board(board, Disc.B) == 4

    def test_mirror_invariant(self, double_threat):
        for disc in (Disc.A, Disc.B):
            assert score_board(double_threat, disc) == score_board(double_threat.mirror(), disc)

    def test_threats_favour_the_attacker(self, double_threat):
        assert score_board(double_threat, Disc.A) > score_board(double_threat, Disc.B)
