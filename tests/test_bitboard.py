"""Tests for the bitboard codec."""

import pytest
from helpers import full_board, random_position, with_empty_cells

from connect3 import bitboard as bb
from connect3.engine import Board, Disc


class TestLayout:
    def test_standard_masks(self):
        layout = bb.STANDARD
        assert layout.stride == 6
        assert layout.column_masks[0] == 0b111111
        assert layout.bottom_masks[2] == 1 << 12
        assert layout.sentinel_masks[4] == 1 << 29
        assert layout.top_row_mask == (1 << 4) | (1 << 10) | (1 << 16) | (1 << 22) | (1 << 28)

    def test_center_first_order(self):
        assert bb.STANDARD.center_order == (2, 1, 3, 0, 4)


class TestEncode:
    def test_empty_board(self, empty_board):
        assert bb.encode(empty_board, Disc.A) == (0, 0)

    def test_bottom_cell_is_bit_zero_of_its_column(self, empty_board):
        empty_board.drop(2, Disc.A)
        position, mask = bb.encode(empty_board, Disc.A)
        assert mask == 1 << 6
        assert position == 1 << 6
        assert bb.encode(empty_board, Disc.B) == (0, 1 << 6)

    def test_position_is_subset_of_mask(self, double_threat):
        for disc in (Disc.A, Disc.B):
            position, mask = bb.encode(double_threat, disc)
            assert position & ~mask == 0

    def test_sides_partition_mask(self, double_threat):
        pos_a, mask = bb.encode(double_threat, Disc.A)
        pos_b, _ = bb.encode(double_threat, Disc.B)
        assert pos_a ^ pos_b == mask
        assert bb.popcount(mask) == double_threat.moves_played


class TestMoves:
    def test_drop_bit_stacks(self):
        mask = 0
        for level in range(5):
            bit = bb.drop_bit(mask, 1)
            assert bit == 1 << (6 + level)
            mask |= bit
        assert bb.drop_bit(mask, 1) == bb.STANDARD.sentinel_masks[1]
        assert not bb.can_play(mask, 1)
        assert bb.can_play(mask, 0)

    def test_drop_bit_matches_board(self, double_threat):
        _, mask = bb.encode(double_threat, Disc.B)
        for column in double_threat.available_columns():
            col = column - 1
            with double_threat.hypothetical(column, Disc.B):
                _, after = bb.encode(double_threat, Disc.B)
            assert after == mask | bb.drop_bit(mask, col)

    def test_is_full(self):
        board = full_board()
        _, mask = bb.encode(board, Disc.A)
        assert bb.is_full(mask)
        board.undo(5)
        _, mask = bb.encode(board, Disc.A)
        assert not bb.is_full(mask)
        assert bb.can_play(mask, 4)


class TestCheckWin:
    def test_scenario_bottom_row(self, empty_board):
        for column in (1, 2, 3):
            empty_board.drop(column, Disc.A)
        position, _ = bb.encode(empty_board, Disc.A)
        assert bb.check_win(position)

    def test_column_boundary_does_not_wrap(self):
        # Top two cells of column 1 and bottom of column 2, with the sentinel between them.
        position = (1 << 3) | (1 << 4) | (1 << 6)
        assert not bb.check_win(position)

    @pytest.mark.parametrize("seed", range(30))
    def test_matches_grid_check(self, seed):
        board, _ = random_position(seed, with_empty_cells(25 - 14), allow_wins=True)
        for disc in (Disc.A, Disc.B):
            position, _ = bb.encode(board, disc)
            assert bb.check_win(position) == board.check_win(disc)


class TestMirror:
    def test_mirror_is_an_involution(self, double_threat):
        position, mask = bb.encode(double_threat, Disc.A)
        assert bb.mirror(bb.mirror(mask)) == mask
        assert bb.mirror(bb.mirror(position)) == position

    def test_mirror_matches_reflected_board(self, double_threat):
        position, mask = bb.encode(double_threat, Disc.B)
        m_position, m_mask = bb.encode(double_threat.mirror(), Disc.B)
        assert bb.mirror(position) == m_position
        assert bb.mirror(mask) == m_mask

    def test_canonical_key_shared_with_mirror(self, double_threat):
        key, _ = bb.canonical_key(*bb.encode(double_threat, Disc.B))
        m_key, _ = bb.canonical_key(*bb.encode(double_threat.mirror(), Disc.B))
        assert key == m_key

    def test_canonical_key_flags_reflection(self):
        board = Board.from_moves([1])
        _, mirrored = bb.canonical_key(*bb.encode(board, Disc.B))
        _, m_mirrored = bb.canonical_key(*bb.encode(board.mirror(), Disc.B))
        assert mirrored != m_mirrored

    def test_symmetric_position_is_not_flagged(self):
        board = Board.from_moves([3])
        key, mirrored = bb.canonical_key(*bb.encode(board, Disc.B))
        assert not mirrored
        assert key == bb.pack(0, 1 << 12)

    def test_side_to_move_changes_key(self, double_threat):
        key_a, _ = bb.canonical_key(*bb.encode(double_threat, Disc.A))
        key_b, _ = bb.canonical_key(*bb.encode(double_threat, Disc.B))
        assert key_a != key_b
