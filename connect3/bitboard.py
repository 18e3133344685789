"""
Bitboard encoding of a Connect-3 position for the exact solver.

A position is the pair `(position, mask)`:
  mask     bit set  <=> cell occupied
  position bit set  <=> cell occupied by the player to move

Column `col` (0-based here) owns `height + 1` consecutive bits starting at
`col * (height + 1)`. Bit 0 of a column is its bottom row and the extra top bit
is a sentinel that is never occupied, so line checks cannot wrap from one
column into the next and a full column shows up as a carry into the sentinel.

For the 5x5 board that is 6 bits per column:

   5 11 17 23 29   <- sentinels
   4 10 16 22 28
   3  9 15 21 27
   2  8 14 20 26
   1  7 13 19 25
   0  6 12 18 24
"""

from __future__ import annotations

from typing import Tuple

from connect3.engine import EMPTY, Board, Connect3Config, Disc


class BitLayout:
    """Precomputed masks for one board geometry."""

    def __init__(self, cfg: Connect3Config) -> None:
        cfg.validate()
        self.width = cfg.width
        self.height = cfg.height
        self.k = cfg.k
        self.stride = cfg.height + 1
        self.field_bits = self.width * self.stride

        field = (1 << self.stride) - 1
        self.column_masks = tuple(field << (c * self.stride) for c in range(self.width))
        self.bottom_masks = tuple(1 << (c * self.stride) for c in range(self.width))
        self.sentinel_masks = tuple(1 << (c * self.stride + self.height) for c in range(self.width))
        top_row = 0
        for c in range(self.width):
            top_row |= 1 << (c * self.stride + self.height - 1)
        self.top_row_mask = top_row

        # vertical, horizontal, diagonal down-right, diagonal up-right
        self.shifts = (1, self.stride, self.stride - 1, self.stride + 1)

        center = (self.width - 1) / 2.0
        self.center_order = tuple(sorted(range(self.width), key=lambda c: (abs(c - center), c)))

    def bit_index(self, row: int, col: int) -> int:
        """Bit for grid cell (row counted from the top, 0-based col)."""
        return col * self.stride + (self.height - 1 - row)


STANDARD = BitLayout(Connect3Config())


def encode(board: Board, disc: Disc, layout: BitLayout = STANDARD) -> Tuple[int, int]:
    """Encode `board` with `disc` as the player to move."""
    position = 0
    mask = 0
    grid = board.grid
    for col in range(layout.width):
        for row in range(layout.height):
            cell = int(grid[row, col])
            if cell == EMPTY:
                continue
            bit = 1 << layout.bit_index(row, col)
            mask |= bit
            if cell == disc:
                position |= bit
    return position, mask


def drop_bit(mask: int, col: int, layout: BitLayout = STANDARD) -> int:
    """Lowest free bit of `col`; equals the sentinel when the column is full."""
    return (mask & layout.column_masks[col]) + layout.bottom_masks[col]


def can_play(mask: int, col: int, layout: BitLayout = STANDARD) -> bool:
    return (drop_bit(mask, col, layout) & layout.sentinel_masks[col]) == 0


def is_full(mask: int, layout: BitLayout = STANDARD) -> bool:
    return (mask & layout.top_row_mask) == layout.top_row_mask


def check_win(position: int, layout: BitLayout = STANDARD) -> bool:
    """True if the stones in `position` contain a line of k."""
    for shift in layout.shifts:
        run = position
        for i in range(1, layout.k):
            run &= position >> (i * shift)
        if run:
            return True
    return False


def mirror(bits: int, layout: BitLayout = STANDARD) -> int:
    """Reverse the column order of a position or mask."""
    field = (1 << layout.stride) - 1
    out = 0
    last = layout.width - 1
    for col in range(layout.width):
        out |= ((bits >> (col * layout.stride)) & field) << ((last - col) * layout.stride)
    return out


def pack(position: int, mask: int, layout: BitLayout = STANDARD) -> int:
    return position | (mask << layout.field_bits)


def canonical_key(position: int, mask: int, layout: BitLayout = STANDARD) -> Tuple[int, bool]:
    """
    Exact key shared by a position and its mirror image.

    Returns (key, mirrored) where `mirrored` says the key was taken from the
    reflected position, so column hints stored under it must be reflected back.
    """
    key = pack(position, mask, layout)
    reflected = pack(mirror(position, layout), mirror(mask, layout), layout)
    if reflected < key:
        return reflected, True
    return key, False


def popcount(bits: int) -> int:
    return bin(bits).count("1")
