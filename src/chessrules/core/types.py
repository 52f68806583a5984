"""Square value type and coordinate helpers.

Board layout (row-major, row 0 is Black's back rank):
    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 8


def is_valid_square(row: int, col: int) -> bool:
    """Check whether (row, col) lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class Square(NamedTuple):
    """Immutable board coordinate."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Square | None:
        """Neighbouring square, or ``None`` if it falls off the board."""
        row, col = self.row + d_row, self.col + d_col
        if not is_valid_square(row, col):
            return None
        return Square(row, col)

    def __str__(self) -> str:
        return square_name(self)


def make_square(row: int, col: int) -> Square:
    """Create a square, rejecting off-board coordinates."""
    if not is_valid_square(row, col):
        raise ValueError(f"Square out of range: ({row}, {col})")
    return Square(row, col)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1'."""
    return chr(ord("a") + sq.col) + str(BOARD_SIZE - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), ord(name[0]) - ord("a"))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
