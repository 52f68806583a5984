"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, BOARD_SIZE, Square, is_valid_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional piece references."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    @staticmethod
    def _check(sq: Square) -> None:
        if not is_valid_square(sq[0], sq[1]):
            raise ValueError(f"Square out of range: {tuple(sq)}")

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        self._check(sq)
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._check(sq)
        self._grid[sq[0]][sq[1]] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield every ``(square, piece)`` pair in row-major order."""
        for sq in ALL_SQUARES:
            piece = self._grid[sq.row][sq.col]
            if piece is not None:
                yield sq, piece

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in self.occupied()
            if piece.color == color and piece.piece_type == piece_type
        ]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is not on the board."""
        for sq, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    # -- Mutation -----------------------------------------------------------

    def relocate(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Move whatever stands on *from_sq* to *to_sq*; return what was replaced."""
        replaced = self[to_sq]
        self[to_sq] = self[from_sq]
        self[from_sq] = None
        return replaced

    @contextmanager
    def trial_move(self, from_sq: Square, to_sq: Square) -> Iterator[Piece | None]:
        """Temporarily relocate a piece; the board is restored on every exit path.

        Yields the piece that was displaced from *to_sq* (if any).
        """
        moving = self[from_sq]
        replaced = self.relocate(from_sq, to_sq)
        try:
            yield replaced
        finally:
            self[from_sq] = moving
            self[to_sq] = replaced

    def copy(self) -> Board:
        """Deep copy, pieces included."""
        b = Board()
        for sq, piece in self.occupied():
            b[sq] = piece.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(BOARD_SIZE):
            b[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)

        for col, pt in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(Color.BLACK, pt)
            b[Square(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                p = self._grid[row][col]
                cells.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
