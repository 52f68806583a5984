"""Legal move enumeration, castling legality and attack detection."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.move import LegalMoves
from chessrules.core.movement import (
    attacks,
    castling_rook_squares,
    is_castling_shape,
    is_valid_move,
)
from chessrules.core.types import ALL_SQUARES, Square

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

KING_HOME_COL = 4

_EMPTY = LegalMoves()


class MoveGenerator:
    """Generates legal moves on a :class:`Board`.

    Hypothetical moves are tried in place through :meth:`Board.trial_move`,
    which always restores the board before returning.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, from_sq: Square) -> LegalMoves:
        """Legal destinations for the piece on *from_sq*."""
        board = self._board
        piece = board[from_sq]
        if piece is None:
            return _EMPTY

        quiet: set[Square] = set()
        captures: set[Square] = set()
        for to_sq in ALL_SQUARES:
            if not is_valid_move(piece, from_sq, to_sq, board):
                continue
            if is_castling_shape(piece, from_sq, to_sq):
                if self.can_castle(from_sq, to_sq):
                    quiet.add(to_sq)
                continue
            target = board[to_sq]
            if self.exposes_king(from_sq, to_sq):
                continue
            if target is None:
                quiet.add(to_sq)
            elif target.color != piece.color:
                captures.add(to_sq)
        return LegalMoves(frozenset(quiet), frozenset(captures))

    def legal_moves_for(self, color: Color) -> dict[Square, LegalMoves]:
        """Every piece of *color* that can move, mapped to its legal moves."""
        result: dict[Square, LegalMoves] = {}
        for sq in self._board.all_pieces(color):
            moves = self.legal_moves(sq)
            if moves:
                result[sq] = moves
        return result

    def has_legal_move(self, color: Color) -> bool:
        """Whether any piece of *color* has at least one legal move."""
        return any(self.legal_moves(sq) for sq in self._board.all_pieces(color))

    def count_legal_moves(self, color: Color) -> int:
        return sum(len(moves) for moves in self.legal_moves_for(color).values())

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        A side without a king is never in check.
        """
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board
        for from_sq, piece in board.occupied():
            if piece.color == by_color and attacks(piece, from_sq, sq, board):
                return True
        return False

    def exposes_king(self, from_sq: Square, to_sq: Square) -> bool:
        """Would relocating the piece on *from_sq* leave its own king in check?"""
        piece = self._board[from_sq]
        if piece is None:
            return False
        with self._board.trial_move(from_sq, to_sq):
            return self.is_in_check(piece.color)

    def king_step_is_safe(self, from_sq: Square, to_sq: Square) -> bool:
        """Relocate the king to *to_sq* and test that square for attack."""
        king = self._board[from_sq]
        if king is None:
            return False
        with self._board.trial_move(from_sq, to_sq):
            return not self.is_square_attacked(to_sq, king.color.opposite)

    # -- Castling -----------------------------------------------------------

    def can_castle(self, from_sq: Square, to_sq: Square) -> bool:
        """Full castling legality for the king on *from_sq* moving to *to_sq*."""
        board = self._board
        king = board[from_sq]
        if king is None or king.has_moved or not is_castling_shape(king, from_sq, to_sq):
            return False
        if from_sq != Square(king.color.home_row, KING_HOME_COL):
            return False
        if not is_valid_move(king, from_sq, to_sq, board):
            return False

        rook_sq, _ = castling_rook_squares(from_sq, to_sq)
        rook = board[rook_sq]
        if rook is None or rook.piece_type != PieceType.ROOK or rook.has_moved:
            return False

        opponent = king.color.opposite
        step = 1 if to_sq.col > from_sq.col else -1
        for col in range(from_sq.col, to_sq.col + step, step):
            if self.is_square_attacked(Square(from_sq.row, col), opponent):
                return False
        return True
