"""Per-piece movement predicates.

Each predicate answers a purely geometric question: can the piece reach the
destination given the current occupancy?  None of them look at whether the
move would leave the mover's own king in check; that is the move generator's
job.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.enums import PieceType
from chessrules.core.types import Square, is_valid_square

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece

MovePredicate = Callable[["Piece", Square, Square, "Board"], bool]

KINGSIDE_ROOK_COL = 7
QUEENSIDE_ROOK_COL = 0


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _path_clear(from_sq: Square, to_sq: Square, board: Board) -> bool:
    """All squares strictly between *from_sq* and *to_sq* are empty.

    Callers guarantee the two squares share a row, column or diagonal.
    """
    step_row = _sign(to_sq.row - from_sq.row)
    step_col = _sign(to_sq.col - from_sq.col)
    row, col = from_sq.row + step_row, from_sq.col + step_col
    while (row, col) != (to_sq.row, to_sq.col):
        if board[Square(row, col)] is not None:
            return False
        row += step_row
        col += step_col
    return True


def _destination_ok(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    """Common preconditions: on board, not a null move, not onto a friendly piece."""
    if not is_valid_square(to_sq.row, to_sq.col) or from_sq == to_sq:
        return False
    target = board[to_sq]
    return target is None or target.color != piece.color


# -- Individual pieces -----------------------------------------------------


def _pawn_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    if not _destination_ok(piece, from_sq, to_sq, board):
        return False
    forward = piece.color.forward
    d_row = to_sq.row - from_sq.row
    d_col = to_sq.col - from_sq.col
    target = board[to_sq]

    if target is None:
        if d_col != 0:
            return False
        if d_row == forward:
            return True
        start_row = 6 if forward < 0 else 1
        return (
            d_row == 2 * forward
            and from_sq.row == start_row
            and board[Square(from_sq.row + forward, from_sq.col)] is None
        )

    # Diagonal capture only.
    return d_row == forward and abs(d_col) == 1


def _rook_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    if not _destination_ok(piece, from_sq, to_sq, board):
        return False
    if from_sq.row != to_sq.row and from_sq.col != to_sq.col:
        return False
    return _path_clear(from_sq, to_sq, board)


def _knight_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    if not _destination_ok(piece, from_sq, to_sq, board):
        return False
    d_row = abs(to_sq.row - from_sq.row)
    d_col = abs(to_sq.col - from_sq.col)
    return (d_row, d_col) in ((2, 1), (1, 2))


def _bishop_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    if not _destination_ok(piece, from_sq, to_sq, board):
        return False
    if abs(to_sq.row - from_sq.row) != abs(to_sq.col - from_sq.col):
        return False
    return _path_clear(from_sq, to_sq, board)


def _queen_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    return _rook_move(piece, from_sq, to_sq, board) or _bishop_move(
        piece, from_sq, to_sq, board
    )


def _king_step(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    if not _destination_ok(piece, from_sq, to_sq, board):
        return False
    return abs(to_sq.row - from_sq.row) <= 1 and abs(to_sq.col - from_sq.col) <= 1


def is_castling_shape(piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """A king sliding two files along its row."""
    return (
        piece.piece_type == PieceType.KING
        and to_sq.row == from_sq.row
        and abs(to_sq.col - from_sq.col) == 2
    )


def castling_rook_squares(king_from: Square, king_to: Square) -> tuple[Square, Square]:
    """Rook origin and destination for a castling king move.

    The rook lands on the square the king crossed.
    """
    if king_to.col > king_from.col:
        return Square(king_from.row, KINGSIDE_ROOK_COL), Square(
            king_from.row, king_to.col - 1
        )
    return Square(king_from.row, QUEENSIDE_ROOK_COL), Square(
        king_from.row, king_to.col + 1
    )


def _castling_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    if piece.has_moved or not is_castling_shape(piece, from_sq, to_sq):
        return False
    if not is_valid_square(to_sq.row, to_sq.col):
        return False
    rook_sq, _ = castling_rook_squares(from_sq, to_sq)
    rook = board[rook_sq]
    if (
        rook is None
        or rook.piece_type != PieceType.ROOK
        or rook.color != piece.color
        or rook.has_moved
    ):
        return False
    if not board.is_empty(to_sq):
        return False
    return _path_clear(from_sq, rook_sq, board)


def _king_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    return _king_step(piece, from_sq, to_sq, board) or _castling_move(
        piece, from_sq, to_sq, board
    )


_PREDICATES: dict[PieceType, MovePredicate] = {
    PieceType.PAWN: _pawn_move,
    PieceType.ROOK: _rook_move,
    PieceType.KNIGHT: _knight_move,
    PieceType.BISHOP: _bishop_move,
    PieceType.QUEEN: _queen_move,
    PieceType.KING: _king_move,
}


# -- Public API ------------------------------------------------------------


def is_valid_move(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    """Whether *piece* on *from_sq* may geometrically move to *to_sq*."""
    return _PREDICATES[piece.piece_type](piece, from_sq, to_sq, board)


def attacks(piece: Piece, from_sq: Square, to_sq: Square, board: Board) -> bool:
    """Whether *piece* on *from_sq* attacks *to_sq*.

    Same as :func:`is_valid_move` except that pawns attack both forward
    diagonals even when empty, and castling is never an attack.
    """
    if piece.piece_type == PieceType.PAWN:
        if not _destination_ok(piece, from_sq, to_sq, board):
            return False
        return (
            to_sq.row - from_sq.row == piece.color.forward
            and abs(to_sq.col - from_sq.col) == 1
        )
    if piece.piece_type == PieceType.KING:
        return _king_step(piece, from_sq, to_sq, board)
    return is_valid_move(piece, from_sq, to_sq, board)
