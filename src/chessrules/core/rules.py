"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, GameResult, PieceType
from chessrules.core.move_generator import KING_OFFSETS, MoveGenerator
from chessrules.core.movement import is_valid_move
from chessrules.core.types import ALL_SQUARES

if TYPE_CHECKING:
    from chessrules.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every predicate takes an optional *color*; by default the side to move
    is examined.
    """

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        color = position.side_to_move if color is None else color
        return MoveGenerator(position.board).is_in_check(color)

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        color = position.side_to_move if color is None else color
        board = position.board
        gen = MoveGenerator(board)
        if not gen.is_in_check(color):
            return False

        # Can the king step out of check?
        king_sq = board.king_square(color)
        assert king_sq is not None
        king = board[king_sq]
        assert king is not None
        for d_row, d_col in KING_OFFSETS:
            to_sq = king_sq.offset(d_row, d_col)
            if to_sq is None:
                continue
            if is_valid_move(king, king_sq, to_sq, board) and gen.king_step_is_safe(
                king_sq, to_sq
            ):
                return False

        # Can another piece capture the checker or interpose?
        for from_sq in board.all_pieces(color):
            piece = board[from_sq]
            if piece is None or piece.piece_type == PieceType.KING:
                continue
            for to_sq in ALL_SQUARES:
                if is_valid_move(piece, from_sq, to_sq, board) and not gen.exposes_king(
                    from_sq, to_sq
                ):
                    return False
        return True

    @staticmethod
    def is_stalemate(position: Position, color: Color | None = None) -> bool:
        color = position.side_to_move if color is None else color
        gen = MoveGenerator(position.board)
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result for the side to move."""
        if Rules.is_checkmate(position):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if Rules.is_stalemate(position):
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
