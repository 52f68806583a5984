"""Position: board + side to move with make/unmake over a history stack."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_TYPES, Color, PieceType
from chessrules.core.move import MoveRecord
from chessrules.core.movement import castling_rook_squares, is_castling_shape
from chessrules.core.piece import Piece
from chessrules.core.types import Square

_LAST_ROWS = (0, 7)


def is_promotion_move(piece: Piece, to_sq: Square) -> bool:
    """A pawn arriving on the farthest rank."""
    return piece.piece_type == PieceType.PAWN and to_sq.row in _LAST_ROWS


class Position:
    """Board plus side to move.

    Supports :meth:`make_move` / :meth:`unmake_move` via an internal history
    stack of :class:`MoveRecord` (Command pattern).  Legality is the caller's
    responsibility.
    """

    __slots__ = ("board", "side_to_move", "_history")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self._history: list[MoveRecord] = []

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def last_move(self) -> MoveRecord | None:
        return self._history[-1] if self._history else None

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord:
        """Apply a move, pushing its undo record onto the history stack."""
        board = self.board
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")

        if is_promotion_move(piece, to_sq):
            if promotion not in PROMOTION_TYPES:
                raise ValueError(f"Invalid promotion piece: {promotion!r}")
        elif promotion is not None:
            raise ValueError(f"Move {from_sq}{to_sq} is not a promotion")

        record = MoveRecord(
            from_sq=from_sq,
            to_sq=to_sq,
            moved_piece=piece,
            captured_piece=board[to_sq],
            had_moved_before=piece.has_moved,
            promotion=promotion,
        )

        board.relocate(from_sq, to_sq)
        piece.has_moved = True

        if promotion is not None:
            board[to_sq] = Piece(piece.color, promotion, has_moved=True)
        elif is_castling_shape(piece, from_sq, to_sq):
            rook_from, rook_to = castling_rook_squares(from_sq, to_sq)
            rook = board[rook_from]
            if rook is None:
                raise ValueError(f"No rook on {rook_from} to castle with")
            board.relocate(rook_from, rook_to)
            rook.has_moved = True

        self._history.append(record)
        self.side_to_move = self.side_to_move.opposite
        return record

    def unmake_move(self) -> MoveRecord | None:
        """Undo the last :meth:`make_move`; ``None`` if there is nothing to undo."""
        if not self._history:
            return None
        record = self._history.pop()
        board = self.board

        piece = record.moved_piece
        piece.has_moved = record.had_moved_before
        board[record.from_sq] = piece
        board[record.to_sq] = record.captured_piece

        if record.is_castling:
            rook_from, rook_to = castling_rook_squares(record.from_sq, record.to_sq)
            rook = board[rook_to]
            if rook is not None:
                board.relocate(rook_to, rook_from)
                rook.has_moved = False

        self.side_to_move = self.side_to_move.opposite
        return record

    # ── Utilities ────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
