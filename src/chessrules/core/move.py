"""Move-related value objects: undo records and legal destination sets."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.enums import PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Everything needed to reverse one committed move.

    For castling only the king leg is stored; the rook leg is re-derived from
    the king's destination column on undo.
    """

    from_sq: Square
    to_sq: Square
    moved_piece: Piece
    captured_piece: Piece | None
    had_moved_before: bool
    promotion: PieceType | None = None

    @property
    def is_castling(self) -> bool:
        return (
            self.moved_piece.piece_type == PieceType.KING
            and self.from_sq.row == self.to_sq.row
            and abs(self.to_sq.col - self.from_sq.col) == 2
        )

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base


@dataclass(frozen=True, slots=True)
class LegalMoves:
    """Legal destinations of one piece, split into quiet moves and captures."""

    quiet: frozenset[Square] = field(default_factory=frozenset)
    captures: frozenset[Square] = field(default_factory=frozenset)

    def __contains__(self, sq: object) -> bool:
        return sq in self.quiet or sq in self.captures

    def __bool__(self) -> bool:
        return bool(self.quiet or self.captures)

    def __len__(self) -> int:
        return len(self.quiet) + len(self.captures)

    @property
    def all(self) -> frozenset[Square]:
        return self.quiet | self.captures
