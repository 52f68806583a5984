"""Game state: selection, legal sets, check flag and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.enums import Color, GameResult, PieceType
from chessrules.core.move import LegalMoves, MoveRecord
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import Square
from chessrules.game.interfaces import CheckStatus, GamePhase


@dataclass
class GameState:
    """Everything one session knows about its game.

    This is a pure data/logic class with no events and no UI.
    """

    position: Position = field(default_factory=Position)
    phase: GamePhase = field(default=GamePhase.IDLE)
    result: GameResult = field(default=GameResult.IN_PROGRESS)
    selection: Square | None = field(default=None)
    legal: LegalMoves = field(default_factory=LegalMoves)
    check_square: Square | None = field(default=None)
    pending_promotion: tuple[Square, Square] | None = field(default=None)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: Position | None = None) -> None:
        """Initialise (or reset) the game."""
        self.position = position if position is not None else Position()
        self.phase = GamePhase.IDLE
        self.result = GameResult.IN_PROGRESS
        self.pending_promotion = None
        self.clear_selection()
        self.refresh_check()
        self._check_game_over()

    # ── Selection ────────────────────────────────────────────────────────

    def select(self, square: Square) -> LegalMoves:
        self.selection = square
        self.legal = MoveGenerator(self.position.board).legal_moves(square)
        self.phase = GamePhase.PIECE_SELECTED
        return self.legal

    def clear_selection(self) -> None:
        self.selection = None
        self.legal = LegalMoves()
        if self.phase == GamePhase.PIECE_SELECTED:
            self.phase = GamePhase.IDLE

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        origin: Square,
        dest: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord:
        """Apply a validated move and evaluate the resulting position.

        Caller is responsible for legality check.
        """
        record = self.position.make_move(origin, dest, promotion)
        self.pending_promotion = None
        self.clear_selection()
        self.phase = GamePhase.IDLE
        self.refresh_check()
        self._check_game_over()
        return record

    def undo_last_move(self, *, recompute_check: bool = True) -> MoveRecord | None:
        """Undo the last move. Returns the undone record, or None if empty."""
        self.pending_promotion = None
        self.clear_selection()
        record = self.position.unmake_move()
        if record is None:
            if self.phase == GamePhase.AWAITING_PROMOTION:
                self.phase = GamePhase.IDLE
            return None

        self.result = GameResult.IN_PROGRESS
        self.phase = GamePhase.IDLE
        if recompute_check:
            self.refresh_check()
        else:
            self.check_square = None
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def move_history(self) -> tuple[MoveRecord, ...]:
        return self.position.history

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.position.history)

    def check_status(self) -> CheckStatus:
        return CheckStatus(
            in_check=self.check_square is not None,
            checked_king_square=self.check_square,
            checkmate=self.result in (GameResult.WHITE_WINS, GameResult.BLACK_WINS),
            stalemate=self.result == GameResult.DRAW,
        )

    def refresh_check(self) -> None:
        """Re-derive the check flag for the side to move."""
        color = self.side_to_move
        if Rules.is_in_check(self.position, color):
            self.check_square = self.position.board.king_square(color)
        else:
            self.check_square = None

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        result = Rules.game_result(self.position)
        if result != GameResult.IN_PROGRESS:
            self.result = result
            self.phase = GamePhase.GAME_OVER
