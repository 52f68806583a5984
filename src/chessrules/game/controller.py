"""GameController: the session/turn controller of a two-player game.

Mediates the select → legal moves → commit flow, pauses commits that need
a promotion choice, and emits events via simple callbacks so the UI / tests
can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.enums import PROMOTION_TYPES, Color, GameResult, PieceType
from chessrules.core.move import LegalMoves, MoveRecord
from chessrules.core.position import Position, is_promotion_move
from chessrules.core.types import Square
from chessrules.game.interfaces import (
    CheckStatus,
    GamePhase,
    IGameSession,
    MoveOutcome,
    SessionOptions,
)
from chessrules.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
CheckCallback = Callable[[Square], None]  # checked king square
GameOverCallback = Callable[[GameResult], None]
PromotionCallback = Callable[[Square], None]  # promotion square
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameSession):
    """Owns one game: turn order, selection, promotion pause, undo.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  Share an instance across threads only behind an
    external lock.
    """

    __slots__ = ("_state", "_options", "events")

    def __init__(self, options: SessionOptions | None = None) -> None:
        self._options = options if options is not None else SessionOptions()
        self._state = GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def options(self) -> SessionOptions:
        return self._options

    @property
    def legal_quiet(self) -> frozenset[Square]:
        return self._state.legal.quiet

    @property
    def legal_captures(self) -> frozenset[Square]:
        return self._state.legal.captures

    def turn_color(self) -> Color:
        return self._state.side_to_move

    # ── IGameSession impl ────────────────────────────────────────────────

    def new_game(self, position: Position | None = None) -> None:
        """Start over from the standard setup (or from *position*)."""
        self._state = GameState()
        self._state.setup(position)
        _LOGGER.debug("New game, %s to move", self._state.side_to_move)
        self._emit_phase(self._state.phase)

    def select(self, square: Square) -> LegalMoves | None:
        state = self._state
        if state.phase in (GamePhase.GAME_OVER, GamePhase.AWAITING_PROMOTION):
            return None
        piece = state.position.board[square]
        if piece is None or piece.color != state.side_to_move:
            self._deselect()
            return None
        legal = state.select(square)
        self._emit_phase(GamePhase.PIECE_SELECTED)
        return legal

    def attempt_move(self, origin: Square, dest: Square) -> MoveOutcome:
        state = self._state
        if state.phase == GamePhase.AWAITING_PROMOTION:
            return MoveOutcome.PROMOTION_PENDING
        if state.is_game_over:
            return MoveOutcome.DESELECTED

        if state.selection != origin and self.select(origin) is None:
            self._deselect()
            return MoveOutcome.DESELECTED

        if dest not in state.legal:
            _LOGGER.debug("Rejected %s -> %s: not a legal destination", origin, dest)
            self._deselect()
            return MoveOutcome.DESELECTED

        piece = state.position.board[origin]
        assert piece is not None
        if is_promotion_move(piece, dest):
            state.pending_promotion = (origin, dest)
            state.phase = GamePhase.AWAITING_PROMOTION
            self._emit_phase(GamePhase.AWAITING_PROMOTION)
            for cb in self.events.on_promotion_required:
                cb(dest)
            return MoveOutcome.PROMOTION_PENDING

        self._commit(origin, dest)
        return MoveOutcome.COMMITTED

    def click(self, square: Square) -> LegalMoves | MoveOutcome | None:
        """Single entry point for board clicks.

        With nothing selected the click selects; otherwise it tries to move
        the selected piece to *square*.
        """
        selection = self._state.selection
        if selection is None:
            return self.select(square)
        return self.attempt_move(selection, square)

    def needs_promotion_choice(self) -> bool:
        return self._state.pending_promotion is not None

    def supply_promotion_choice(self, kind: PieceType | None) -> MoveOutcome:
        pending = self._state.pending_promotion
        if pending is None:
            raise RuntimeError("No promotion is pending")
        if kind is None:
            self.cancel_promotion()
            return MoveOutcome.DESELECTED
        if kind not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {kind!r}")

        origin, dest = pending
        self._commit(origin, dest, kind)
        return MoveOutcome.COMMITTED

    def cancel_promotion(self) -> None:
        """Abandon a pending promotion; the pawn stays where it was."""
        state = self._state
        if state.pending_promotion is None:
            return
        _LOGGER.debug("Promotion on %s abandoned", state.pending_promotion[1])
        state.pending_promotion = None
        state.phase = GamePhase.IDLE
        state.clear_selection()
        self._emit_phase(GamePhase.IDLE)

    def check_status(self) -> CheckStatus:
        return self._state.check_status()

    def undo(self) -> bool:
        record = self._state.undo_last_move(
            recompute_check=self._options.recompute_check_after_undo
        )
        if record is None:
            return False
        _LOGGER.debug("Undid %s", record)
        self._emit_phase(GamePhase.IDLE)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(
        self, origin: Square, dest: Square, promotion: PieceType | None = None
    ) -> None:
        state = self._state
        record = state.apply_move(origin, dest, promotion)
        _LOGGER.debug("Committed %s", record)

        for cb in self.events.on_move:
            cb(record, state)

        if state.check_square is not None:
            for cb in self.events.on_check:
                cb(state.check_square)

        if state.is_game_over:
            _LOGGER.info("Game over: %s", state.result.name)
            self._emit_phase(GamePhase.GAME_OVER)
            for cb in self.events.on_game_over:
                cb(state.result)
            return

        self._emit_phase(GamePhase.IDLE)

    def _deselect(self) -> None:
        if self._state.selection is None:
            return
        self._state.clear_selection()
        self._emit_phase(GamePhase.IDLE)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
