"""Qt bridge exposing a game session through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.enums import GameResult, PieceType
from chessrules.core.move import MoveRecord
from chessrules.core.types import Square
from chessrules.game.controller import GameController
from chessrules.game.interfaces import GamePhase, MoveOutcome, SessionOptions
from chessrules.game.state import GameState


class SessionBridge(QObject):
    """Thread-affine adapter that re-emits controller events as Qt signals.

    The board widget, promotion dialog and game-over notice connect to the
    signals; user actions come back in through the slots.
    """

    move_committed = pyqtSignal(object)  # MoveRecord
    check_flagged = pyqtSignal(object)  # king Square
    game_over = pyqtSignal(int)  # GameResult
    promotion_required = pyqtSignal(object)  # promotion Square
    phase_changed = pyqtSignal(int)  # GamePhase

    def __init__(
        self,
        controller: GameController | None = None,
        *,
        options: SessionOptions | None = None,
    ) -> None:
        super().__init__()
        self._controller = (
            controller if controller is not None else GameController(options)
        )
        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_check.append(self.check_flagged.emit)
        events.on_game_over.append(self._on_game_over)
        events.on_promotion_required.append(self.promotion_required.emit)
        events.on_phase_changed.append(self._on_phase)

    @property
    def controller(self) -> GameController:
        return self._controller

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game()

    @pyqtSlot(object, result=object)
    def select(self, square: Square) -> object:
        return self._controller.select(square)

    @pyqtSlot(object, object, result=int)
    def attempt_move(self, origin: Square, dest: Square) -> int:
        return int(self._controller.attempt_move(origin, dest))

    @pyqtSlot(object, result=int)
    def supply_promotion_choice(self, kind: object) -> int:
        """Deliver the dialog's choice; ``None`` means the dialog was closed."""
        if kind is not None and not isinstance(kind, PieceType):
            kind = PieceType(int(kind))
        if not self._controller.needs_promotion_choice():
            return int(MoveOutcome.DESELECTED)
        return int(self._controller.supply_promotion_choice(kind))

    @pyqtSlot(result=bool)
    def undo(self) -> bool:
        return self._controller.undo()

    # ── Event forwarding ─────────────────────────────────────────────────

    def _on_move(self, record: MoveRecord, _state: GameState) -> None:
        self.move_committed.emit(record)

    def _on_game_over(self, result: GameResult) -> None:
        self.game_over.emit(int(result))

    def _on_phase(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))
