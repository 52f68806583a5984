"""Abstract interfaces and small value types for the session layer.

A presentation layer talks to the engine only through
:class:`IGameSession`; the concrete implementation is
:class:`~chessrules.game.controller.GameController`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.enums import Color, PieceType
    from chessrules.core.move import LegalMoves
    from chessrules.core.types import Square


# ── Session FSM states ───────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of a session within one half-move."""

    IDLE = auto()
    PIECE_SELECTED = auto()
    AWAITING_PROMOTION = auto()  # commit paused on an external choice
    GAME_OVER = auto()


class MoveOutcome(IntEnum):
    """What happened to an attempted move."""

    COMMITTED = auto()
    DESELECTED = auto()
    PROMOTION_PENDING = auto()


@dataclass(frozen=True, slots=True)
class CheckStatus:
    """Facts a presentation layer needs about check and game end."""

    in_check: bool = False
    checked_king_square: Square | None = None
    checkmate: bool = False
    stalemate: bool = False

    @property
    def is_game_over(self) -> bool:
        return self.checkmate or self.stalemate


@dataclass(frozen=True, slots=True)
class SessionOptions:
    """Behavioural switches for a :class:`GameController`.

    Args:
        recompute_check_after_undo: Re-derive the check flag for the restored
            position after an undo.  When ``False`` the flag is simply
            cleared and stays off until the next move.
    """

    recompute_check_after_undo: bool = True


# ── Abstract interface ───────────────────────────────────────────────────────


class IGameSession(ABC):
    """Interface between the rule engine and a presentation/input layer."""

    @abstractmethod
    def new_game(self) -> None:
        """Reset to the standard starting position."""

    @abstractmethod
    def select(self, square: Square) -> LegalMoves | None:
        """Select an own piece. Returns its legal moves, or ``None`` (no-op)."""

    @abstractmethod
    def attempt_move(self, origin: Square, dest: Square) -> MoveOutcome:
        """Try to move the piece on *origin* to *dest*."""

    @abstractmethod
    def needs_promotion_choice(self) -> bool:
        """Is a commit waiting for a promotion piece?"""

    @abstractmethod
    def supply_promotion_choice(self, kind: PieceType | None) -> MoveOutcome:
        """Finish (or with ``None`` abandon) a pending promotion."""

    @abstractmethod
    def check_status(self) -> CheckStatus:
        """Current check / checkmate / stalemate facts."""

    @abstractmethod
    def undo(self) -> bool:
        """Undo the last move. Returns ``False`` if there is nothing to undo."""

    @abstractmethod
    def turn_color(self) -> Color:
        """Side to move."""
