"""Session layer: turn controller, selection flow, promotion pause, undo.

Quick start::

    from chessrules.core import parse_square
    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.select(parse_square("e2"))
    ctrl.attempt_move(parse_square("e2"), parse_square("e4"))
"""

from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import (
    CheckStatus,
    GamePhase,
    IGameSession,
    MoveOutcome,
    SessionOptions,
)
from chessrules.game.state import GameState

__all__ = [
    # Interfaces / value types
    "CheckStatus",
    "GamePhase",
    "IGameSession",
    "MoveOutcome",
    "SessionOptions",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
]
