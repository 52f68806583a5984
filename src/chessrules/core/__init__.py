"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chessrules.core import MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos.board)
    moves = gen.legal_moves(parse_square("g1"))
    print(sorted(str(sq) for sq in moves.quiet))
"""

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_TYPES, Color, GameResult, PieceType
from chessrules.core.move import LegalMoves, MoveRecord
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.movement import attacks, is_valid_move
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import (
    Square,
    is_valid_square,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    "PROMOTION_TYPES",
    # Types / helpers
    "Square",
    "is_valid_square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "LegalMoves",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Position",
    "Rules",
    # Movement predicates
    "attacks",
    "is_valid_move",
]
