"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


PositionFactory = Callable[..., Position]


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt application for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def make_position() -> PositionFactory:
    """Build a position from ``{square_name: piece_letter}`` placements.

    Example::

        make_position({"e1": "K", "e8": "k", "a1": "R"}, side=Color.BLACK)
    """
    def _make(
        placements: dict[str, str],
        side: Color = Color.WHITE,
        moved: tuple[str, ...] = (),
    ) -> Position:
        board = Board()
        for name, letter in placements.items():
            board[parse_square(name)] = Piece.from_char(letter)
        for name in moved:
            piece = board[parse_square(name)]
            assert piece is not None
            piece.has_moved = True
        return Position(board=board, side_to_move=side)

    return _make

