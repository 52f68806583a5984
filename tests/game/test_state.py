"""Tests for GameState."""

from chessrules.core.enums import Color, GameResult
from chessrules.core.types import E2, E4, parse_square
from chessrules.game.interfaces import GamePhase
from chessrules.game.state import GameState


class TestGameStateSetup:
    def test_position_is_available_before_setup(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.IDLE
        assert gs.side_to_move == Color.WHITE

    def test_setup_default(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.phase == GamePhase.IDLE
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0
        assert gs.selection is None
        assert not gs.legal

    def test_setup_resets(self) -> None:
        gs = GameState()
        gs.setup()
        gs.apply_move(E2, E4)
        assert gs.ply_count == 1
        gs.setup()
        assert gs.ply_count == 0
        assert gs.side_to_move == Color.WHITE

    def test_setup_detects_finished_position(self, make_position) -> None:
        gs = GameState()
        gs.setup(make_position({"h8": "k", "f6": "K", "g6": "Q"}, side=Color.BLACK))
        assert gs.is_game_over
        assert gs.result == GameResult.DRAW


class TestGameStateSelection:
    def test_select_computes_legal_sets(self) -> None:
        gs = GameState()
        gs.setup()
        legal = gs.select(E2)
        assert gs.phase == GamePhase.PIECE_SELECTED
        assert gs.selection == E2
        assert {str(sq) for sq in legal.quiet} == {"e3", "e4"}

    def test_clear_selection_empties_sets(self) -> None:
        gs = GameState()
        gs.setup()
        gs.select(E2)
        gs.clear_selection()
        assert gs.phase == GamePhase.IDLE
        assert gs.selection is None
        assert not gs.legal.quiet and not gs.legal.captures


class TestGameStateMoves:
    def test_apply_move_records(self) -> None:
        gs = GameState()
        gs.setup()
        record = gs.apply_move(E2, E4)
        assert str(record) == "e2e4"
        assert gs.side_to_move == Color.BLACK
        assert gs.move_history == (record,)

    def test_apply_move_flags_check(self) -> None:
        gs = GameState()
        gs.setup()
        gs.apply_move(parse_square("e2"), parse_square("e4"))
        gs.apply_move(parse_square("f7"), parse_square("f6"))
        gs.apply_move(parse_square("d1"), parse_square("h5"))
        assert gs.check_square == parse_square("e8")
        assert gs.check_status().in_check
        assert not gs.is_game_over

    def test_undo_move(self) -> None:
        gs = GameState()
        gs.setup()
        gs.apply_move(E2, E4)
        record = gs.undo_last_move()
        assert record is not None
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0

    def test_undo_empty(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.undo_last_move() is None

    def test_undo_resets_game_over(self) -> None:
        gs = GameState()
        gs.setup()
        for move in ("f2f3", "e7e5", "g2g4", "d8h4"):
            gs.apply_move(parse_square(move[:2]), parse_square(move[2:]))
        assert gs.is_game_over
        assert gs.result == GameResult.BLACK_WINS
        gs.undo_last_move()
        assert not gs.is_game_over
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.phase == GamePhase.IDLE

    def test_undo_can_skip_check_recompute(self, make_position) -> None:
        gs = GameState()
        gs.setup(make_position({"e1": "K", "e5": "r", "a8": "k"}))
        assert gs.check_square is not None
        gs.apply_move(parse_square("e1"), parse_square("d1"))
        gs.undo_last_move(recompute_check=False)
        assert gs.check_square is None
