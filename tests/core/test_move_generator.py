"""Tests for legal-move enumeration, attack detection and castling legality."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.core.types import (
    B1, C1, E1, E2, E8, G1,
    Square,
    parse_square,
)


def _names(squares: frozenset[Square]) -> set[str]:
    return {str(sq) for sq in squares}


# ── Starting position ────────────────────────────────────────────────────────


class TestOpeningMoves:
    def test_each_pawn_has_two_moves(self) -> None:
        board = Board.initial()
        gen = MoveGenerator(board)
        for sq in board.pieces(Color.WHITE, PieceType.PAWN):
            moves = gen.legal_moves(sq)
            assert len(moves.quiet) == 2, str(sq)
            assert not moves.captures

    def test_each_knight_has_two_moves(self) -> None:
        board = Board.initial()
        gen = MoveGenerator(board)
        for sq in board.pieces(Color.WHITE, PieceType.KNIGHT):
            assert len(gen.legal_moves(sq).quiet) == 2

    def test_other_pieces_are_stuck(self) -> None:
        board = Board.initial()
        gen = MoveGenerator(board)
        for piece_type in (
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.QUEEN,
            PieceType.KING,
        ):
            for sq in board.pieces(Color.WHITE, piece_type):
                assert not gen.legal_moves(sq), f"{piece_type.name} on {sq}"

    def test_twenty_moves_for_each_side(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.count_legal_moves(Color.WHITE) == 20
        assert gen.count_legal_moves(Color.BLACK) == 20

    def test_knight_destinations(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert _names(gen.legal_moves(B1).quiet) == {"a3", "c3"}

    def test_empty_square_has_no_moves(self) -> None:
        gen = MoveGenerator(Board.initial())
        moves = gen.legal_moves(parse_square("e4"))
        assert not moves.quiet and not moves.captures

    def test_enumeration_leaves_board_untouched(self) -> None:
        board = Board.initial()
        before = board.copy()
        MoveGenerator(board).legal_moves_for(Color.WHITE)
        assert board == before

    def test_repeated_enumeration_is_stable(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.legal_moves(E2) == gen.legal_moves(E2)


# ── Captures and king safety ────────────────────────────────────────────────


class TestCapturesAndPins:
    def test_quiet_and_capture_are_disjoint(self, make_position) -> None:
        pos = make_position({"e1": "K", "e8": "k", "d4": "Q", "d7": "p", "g7": "p"})
        moves = MoveGenerator(pos.board).legal_moves(parse_square("d4"))
        assert _names(moves.captures) == {"d7", "g7"}
        assert not moves.quiet & moves.captures
        assert "d8" not in _names(moves.quiet)

    def test_pinned_piece_stays_on_the_line(self, make_position) -> None:
        pos = make_position({"e1": "K", "e2": "R", "e8": "r", "a8": "k"})
        moves = MoveGenerator(pos.board).legal_moves(E2)
        assert _names(moves.quiet) == {"e3", "e4", "e5", "e6", "e7"}
        assert _names(moves.captures) == {"e8"}

    def test_pinned_knight_cannot_move(self, make_position) -> None:
        pos = make_position({"e1": "K", "e2": "N", "e8": "r", "a8": "k"})
        assert not MoveGenerator(pos.board).legal_moves(E2)

    def test_king_cannot_step_into_attack(self, make_position) -> None:
        pos = make_position({"e1": "K", "a2": "r", "h8": "k"})
        moves = MoveGenerator(pos.board).legal_moves(E1)
        assert _names(moves.quiet) == {"d1", "f1"}

    def test_king_cannot_capture_defended_piece(self, make_position) -> None:
        pos = make_position({"e1": "K", "e2": "q", "e3": "r", "h8": "k"})
        moves = MoveGenerator(pos.board).legal_moves(E1)
        assert "e2" not in _names(moves.captures)

    def test_king_captures_undefended_piece(self, make_position) -> None:
        pos = make_position({"e1": "K", "e2": "q", "h8": "k"})
        moves = MoveGenerator(pos.board).legal_moves(E1)
        assert _names(moves.captures) == {"e2"}

    def test_must_answer_check(self, make_position) -> None:
        pos = make_position({"e1": "K", "a4": "B", "e8": "r", "h8": "k"})
        gen = MoveGenerator(pos.board)
        assert not gen.legal_moves(parse_square("a4")).quiet
        assert _names(gen.legal_moves(parse_square("a4")).captures) == {"e8"}

    def test_has_legal_move(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.has_legal_move(Color.WHITE)


# ── Attack detection ────────────────────────────────────────────────────────


class TestAttacks:
    def test_in_check_by_rook(self, make_position) -> None:
        pos = make_position({"e1": "K", "e8": "r", "a8": "k"})
        assert MoveGenerator(pos.board).is_in_check(Color.WHITE)

    def test_colors_are_independent(self, make_position) -> None:
        pos = make_position({"e1": "K", "e8": "r", "a8": "k"})
        gen = MoveGenerator(pos.board)
        assert gen.is_in_check(Color.WHITE)
        assert not gen.is_in_check(Color.BLACK)

    def test_both_sides_can_be_flagged(self, make_position) -> None:
        pos = make_position({"e1": "K", "e8": "k", "e4": "r", "a8": "R"})
        gen = MoveGenerator(pos.board)
        assert gen.is_in_check(Color.WHITE)
        assert gen.is_in_check(Color.BLACK)

    def test_no_king_is_never_in_check(self, make_position) -> None:
        pos = make_position({"e8": "r"})
        assert not MoveGenerator(pos.board).is_in_check(Color.WHITE)

    def test_pawn_attacks_empty_diagonal(self, make_position) -> None:
        pos = make_position({"e1": "K", "e8": "k", "d3": "p"})
        gen = MoveGenerator(pos.board)
        assert gen.is_square_attacked(parse_square("e2"), Color.BLACK)
        assert gen.is_square_attacked(parse_square("c2"), Color.BLACK)
        assert not gen.is_square_attacked(parse_square("d2"), Color.BLACK)

    def test_blocked_slider_does_not_attack(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert not gen.is_square_attacked(parse_square("d4"), Color.BLACK)
        assert gen.is_square_attacked(parse_square("f6"), Color.BLACK)


# ── Castling ─────────────────────────────────────────────────────────────────


_CASTLING_SETUP = {"e1": "K", "a1": "R", "h1": "R", "e8": "k"}


class TestCastling:
    def test_both_sides_available(self, make_position) -> None:
        pos = make_position(_CASTLING_SETUP)
        moves = MoveGenerator(pos.board).legal_moves(E1)
        assert {"g1", "c1"} <= _names(moves.quiet)

    def test_castling_is_quiet(self, make_position) -> None:
        pos = make_position(_CASTLING_SETUP)
        moves = MoveGenerator(pos.board).legal_moves(E1)
        assert G1 not in moves.captures and C1 not in moves.captures

    def test_attacked_transit_square_blocks_that_side(self, make_position) -> None:
        pos = make_position({**_CASTLING_SETUP, "f8": "r"})
        moves = MoveGenerator(pos.board).legal_moves(E1)
        assert "g1" not in _names(moves.quiet)
        assert "c1" in _names(moves.quiet)

    def test_attacked_destination_blocks(self, make_position) -> None:
        pos = make_position({**_CASTLING_SETUP, "c8": "r"})
        moves = MoveGenerator(pos.board).legal_moves(E1)
        assert "c1" not in _names(moves.quiet)
        assert "g1" in _names(moves.quiet)

    def test_attacked_b_file_does_not_block_queenside(self, make_position) -> None:
        pos = make_position({**_CASTLING_SETUP, "b8": "r"})
        assert MoveGenerator(pos.board).can_castle(E1, C1)

    def test_pawn_guarding_transit_square_blocks(self, make_position) -> None:
        pos = make_position({**_CASTLING_SETUP, "e2": "p"})
        assert not MoveGenerator(pos.board).can_castle(E1, G1)

    def test_not_while_in_check(self, make_position) -> None:
        pos = make_position({**_CASTLING_SETUP, "e5": "r"})
        gen = MoveGenerator(pos.board)
        assert not gen.can_castle(E1, G1)
        assert not gen.can_castle(E1, C1)

    def test_moved_king_cannot_castle(self, make_position) -> None:
        pos = make_position(_CASTLING_SETUP, moved=("e1",))
        gen = MoveGenerator(pos.board)
        assert not gen.can_castle(E1, G1)
        assert "g1" not in _names(gen.legal_moves(E1).quiet)

    def test_moved_rook_cannot_castle(self, make_position) -> None:
        pos = make_position(_CASTLING_SETUP, moved=("a1",))
        gen = MoveGenerator(pos.board)
        assert not gen.can_castle(E1, C1)
        assert gen.can_castle(E1, G1)

    def test_king_off_home_square(self, make_position) -> None:
        pos = make_position({"d1": "K", "h1": "R", "a1": "R", "e8": "k"})
        gen = MoveGenerator(pos.board)
        assert not gen.can_castle(parse_square("d1"), parse_square("f1"))

    def test_black_castling(self, make_position) -> None:
        pos = make_position(
            {"e8": "k", "a8": "r", "h8": "r", "e1": "K"}, side=Color.BLACK
        )
        moves = MoveGenerator(pos.board).legal_moves(E8)
        assert {"g8", "c8"} <= _names(moves.quiet)

    @pytest.mark.parametrize("blocker", ["b1", "c1", "d1"])
    def test_queenside_path_must_be_empty(self, make_position, blocker) -> None:
        pos = make_position({**_CASTLING_SETUP, blocker: "N"})
        assert not MoveGenerator(pos.board).can_castle(E1, C1)


class TestRoundTrip:
    def test_every_opening_move_unmakes_cleanly(self) -> None:
        pos = Position()
        before = pos.board.copy()
        gen = MoveGenerator(pos.board)
        for from_sq, moves in gen.legal_moves_for(Color.WHITE).items():
            for to_sq in moves.all:
                pos.make_move(from_sq, to_sq)
                pos.unmake_move()
                assert pos.board == before, f"{from_sq}{to_sq}"
                assert pos.side_to_move == Color.WHITE
