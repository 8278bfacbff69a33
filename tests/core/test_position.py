"""Tests for Position.apply: side effects and bookkeeping."""

import pytest

from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import (
    A1, A8, C1, D1, D5, D6, D7, E1, E2, E4, E5, F1, G1, H1, H8,
    B7, B8,
    parse_square,
)

CORNERS = """
r . . . k . . r
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
R . . . K . . R
"""


class TestApply:
    def test_side_switches_and_counts(self) -> None:
        pos = Position()
        pos.apply(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.side_to_move == Color.BLACK
        assert pos.move_count == 1
        assert pos.fullmove_number == 1

    def test_double_step_sets_en_passant(self) -> None:
        pos = Position()
        pos.apply(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.en_passant == parse_square("e3")

    def test_en_passant_cleared_by_next_move(self) -> None:
        pos = Position()
        pos.apply(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        pos.apply(Move(D7, parse_square("d6")))
        assert pos.en_passant is None

    def test_normal_capture_returned(self, make_position) -> None:
        pos = make_position("""
            . . . . k . . .
            . . . . . . . .
            . . . . . . . .
            . . . p . . . .
            . . . . P . . .
            . . . . . . . .
            . . . . . . . .
            . . . . K . . .
        """)
        captured = pos.apply(Move(E4, D5))
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.board[D5] == Piece(Color.WHITE, PieceType.PAWN)

    def test_en_passant_removes_adjacent_pawn(self, make_position) -> None:
        pos = make_position("""
            . . . . k . . .
            . . . . . . . .
            . . . . . . . .
            . . . p P . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . K . . .
        """, en_passant="d6")
        captured = pos.apply(Move(E5, D6, MoveFlag.EN_PASSANT))
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert pos.board[D5] is None
        assert pos.board[D6] == Piece(Color.WHITE, PieceType.PAWN)

    def test_promotion_substitutes_piece(self, make_position) -> None:
        pos = make_position("""
            . . . . k . . .
            . P . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . K . . .
        """)
        pos.apply(Move(B7, B8, MoveFlag.PROMOTION, PieceType.ROOK))
        assert pos.board[B8] == Piece(Color.WHITE, PieceType.ROOK)

    def test_promotion_without_kind_defaults_to_queen(self, make_position) -> None:
        pos = make_position("""
            . . . . k . . .
            . P . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . K . . .
        """)
        pos.apply(Move(B7, B8, MoveFlag.PROMOTION))
        assert pos.board[B8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_empty_origin_raises(self) -> None:
        with pytest.raises(ValueError):
            Position().apply(Move(E4, parse_square("e5")))


class TestCastlingSideEffects:
    def test_kingside_moves_rook(self, make_position) -> None:
        pos = make_position(CORNERS, castling=CastlingRights.ALL)
        pos.apply(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[H1] is None
        assert pos.board[E1] is None

    def test_queenside_moves_rook(self, make_position) -> None:
        pos = make_position(CORNERS, castling=CastlingRights.ALL)
        pos.apply(Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[A1] is None

    def test_castling_clears_both_rights(self, make_position) -> None:
        pos = make_position(CORNERS, castling=CastlingRights.ALL)
        pos.apply(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.castling == CastlingRights.BLACK_BOTH


class TestCastlingRights:
    def test_king_move_clears_both(self, make_position) -> None:
        pos = make_position(CORNERS, castling=CastlingRights.ALL)
        pos.apply(Move(E1, E2))
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_clears_its_side(self, make_position) -> None:
        pos = make_position(CORNERS, castling=CastlingRights.ALL)
        pos.apply(Move(H1, parse_square("h2")))
        assert not pos.castling & CastlingRights.WHITE_KINGSIDE
        assert pos.castling & CastlingRights.WHITE_QUEENSIDE

    def test_rook_captured_on_home_square(self, make_position) -> None:
        pos = make_position(CORNERS, side_to_move=Color.BLACK, castling=CastlingRights.ALL)
        # Black rook a8 takes the white rook on a1.
        pos.apply(Move(A8, A1))
        assert pos.castling == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE

    def test_rights_stay_lost(self, make_position) -> None:
        pos = make_position(CORNERS, castling=CastlingRights.ALL)
        pos.apply(Move(H1, parse_square("h2")))
        pos.apply(Move(H8, parse_square("h7")))
        pos.apply(Move(parse_square("h2"), H1))
        pos.apply(Move(parse_square("h7"), H8))
        assert pos.castling == CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_QUEENSIDE


class TestCopy:
    def test_copy_is_independent(self) -> None:
        pos = Position()
        copy = pos.copy()
        copy.apply(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos == Position()
        assert copy != pos

    def test_captured_by_does_not_mutate(self, make_position) -> None:
        pos = make_position("""
            . . . . k . . .
            . . . . . . . .
            . . . . . . . .
            . . . p P . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . K . . .
        """, en_passant="d6")
        before = pos.copy()
        move = Move(E5, D6, MoveFlag.EN_PASSANT)
        assert pos.captured_by(move) == Piece(Color.BLACK, PieceType.PAWN)
        assert pos == before
