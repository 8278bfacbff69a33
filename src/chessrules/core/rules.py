"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.state import GameState
from chessrules.core.types import file_of, rank_of

if TYPE_CHECKING:
    from chessrules.core.position import Position

_MINORS = (PieceType.KNIGHT, PieceType.BISHOP)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        color = position.side_to_move if color is None else color
        return MoveGenerator(position).is_in_check(color)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move) and not gen.has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return not gen.is_in_check(position.side_to_move) and not gen.has_legal_move()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        others = [
            (sq, piece)
            for sq, piece in position.board.occupied()
            if piece.piece_type != PieceType.KING
        ]

        if not others:
            return True

        if len(others) == 1:
            return others[0][1].piece_type in _MINORS

        if len(others) == 2:
            (sq_a, a), (sq_b, b) = others
            if (
                a.piece_type == b.piece_type == PieceType.BISHOP
                and a.color != b.color
            ):
                shade_a = (file_of(sq_a) + rank_of(sq_a)) % 2
                shade_b = (file_of(sq_b) + rank_of(sq_b)) % 2
                return shade_a == shade_b

        return False

    @staticmethod
    def evaluate(
        position: Position, draw_on_insufficient_material: bool = False
    ) -> GameState:
        """Status of the game for the side about to move.

        Attacked with no legal move is checkmate, unattacked with no legal
        move is stalemate, attacked with a way out is check.
        """
        color = position.side_to_move
        gen = MoveGenerator(position)
        in_check = gen.is_in_check(color)

        if not gen.has_legal_move(color):
            return GameState.checkmate(color) if in_check else GameState.stalemate()

        if draw_on_insufficient_material and Rules.is_insufficient_material(position):
            return GameState.draw()

        if in_check:
            return GameState.check(color)
        return GameState.in_progress()
