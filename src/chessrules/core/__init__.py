"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves_from(parse_square("g1")):
        print(move)
"""

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessrules.core.errors import (
    ChessError,
    GameOver,
    IllegalDestination,
    InputFormatError,
    NoPieceAtSquare,
    SerializationError,
    WrongColorToMove,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import PROMOTION_KINDS, Piece, parse_promotion_kind
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.state import GameState, StateKind
from chessrules.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "PieceType",
    "StateKind",
    # Types / helpers
    "PROMOTION_KINDS",
    "Square",
    "file_of",
    "make_square",
    "parse_promotion_kind",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Errors
    "ChessError",
    "GameOver",
    "IllegalDestination",
    "InputFormatError",
    "NoPieceAtSquare",
    "SerializationError",
    "WrongColorToMove",
]
