"""Chess rules engine.

:class:`Game` is the entry point; everything a consumer needs is re-exported
here.
"""

from chessrules.core import (
    ChessError,
    Color,
    GameOver,
    GameState,
    IllegalDestination,
    InputFormatError,
    NoPieceAtSquare,
    Piece,
    PieceType,
    SerializationError,
    StateKind,
    WrongColorToMove,
)
from chessrules.game import Game, GameConfig, MoveRecord

__version__ = "0.1.0"

__all__ = [
    "ChessError",
    "Color",
    "Game",
    "GameConfig",
    "GameOver",
    "GameState",
    "IllegalDestination",
    "InputFormatError",
    "MoveRecord",
    "NoPieceAtSquare",
    "Piece",
    "PieceType",
    "SerializationError",
    "StateKind",
    "WrongColorToMove",
]
