"""Exceptions raised by the rules engine.

Every error is recoverable: an operation that raises leaves the game exactly
as it was before the call.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all engine errors."""


class InputFormatError(ChessError, ValueError):
    """Malformed square name or unrecognised promotion kind."""


class NoPieceAtSquare(ChessError):
    """The origin square of a move is empty."""


class WrongColorToMove(ChessError):
    """The origin square holds a piece of the side not on move."""


class IllegalDestination(ChessError):
    """The destination is not among the legal moves of the piece."""


class GameOver(ChessError):
    """A move was attempted after checkmate, stalemate or a draw."""


class SerializationError(ChessError, ValueError):
    """A state record could not be turned back into a game."""
