"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import make_square, parse_square

PositionBuilder = Callable[..., Position]


def position_from_diagram(
    diagram: str,
    side_to_move: Color = Color.WHITE,
    castling: CastlingRights = CastlingRights.NONE,
    en_passant: str | None = None,
    move_count: int = 0,
) -> Position:
    """Build a position from eight rows of piece codes, rank 8 first.

    ``.`` marks an empty square; spaces are ignored::

        r . . . k . . r
        . . . . . . . .
        ...
    """
    rows = [line.replace(" ", "") for line in diagram.strip().splitlines()]
    assert len(rows) == 8, f"diagram needs 8 rows, got {len(rows)}"
    board = Board()
    for row_idx, row in enumerate(rows):
        assert len(row) == 8, f"row {row!r} needs 8 squares"
        rank = 7 - row_idx
        for file, char in enumerate(row):
            if char != ".":
                board[make_square(file, rank)] = Piece.from_char(char)
    ep = None if en_passant is None else parse_square(en_passant)
    return Position(board, side_to_move, castling, ep, move_count)


@pytest.fixture
def make_position() -> PositionBuilder:
    """Return :func:`position_from_diagram` for tests that build positions."""
    return position_from_diagram
