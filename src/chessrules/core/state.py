"""Game status value object."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from chessrules.core.enums import Color


class StateKind(IntEnum):
    """Overall status of a game."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3
    DRAW = 4

    def __str__(self) -> str:
        return self.name.lower()


_TERMINAL = frozenset({StateKind.CHECKMATE, StateKind.STALEMATE, StateKind.DRAW})
_COLORED = frozenset({StateKind.CHECK, StateKind.CHECKMATE})


@dataclass(frozen=True, slots=True)
class GameState:
    """Status plus, for check and checkmate, the color whose king is attacked.

    Use the class-level constructors rather than building instances by hand::

        GameState.check(Color.WHITE)
        GameState.stalemate()
    """

    kind: StateKind
    color: Color | None = None

    def __post_init__(self) -> None:
        if (self.kind in _COLORED) != (self.color is not None):
            needs = "a color" if self.kind in _COLORED else "no color"
            raise ValueError(f"{self.kind.name} state takes {needs}")

    @classmethod
    def in_progress(cls) -> GameState:
        return cls(StateKind.IN_PROGRESS)

    @classmethod
    def check(cls, color: Color) -> GameState:
        return cls(StateKind.CHECK, color)

    @classmethod
    def checkmate(cls, color: Color) -> GameState:
        return cls(StateKind.CHECKMATE, color)

    @classmethod
    def stalemate(cls) -> GameState:
        return cls(StateKind.STALEMATE)

    @classmethod
    def draw(cls) -> GameState:
        return cls(StateKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        """Checkmate, stalemate and draw end the game."""
        return self.kind in _TERMINAL

    @property
    def winner(self) -> Color | None:
        if self.kind == StateKind.CHECKMATE and self.color is not None:
            return self.color.opposite
        return None

    def __str__(self) -> str:
        if self.color is None:
            return str(self.kind)
        return f"{self.kind}({self.color})"
