"""Game — the public facade over the rules engine.

Squares are addressed by name (``"e2"``); every operation either completes
or raises a :class:`~chessrules.core.errors.ChessError` subclass having
changed nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessrules.core.errors import (
    GameOver,
    IllegalDestination,
    NoPieceAtSquare,
    WrongColorToMove,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import PROMOTION_KINDS, Piece, parse_promotion_kind
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.state import GameState
from chessrules.core.types import Square, make_square, parse_square, square_name
from chessrules.game.config import GameConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    mover: Piece
    captured: Piece | None
    state_after: GameState

    @property
    def was_capture(self) -> bool:
        return self.captured is not None

    @property
    def was_check(self) -> bool:
        return self.state_after.color is not None


class Game:
    """A chess game between two sides sharing one board.

    Quick start::

        game = Game()
        game.get_possible_moves("e2")   # ['e3', 'e4']
        game.make_move("e2", "e4")      # None, nothing captured
        game.active_color               # Color.BLACK
    """

    __slots__ = ("_config", "_position", "_state", "_promotion", "_history")

    def __init__(self, config: GameConfig | None = None) -> None:
        self._config = config if config is not None else GameConfig()
        self._position = Position()
        self._state = GameState.in_progress()
        self._promotion: dict[Color, PieceType] = {
            color: self._config.default_promotion for color in Color
        }
        self._history: list[MoveRecord] = []

    @classmethod
    def new(cls, config: GameConfig | None = None) -> Game:
        """Standard starting position, white to move."""
        return cls(config)

    @classmethod
    def from_position(
        cls,
        position: Position,
        config: GameConfig | None = None,
        promotion: Mapping[Color, PieceType] | None = None,
        state: GameState | None = None,
    ) -> Game:
        """Continue play from *position* (copied, never shared).

        The status is evaluated from the position unless *state* is given.
        """
        board = position.board
        for color in Color:
            kings = board.pieces(color, PieceType.KING)
            if len(kings) != 1:
                raise ValueError(
                    f"Position needs exactly one {color} king, found {len(kings)}"
                )

        game = cls(config)
        game._position = position.copy()
        if promotion is not None:
            for color, kind in promotion.items():
                if kind not in PROMOTION_KINDS.values():
                    raise ValueError(f"Invalid promotion piece for {color}: {kind!r}")
                game._promotion[color] = kind
        game._state = state if state is not None else game._evaluate()
        return game

    # ── Queries ──────────────────────────────────────────────────────────

    def get_possible_moves(self, square: str) -> list[str] | None:
        """Sorted names of the squares the piece on *square* may move to.

        None if the square is empty, or holds a piece of the side not on
        move (unless the config previews the inactive side). An empty list
        means the piece exists but cannot move.
        """
        sq = parse_square(square)
        piece = self._position.board[sq]
        if piece is None:
            return None
        if (
            piece.color != self.active_color
            and not self._config.preview_inactive_moves
        ):
            return None
        moves = self._legal_moves(sq, piece.color)
        return sorted(square_name(move.to_sq) for move in moves)

    def get_game_state(self) -> GameState:
        return self._state

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def active_color(self) -> Color:
        return self._position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self._state.is_terminal

    @property
    def move_count(self) -> int:
        """Number of half-moves played."""
        return self._position.move_count

    @property
    def fullmove_number(self) -> int:
        return self._position.fullmove_number

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def castling_rights(self) -> CastlingRights:
        return self._position.castling

    def can_castle(self, color: Color, kingside: bool) -> bool:
        """Whether *color* still holds the right to castle on that side.

        The right says nothing about whether castling is playable right now.
        """
        if kingside:
            right = CastlingRights.kingside(color)
        else:
            right = CastlingRights.queenside(color)
        return bool(self._position.castling & right)

    @property
    def en_passant_target(self) -> str | None:
        ep = self._position.en_passant
        return None if ep is None else square_name(ep)

    def promotion_choice(self, color: Color | None = None) -> PieceType:
        return self._promotion[self.active_color if color is None else color]

    def piece_at(self, square: str) -> Piece | None:
        return self._position.board[parse_square(square)]

    def pieces(self) -> dict[str, Piece]:
        """Square name -> piece for every occupied square."""
        board = self._position.board
        return {square_name(sq): piece for sq, piece in board.occupied()}

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def position(self) -> Position:
        """A copy of the current position."""
        return self._position.copy()

    def board_diagram(self, unicode: bool = False) -> str:
        """Text view of the board, rank 8 at the top, side to move first."""
        board = self._position.board
        side = "W" if self.active_color == Color.WHITE else "B"
        lines = [f"{side} a b c d e f g h"]
        for rank in range(7, -1, -1):
            cells = []
            for file in range(8):
                piece = board[make_square(file, rank)]
                if piece is None:
                    cells.append(".")
                else:
                    cells.append(piece.symbol if unicode else str(piece))
            lines.append(f"{rank + 1} {' '.join(cells)}")
        return "\n".join(lines)

    # ── Mutations ────────────────────────────────────────────────────────

    def make_move(self, from_square: str, to_square: str) -> Piece | None:
        """Move the piece on *from_square* to *to_square*.

        Returns the captured piece (an en passant victim included) or None.
        A pawn reaching the last rank becomes the mover's promotion choice.

        Raises:
            InputFormatError: a square name is malformed.
            GameOver: the game already ended.
            NoPieceAtSquare: *from_square* is empty.
            WrongColorToMove: the piece belongs to the side not on move.
            IllegalDestination: the piece cannot legally reach *to_square*.
        """
        from_sq = parse_square(from_square)
        to_sq = parse_square(to_square)
        color = self.active_color

        if self._state.is_terminal:
            self._reject(from_square, to_square, f"game is over ({self._state})")
            raise GameOver(f"Game is over: {self._state}")

        piece = self._position.board[from_sq]
        if piece is None:
            self._reject(from_square, to_square, "no piece")
            raise NoPieceAtSquare(f"No piece on {square_name(from_sq)}")
        if piece.color != color:
            self._reject(from_square, to_square, "wrong color")
            raise WrongColorToMove(
                f"{square_name(from_sq)} holds a {piece.color} piece, {color} to move"
            )

        move = next(
            (m for m in self._legal_moves(from_sq, color) if m.to_sq == to_sq), None
        )
        if move is None:
            self._reject(from_square, to_square, "illegal destination")
            raise IllegalDestination(
                f"{piece.piece_type} on {square_name(from_sq)} cannot move to "
                f"{square_name(to_sq)}"
            )
        if move.flag == MoveFlag.PROMOTION:
            move = move.with_promotion(self._promotion[color])

        captured = self._position.apply(move)
        self._state = self._evaluate()
        self._history.append(MoveRecord(move, piece, captured, self._state))

        _LOGGER.debug(
            "Applied %s (captured %s), state %s", move, captured, self._state
        )
        if self._state.is_terminal:
            _LOGGER.info("Game over after %s: %s", move, self._state)
        return captured

    def set_promotion(self, kind: str, color: Color | None = None) -> None:
        """Choose what the next promoting pawn of *color* becomes.

        *kind* is ``"queen"``, ``"rook"``, ``"bishop"`` or ``"knight"``
        (any case). *color* defaults to the side to move. The choice holds
        until changed.
        """
        piece_type = parse_promotion_kind(kind)
        self._promotion[self.active_color if color is None else color] = piece_type

    # ── Serialisation ────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        from chessrules.game.serialization import game_to_dict

        return game_to_dict(self)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], config: GameConfig | None = None
    ) -> Game:
        from chessrules.game.serialization import game_from_dict

        return game_from_dict(data, config)

    def to_json(self) -> str:
        from chessrules.game.serialization import dumps

        return dumps(self)

    @classmethod
    def from_json(cls, text: str, config: GameConfig | None = None) -> Game:
        from chessrules.game.serialization import loads

        return loads(text, config)

    # ── Internal ─────────────────────────────────────────────────────────

    def _legal_moves(self, sq: Square, color: Color) -> list[Move]:
        position = self._position
        if color != position.side_to_move:
            # Preview: the en passant target only ever belongs to the side on move.
            position = position.copy()
            position.side_to_move = color
            position.en_passant = None
        return MoveGenerator(position).legal_moves_from(sq, color)

    def _evaluate(self) -> GameState:
        return Rules.evaluate(
            self._position,
            draw_on_insufficient_material=self._config.draw_on_insufficient_material,
        )

    @staticmethod
    def _reject(from_square: str, to_square: str, reason: str) -> None:
        _LOGGER.debug("Rejected move %s-%s: %s", from_square, to_square, reason)

    def __repr__(self) -> str:
        return (
            f"Game(active_color={self.active_color}, state={self._state}, "
            f"move_count={self.move_count})\n{self.board_diagram()}"
        )
