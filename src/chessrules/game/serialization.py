"""State record for consumers that render a game remotely.

A game becomes a plain dict (and JSON text) holding the board, the side to
move, the status, castling rights, the en passant target, both promotion
choices and the ply count. Loading a record gives back a game that plays
on exactly as the saved one would. Move history is not part of the record.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color
from chessrules.core.errors import InputFormatError, SerializationError
from chessrules.core.piece import Piece, parse_promotion_kind
from chessrules.core.position import Position
from chessrules.core.state import GameState, StateKind
from chessrules.core.types import Square, parse_square, rank_of, square_name
from chessrules.game.game import Game

if TYPE_CHECKING:
    from chessrules.game.config import GameConfig

_LOGGER = logging.getLogger(__name__)

_COLORS: dict[str, Color] = {str(color): color for color in Color}
_STATE_KINDS: dict[str, StateKind] = {str(kind): kind for kind in StateKind}
_SIDES = ("kingside", "queenside")


def game_to_dict(game: Game) -> dict[str, Any]:
    """Snapshot *game* as a JSON-compatible dict."""
    state = game.state
    return {
        "board": {name: str(piece) for name, piece in game.pieces().items()},
        "active_color": str(game.active_color),
        "state": {
            "kind": str(state.kind),
            "color": None if state.color is None else str(state.color),
        },
        "castling": {
            str(color): {
                "kingside": game.can_castle(color, kingside=True),
                "queenside": game.can_castle(color, kingside=False),
            }
            for color in Color
        },
        "en_passant": game.en_passant_target,
        "promotion": {str(color): str(game.promotion_choice(color)) for color in Color},
        "move_count": game.move_count,
    }


def game_from_dict(
    data: Mapping[str, Any], config: GameConfig | None = None
) -> Game:
    """Rebuild a game from a :func:`game_to_dict` record.

    The status is re-evaluated from the position; a recorded draw is kept
    since no board alone can show it.

    Raises:
        SerializationError: on a missing field, a bad value, or a board
            without exactly one king per side.
    """
    if not isinstance(data, Mapping):
        raise SerializationError(
            f"State record must be a mapping, got {type(data).__name__}"
        )
    try:
        board = _read_board(_field(data, "board", Mapping))
        side = _read_color(_field(data, "active_color", str))
        castling = _read_castling(_field(data, "castling", Mapping))
        en_passant = _read_en_passant(data.get("en_passant"), side)
        move_count = _field(data, "move_count", int)
        if move_count < 0 or isinstance(move_count, bool):
            raise SerializationError(f"Invalid move_count: {move_count!r}")
        promotion = {
            _read_color(name): parse_promotion_kind(kind)
            for name, kind in _field(data, "promotion", Mapping).items()
        }
        recorded = _read_state(_field(data, "state", Mapping))
    except InputFormatError as exc:
        raise SerializationError(str(exc)) from exc

    position = Position(board, side, castling, en_passant, move_count)
    try:
        game = Game.from_position(position, config=config, promotion=promotion)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc

    if recorded.kind == StateKind.DRAW and not game.state.is_terminal:
        game = Game.from_position(
            position, config=config, promotion=promotion, state=recorded
        )
    elif recorded != game.state:
        _LOGGER.debug(
            "Recorded state %s disagrees with position, using %s",
            recorded,
            game.state,
        )
    _LOGGER.debug("Loaded game at ply %d, %s to move", move_count, side)
    return game


def dumps(game: Game, **kwargs: Any) -> str:
    """JSON text of :func:`game_to_dict`; *kwargs* go to :func:`json.dumps`."""
    return json.dumps(game_to_dict(game), **kwargs)


def loads(text: str, config: GameConfig | None = None) -> Game:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid JSON state record: {exc}") from exc
    return game_from_dict(data, config)


# ── Field readers ────────────────────────────────────────────────────────────


def _field(data: Mapping[str, Any], key: str, expected: type) -> Any:
    try:
        value = data[key]
    except KeyError:
        raise SerializationError(f"State record is missing {key!r}") from None
    if not isinstance(value, expected):
        raise SerializationError(
            f"Field {key!r} should be {expected.__name__}, got {type(value).__name__}"
        )
    return value


def _read_color(name: object) -> Color:
    try:
        return _COLORS[name]  # type: ignore[index]
    except (KeyError, TypeError):
        raise SerializationError(f"Invalid color: {name!r}") from None


def _read_board(cells: Mapping[str, Any]) -> Board:
    board = Board()
    for name, code in cells.items():
        board.place(parse_square(name), Piece.from_char(code))
    return board


def _read_castling(rights: Mapping[str, Any]) -> CastlingRights:
    castling = CastlingRights.NONE
    for name, sides in rights.items():
        color = _read_color(name)
        if not isinstance(sides, Mapping):
            raise SerializationError(f"Invalid castling entry for {name}: {sides!r}")
        for side in _SIDES:
            flag = sides.get(side, False)
            if not isinstance(flag, bool):
                raise SerializationError(f"Invalid {side} right for {name}: {flag!r}")
            if flag:
                if side == "kingside":
                    castling |= CastlingRights.kingside(color)
                else:
                    castling |= CastlingRights.queenside(color)
    return castling


def _read_en_passant(name: object, side: Color) -> Square | None:
    if name is None:
        return None
    if not isinstance(name, str):
        raise SerializationError(f"Invalid en passant square: {name!r}")
    sq = parse_square(name)
    # The target sits behind a pawn of the side that just moved.
    expected_rank = 5 if side == Color.WHITE else 2
    if rank_of(sq) != expected_rank:
        raise SerializationError(
            f"En passant square {square_name(sq)} impossible with {side} to move"
        )
    return sq


def _read_state(record: Mapping[str, Any]) -> GameState:
    kind_name = record.get("kind")
    try:
        kind = _STATE_KINDS[kind_name]  # type: ignore[index]
    except (KeyError, TypeError):
        raise SerializationError(f"Invalid state kind: {kind_name!r}") from None
    color_name = record.get("color")
    color = None if color_name is None else _read_color(color_name)
    try:
        return GameState(kind, color)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc
