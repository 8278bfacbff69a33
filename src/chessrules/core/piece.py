"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType
from chessrules.core.errors import InputFormatError

# Piece code ↔ (Color, PieceType); uppercase = white
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_CODES: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

_UNICODE: dict[PieceType, tuple[str, str]] = {
    PieceType.PAWN: ("♙", "♟"),
    PieceType.KNIGHT: ("♘", "♞"),
    PieceType.BISHOP: ("♗", "♝"),
    PieceType.ROOK: ("♖", "♜"),
    PieceType.QUEEN: ("♕", "♛"),
    PieceType.KING: ("♔", "♚"),
}

PROMOTION_KINDS: dict[str, PieceType] = {
    "queen": PieceType.QUEEN,
    "rook": PieceType.ROOK,
    "bishop": PieceType.BISHOP,
    "knight": PieceType.KNIGHT,
}


def parse_promotion_kind(name: str) -> PieceType:
    """Map ``"queen"``, ``"rook"``, ``"bishop"`` or ``"knight"`` to a piece type.

    Matching ignores case. Any other text raises :class:`InputFormatError`.
    """
    if not isinstance(name, str):
        raise InputFormatError(f"Invalid promotion piece: {name!r}")
    try:
        return PROMOTION_KINDS[name.lower()]
    except KeyError:
        raise InputFormatError(
            f"Invalid promotion piece: {name!r} "
            f"(expected one of {', '.join(PROMOTION_KINDS)})"
        ) from None


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """One-character code (uppercase = white, lowercase = black)."""
        return _CODES[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its code, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except (KeyError, TypeError):
            raise InputFormatError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[self.piece_type][int(self.color)]

    def promoted(self, piece_type: PieceType) -> Piece:
        """The piece this pawn becomes on reaching the last rank."""
        return Piece(self.color, piece_type)
