"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import MoveFlag, PieceType
from chessrules.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A single move from one square to another.

    ``promotion`` is only filled in once the piece kind is chosen; moves
    produced by the generator carry ``MoveFlag.PROMOTION`` with no kind.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """Long-algebraic text, e.g. ``e7e8q``."""
        return str(self)

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    def with_promotion(self, piece_type: PieceType) -> Move:
        return Move(self.from_sq, self.to_sq, self.flag, piece_type)
