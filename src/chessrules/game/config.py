"""Per-game options."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceType
from chessrules.core.piece import PROMOTION_KINDS


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable options for a :class:`~chessrules.game.game.Game`.

    Args:
        preview_inactive_moves: When False (default) ``get_possible_moves``
            answers None for pieces of the side not on move. When True it
            lists their legal moves as if it were their turn.
        default_promotion: Piece a pawn becomes when its side never called
            ``set_promotion``.
        draw_on_insufficient_material: End the game as a draw once neither
            side can possibly mate (K v K, K+minor v K, K+B v K+B with
            bishops on the same shade). Off unless asked for.
    """

    preview_inactive_moves: bool = False
    default_promotion: PieceType = PieceType.QUEEN
    draw_on_insufficient_material: bool = False

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_KINDS.values():
            raise ValueError(
                f"default_promotion must be a queen, rook, bishop or knight, "
                f"got {self.default_promotion!r}"
            )
