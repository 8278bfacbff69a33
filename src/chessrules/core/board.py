"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Fixed 64-slot piece store.

    Knows nothing about chess rules; copying is a flat list copy so move
    simulation stays cheap.
    """

    __slots__ = ("_squares", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[old_piece.color] == sq
        ):
            self._king_squares[old_piece.color] = None

        self._squares[sq] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[piece.color] = sq

    def get(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def place(self, sq: Square, piece: Piece) -> None:
        """Put *piece* on *sq*, replacing whatever stood there."""
        self[sq] = piece

    def remove(self, sq: Square) -> Piece | None:
        """Empty *sq* and return the piece that stood there, if any."""
        piece = self._squares[sq]
        if piece is not None:
            self[sq] = None
        return piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def is_occupied_by(self, sq: Square, color: Color) -> bool:
        piece = self._squares[sq]
        return piece is not None and piece.color == color

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """(square, piece) pairs for every occupied square, a1 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in self.occupied() if piece == target]

    def count(self, color: Color) -> int:
        return sum(
            1 for piece in self._squares if piece is not None and piece.color == color
        )

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[color]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def has_king(self, color: Color) -> bool:
        return self._king_squares[color] is not None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            for color in Color:
                b[make_square(f, color.home_rank)] = Piece(color, pt)
                b[make_square(f, color.pawn_rank)] = Piece(color, PieceType.PAWN)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
