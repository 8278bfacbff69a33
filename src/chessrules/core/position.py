"""Position — board plus the auxiliary state needed to play from it."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Square, file_of, make_square, rank_of

# Rook home square -> right lost when anything leaves or lands on it.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

# Castle flag -> (rook file before, rook file after)
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


def en_passant_victim(move: Move) -> Square:
    """Square of the pawn removed by an en passant capture."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


class Position:
    """Full chess position: board, side to move, castling rights,
    en passant target and the number of plies played.

    :meth:`apply` is the only mutator. Callers that need to look ahead
    (legality checks) work on :meth:`copy`.
    """

    __slots__ = ("board", "side_to_move", "castling", "en_passant", "move_count")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        move_count: int = 0,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.move_count = move_count

    # ── Core move operation ──────────────────────────────────────────────

    def apply(self, move: Move) -> Piece | None:
        """Play *move* and return the captured piece, if any.

        The move is assumed legal. Side effects of castling, en passant and
        promotion are carried out here, castling rights and the en passant
        target are updated, and the turn passes to the other side.
        """
        board = self.board
        piece = board.remove(move.from_sq)
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        if move.flag == MoveFlag.EN_PASSANT:
            captured = board.remove(en_passant_victim(move))
        else:
            captured = board.remove(move.to_sq)

        placed = piece
        if move.flag == MoveFlag.PROMOTION:
            placed = piece.promoted(move.promotion or PieceType.QUEEN)
        board.place(move.to_sq, placed)

        rook_files = _CASTLE_ROOK_FILES.get(move.flag)
        if rook_files is not None:
            rank = rank_of(move.from_sq)
            rook = board.remove(make_square(rook_files[0], rank))
            if rook is None:
                raise ValueError(f"No rook to castle with for {move}")
            board.place(make_square(rook_files[1], rank), rook)

        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )
        else:
            self.en_passant = None

        self._update_castling(move, piece)
        self.move_count += 1
        self.side_to_move = self.side_to_move.opposite
        return captured

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.piece_type == PieceType.KING:
            self.castling &= ~CastlingRights.both(piece.color)

        for sq in (move.from_sq, move.to_sq):
            right = _ROOK_CORNERS.get(sq)
            if right is not None:
                self.castling &= ~right

    # ── Utilities ────────────────────────────────────────────────────────

    def captured_by(self, move: Move) -> Piece | None:
        """The piece *move* would capture, without playing it."""
        if move.flag == MoveFlag.EN_PASSANT:
            return self.board[en_passant_victim(move)]
        return self.board[move.to_sq]

    def copy(self) -> Position:
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            move_count=self.move_count,
        )

    @property
    def fullmove_number(self) -> int:
        """Full-move number as shown to players (starts at 1)."""
        return self.move_count // 2 + 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.move_count == other.move_count
        )

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move}, "
            f"castling={self.castling!r}, en_passant={self.en_passant}, "
            f"move_count={self.move_count})\n{self.board!r}"
        )
