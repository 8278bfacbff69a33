"""Pseudo-legal move generation, attack detection and the legality filter."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Square, file_of, make_square, on_board, rank_of

if TYPE_CHECKING:
    from chessrules.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# (flag, right for color, rook file, files that must be empty,
#  files the king crosses or lands on, king destination file)
_CastleSpec = tuple[
    MoveFlag,
    Callable[[Color], CastlingRights],
    int,
    tuple[int, ...],
    tuple[int, ...],
    int,
]
_CASTLES: tuple[_CastleSpec, ...] = (
    (MoveFlag.CASTLE_KINGSIDE, CastlingRights.kingside, 7, (5, 6), (5, 6), 6),
    (MoveFlag.CASTLE_QUEENSIDE, CastlingRights.queenside, 0, (1, 2, 3), (3, 2), 2),
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        f, r = file_of(sq), rank_of(sq)
        targets.append(
            tuple(
                make_square(f + df, r + dr)
                for df, dr in offsets
                if on_board(f + df, r + dr)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af, ar = file_of(sq) + df, rank_of(sq) + dr
            ray: list[Square] = []
            while on_board(af, ar):
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)

_STEP_TARGETS: dict[PieceType, tuple[tuple[Square, ...], ...]] = {
    PieceType.KNIGHT: _KNIGHT_TARGETS,
    PieceType.KING: _KING_TARGETS,
}
_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _build_rays(QUEEN_DIRS),
}

_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


class MoveGenerator:
    """Generates moves for the pieces of a :class:`Position`.

    Pseudo-legal moves follow piece geometry only. Legal moves are the
    pseudo-legal ones that survive :meth:`filter_legal`, which plays each
    candidate on a copy of the position and rejects it if the mover's king
    is attacked afterwards. Pins, check evasions and king walks into check
    all fall out of that single test.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves_from(
        self, sq: Square, color: Color | None = None
    ) -> list[Move]:
        """Geometrically reachable moves for the piece on *sq*.

        Empty if the square is empty, or if *color* is given and the piece
        belongs to the other side. Squares holding a king are never targets.
        """
        piece = self._board[sq]
        if piece is None or (color is not None and piece.color != color):
            return []

        moves: list[Move] = []
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif pt in _SLIDER_RAYS:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[pt][sq], moves)
        else:
            self._gen_steps(sq, piece.color, _STEP_TARGETS[pt][sq], moves)
            if pt == PieceType.KING:
                self._gen_castling(sq, piece.color, moves)
        return moves

    def filter_legal(self, moves: Iterable[Move]) -> list[Move]:
        """Drop every move that would leave the mover's own king attacked."""
        legal: list[Move] = []
        for move in moves:
            mover = self._board[move.from_sq]
            if mover is None:
                continue
            trial = self._pos.copy()
            trial.apply(move)
            if not MoveGenerator(trial).is_in_check(mover.color):
                legal.append(move)
        return legal

    def legal_moves_from(self, sq: Square, color: Color | None = None) -> list[Move]:
        """Legal moves for the piece on *sq* (see :meth:`pseudo_legal_moves_from`)."""
        return self.filter_legal(self.pseudo_legal_moves_from(sq, color))

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All legal moves for *color* (default: the side to move)."""
        color = self._pos.side_to_move if color is None else color
        legal: list[Move] = []
        for sq in self._board.all_pieces(color):
            legal.extend(self.legal_moves_from(sq, color))
        return legal

    def has_legal_move(self, color: Color | None = None) -> bool:
        """Whether *color* has at least one legal move; stops at the first."""
        color = self._pos.side_to_move if color is None else color
        for sq in self._board.all_pieces(color):
            if self.legal_moves_from(sq, color):
                return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        if not self._board.has_king(color):
            return False
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board

        # A pawn of by_color attacks sq from one rank behind it, one file over.
        pawn_rank = rank_of(sq) - by_color.forward
        if 0 <= pawn_rank < 8:
            pawn = Piece(by_color, PieceType.PAWN)
            for df in (-1, 1):
                pawn_file = file_of(sq) + df
                if not 0 <= pawn_file < 8:
                    continue
                if board[make_square(pawn_file, pawn_rank)] == pawn:
                    return True

        knight = Piece(by_color, PieceType.KNIGHT)
        if any(board[from_sq] == knight for from_sq in _KNIGHT_TARGETS[sq]):
            return True

        king = Piece(by_color, PieceType.KING)
        if any(board[from_sq] == king for from_sq in _KING_TARGETS[sq]):
            return True

        return self._ray_attacked(
            _BISHOP_RAYS[sq], by_color, _DIAGONAL_ATTACKERS
        ) or self._ray_attacked(_ROOK_RAYS[sq], by_color, _STRAIGHT_ATTACKERS)

    def _ray_attacked(
        self,
        rays: tuple[tuple[Square, ...], ...],
        by_color: Color,
        attackers: tuple[PieceType, ...],
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in attackers:
                    return True
                break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _can_land(self, to_sq: Square, color: Color) -> bool:
        target = self._board[to_sq]
        return target is None or (
            target.color != color and target.piece_type != PieceType.KING
        )

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        file_idx, rank_idx = file_of(sq), rank_of(sq)
        ahead = rank_idx + color.forward
        if not 0 <= ahead < 8:
            return
        flag = MoveFlag.PROMOTION if ahead == color.promotion_rank else MoveFlag.NORMAL

        one_step = make_square(file_idx, ahead)
        if board.is_empty(one_step):
            moves.append(Move(sq, one_step, flag))
            if rank_idx == color.pawn_rank:
                two_step = make_square(file_idx, ahead + color.forward)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for df in (-1, 1):
            cap_file = file_idx + df
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, ahead)
            target = board[cap_sq]
            if target is not None:
                if self._can_land(cap_sq, color):
                    moves.append(Move(sq, cap_sq, flag))
            elif cap_sq == self._pos.en_passant and board[
                make_square(cap_file, rank_idx)
            ] == Piece(color.opposite, PieceType.PAWN):
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        for to_sq in targets:
            if self._can_land(to_sq, color):
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                if board[to_sq] is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if self._can_land(to_sq, color):
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rank = color.home_rank
        if king_sq != make_square(4, rank):
            return
        if not self._pos.castling & CastlingRights.both(color):
            return

        board = self._board
        opponent = color.opposite
        rook = Piece(color, PieceType.ROOK)
        king_attacked: bool | None = None

        for spec in _CASTLES:
            flag, right_for, rook_file, empty_files, transit_files, dest_file = spec
            if not self._pos.castling & right_for(color):
                continue
            if board[make_square(rook_file, rank)] != rook:
                continue
            if any(not board.is_empty(make_square(f, rank)) for f in empty_files):
                continue
            if king_attacked is None:
                king_attacked = self.is_square_attacked(king_sq, opponent)
            if king_attacked:
                return
            if any(
                self.is_square_attacked(make_square(f, rank), opponent)
                for f in transit_files
            ):
                continue
            moves.append(Move(king_sq, make_square(dest_file, rank), flag))
