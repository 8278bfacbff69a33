"""Tests for Rules: check, checkmate, stalemate, draw detection."""

from chessrules.core.enums import Color
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.state import GameState, StateKind


FOOLS_MATE = """
r n b . k b n r
p p p p . p p p
. . . . . . . .
. . . . p . . .
. . . . . . P q
. . . . . P . .
P P P P P . . P
R N B Q K B N R
"""


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(Position())

    def test_fools_mate_in_check(self, make_position) -> None:
        pos = make_position(FOOLS_MATE)
        assert Rules.is_in_check(pos)
        assert not Rules.is_in_check(pos, Color.BLACK)


class TestCheckmate:
    def test_fools_mate(self, make_position) -> None:
        pos = make_position(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.evaluate(pos) == GameState.checkmate(Color.WHITE)

    def test_back_rank_mate(self, make_position) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = make_position("""
            R . . k . . . .
            . . . . . . . .
            . . . K . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
        """, side_to_move=Color.BLACK)
        assert Rules.is_checkmate(pos)
        state = Rules.evaluate(pos)
        assert state == GameState.checkmate(Color.BLACK)
        assert state.winner == Color.WHITE

    def test_not_checkmate_when_can_escape(self, make_position) -> None:
        pos = make_position("""
            . . . . k . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            r . . . K . . .
        """)
        assert not Rules.is_checkmate(pos)
        assert Rules.evaluate(pos) == GameState.check(Color.WHITE)


class TestStalemate:
    STALEMATE = """
        . . . . . . . k
        . . . . . . . .
        . . . . . K Q .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
    """

    def test_king_trapped(self, make_position) -> None:
        pos = make_position(self.STALEMATE, side_to_move=Color.BLACK)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.evaluate(pos).kind == StateKind.STALEMATE

    def test_not_stalemate_when_has_moves(self, make_position) -> None:
        pos = make_position("""
            . . . . . . . k
            . . . . . . . .
            . . . . . K . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
        """, side_to_move=Color.BLACK)
        assert not Rules.is_stalemate(pos)
        assert Rules.evaluate(pos) == GameState.in_progress()


class TestInsufficientMaterial:
    @staticmethod
    def _kings_plus(make_position, extra_rank: str) -> Position:
        return make_position(f"""
            . . . . k . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            {extra_rank}
            . . . . K . . .
        """)

    def test_k_vs_k(self, make_position) -> None:
        assert Rules.is_insufficient_material(self._kings_plus(make_position, "........"))

    def test_k_bishop_vs_k(self, make_position) -> None:
        assert Rules.is_insufficient_material(self._kings_plus(make_position, "...B...."))

    def test_k_knight_vs_k(self, make_position) -> None:
        assert Rules.is_insufficient_material(self._kings_plus(make_position, "...N...."))

    def test_same_shade_bishops(self, make_position) -> None:
        # c2 and e2 are the same shade
        assert Rules.is_insufficient_material(self._kings_plus(make_position, "..B.b..."))

    def test_opposite_shade_bishops(self, make_position) -> None:
        assert not Rules.is_insufficient_material(
            self._kings_plus(make_position, "..B..b..")
        )

    def test_k_rook_vs_k_sufficient(self, make_position) -> None:
        assert not Rules.is_insufficient_material(
            self._kings_plus(make_position, "...R....")
        )

    def test_kp_vs_k_sufficient(self, make_position) -> None:
        assert not Rules.is_insufficient_material(
            self._kings_plus(make_position, "...P....")
        )

    def test_evaluate_draw_only_when_asked(self, make_position) -> None:
        pos = self._kings_plus(make_position, "...N....")
        assert Rules.evaluate(pos) == GameState.in_progress()
        assert Rules.evaluate(pos, draw_on_insufficient_material=True) == GameState.draw()
