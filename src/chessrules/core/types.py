"""Square type alias and coordinate helpers.

Board layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63
"""

from __future__ import annotations

from typing import TypeAlias

from chessrules.core.errors import InputFormatError

Square: TypeAlias = int  # 0–63

_FILES = "abcdefgh"
_RANKS = "12345678"


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return sq >> 3


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return rank * 8 + file


def on_board(file: int, rank: int) -> bool:
    return 0 <= file < 8 and 0 <= rank < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a1', 63 → 'h8'."""
    return _FILES[file_of(sq)] + _RANKS[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Parse a square name such as ``'e4'`` (or ``'E4'``) into a square index.

    Anything other than exactly a file letter followed by a rank digit is
    rejected with :class:`InputFormatError`; out-of-range values are never
    clamped.
    """
    if not isinstance(name, str) or len(name) != 2:
        raise InputFormatError(f"Invalid square name: {name!r}")
    file_char, rank_char = name[0].lower(), name[1]
    if file_char not in _FILES:
        raise InputFormatError(f"Invalid file in square {name!r}, expected a-h")
    if rank_char not in _RANKS:
        raise InputFormatError(f"Invalid rank in square {name!r}, expected 1-8")
    return make_square(_FILES.index(file_char), _RANKS.index(rank_char))


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = range(0, 8)
A2, B2, C2, D2, E2, F2, G2, H2 = range(8, 16)
A3, B3, C3, D3, E3, F3, G3, H3 = range(16, 24)
A4, B4, C4, D4, E4, F4, G4, H4 = range(24, 32)
A5, B5, C5, D5, E5, F5, G5, H5 = range(32, 40)
A6, B6, C6, D6, E6, F6, G6, H6 = range(40, 48)
A7, B7, C7, D7, E7, F7, G7, H7 = range(48, 56)
A8, B8, C8, D8, E8, F8, G8, H8 = range(56, 64)
