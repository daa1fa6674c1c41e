"""Square type and coordinate helpers.

Board layout follows the placement field (row-major, top rank first):
    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple, TypeAlias

PieceSymbol: TypeAlias = str  # single FEN letter, uppercase = white


class Square(NamedTuple):
    """Grid coordinate: row 0 is rank 8, col 0 is file a."""

    row: int
    col: int


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. Square(6, 4) → 'e2'."""
    return chr(ord("a") + sq.col) + str(8 - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), ord(name[0]) - ord("a"))
