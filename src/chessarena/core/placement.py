"""FEN placement-field parsing and serialization.

The parser is deliberately lenient: it never validates rank widths or piece
letters, and never raises.  A malformed placement yields a malformed grid.
"""

from __future__ import annotations

from typing import TypeAlias

from chessarena.core.types import PieceSymbol, Square

Cell: TypeAlias = PieceSymbol | None
Board: TypeAlias = tuple[tuple[Cell, ...], ...]

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_DIGITS = "0123456789"


def placement_field(fen: str) -> str:
    """Return the piece-placement field of a (possibly full) FEN string."""
    return fen.split(" ")[0]


def parse_placement(text: str) -> Board:
    """Decode a placement field into rows of optional piece symbols.

    Row 0 is rank 8; column 0 is file a.  Trailing FEN fields are ignored.
    """
    rows: list[tuple[Cell, ...]] = []
    for rank_text in placement_field(text).split("/"):
        row: list[Cell] = []
        for ch in rank_text:
            if ch in _DIGITS:
                row.extend([None] * int(ch))
            else:
                row.append(ch)
        rows.append(tuple(row))
    return tuple(rows)


def to_placement(board: Board) -> str:
    """Serialise a grid back to a placement field."""
    ranks: list[str] = []
    for row in board:
        text = ""
        empty = 0
        for cell in row:
            if cell is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += cell
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def piece_at(board: Board, sq: Square) -> Cell:
    """Tolerant lookup: cells outside a malformed grid read as empty."""
    if not (0 <= sq.row < len(board)):
        return None
    row = board[sq.row]
    if not (0 <= sq.col < len(row)):
        return None
    return row[sq.col]


def without_piece(board: Board, sq: Square) -> Board:
    """Return a copy of *board* with *sq* emptied."""
    if piece_at(board, sq) is None:
        return board
    rows = [list(row) for row in board]
    rows[sq.row][sq.col] = None
    return tuple(tuple(row) for row in rows)
