"""Move inference from two successive board snapshots.

No move object is handed down from the rules engine; the single move that
turned *old* into *new* is reconstructed from the cells that changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessarena.core.placement import Board, Cell
from chessarena.core.types import PieceSymbol, Square, square_name

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Change:
    """One cell whose content differs between the two boards."""

    row: int
    col: int
    was: Cell
    now: Cell

    @property
    def square(self) -> Square:
        return Square(self.row, self.col)

    @property
    def vacated(self) -> bool:
        return bool(self.was) and not self.now

    @property
    def arrived(self) -> bool:
        return not self.was and bool(self.now)

    @property
    def replaced(self) -> bool:
        return bool(self.was) and bool(self.now)


@dataclass(frozen=True, slots=True)
class Move:
    """A single inferred piece move."""

    from_sq: Square
    to_sq: Square
    piece: PieceSymbol
    captured: bool = False
    captured_piece: PieceSymbol | None = None

    def __str__(self) -> str:
        sep = "x" if self.captured else "-"
        return f"{self.piece}{square_name(self.from_sq)}{sep}{square_name(self.to_sq)}"


def find_changes(old: Board, new: Board) -> list[Change]:
    """Collect every differing cell of the 8×8 grid in row-major order."""
    changes: list[Change] = []
    for row in range(8):
        for col in range(8):
            was = old[row][col]
            now = new[row][col]
            if was != now:
                changes.append(Change(row, col, was, now))
    return changes


def _match_pair(first: Change, second: Change) -> Move | None:
    if not first.vacated or first.was != second.now:
        return None
    assert first.was is not None
    if second.arrived:
        return Move(first.square, second.square, first.was)
    if second.replaced:
        return Move(
            first.square,
            second.square,
            first.was,
            captured=True,
            captured_piece=second.was,
        )
    return None


def _fallback(changes: list[Change]) -> Move | None:
    """Pair the first vacated cell with the first cell a piece appeared on.

    Used for castling, promotion and en passant, where the piece may be
    misidentified.
    """
    vacated = next((c for c in changes if c.vacated), None)
    arrived = next((c for c in changes if c.arrived), None)
    if vacated is None or arrived is None:
        return None
    piece = vacated.was or arrived.now
    assert piece is not None
    return Move(vacated.square, arrived.square, piece)


def infer_move(old: Board, new: Board) -> Move | None:
    """Infer the move between two boards; may raise on a malformed grid."""
    changes = find_changes(old, new)
    if len(changes) < 2:
        return None

    # First matching pair in scan order wins, not the most plausible one.
    for i, first in enumerate(changes):
        for second in changes[i + 1 :]:
            move = _match_pair(first, second)
            if move is not None:
                return move

    return _fallback(changes)


def compute_move(old: Board, new: Board) -> Move | None:
    """Infer the move between two boards, or ``None`` if nothing is animatable.

    Never raises: any failure is logged and treated as "no move".
    """
    try:
        move = infer_move(old, new)
    except Exception:
        _LOGGER.debug("Move inference failed", exc_info=True)
        return None
    if move is None:
        _LOGGER.debug("No animatable move between boards")
    return move
