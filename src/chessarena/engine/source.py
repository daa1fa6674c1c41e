"""Pluggable move-source interface.

A move source is asked for a move given the current game and answers
asynchronously with a coordinate move such as ``e2e4`` or ``e7e8q``.  The
exhibition never parses that string itself; it hands it to the rules engine.
"""

from __future__ import annotations

from collections.abc import Sequence

from PyQt6.QtCore import QObject, pyqtSignal


class MoveSource(QObject):
    """Base class for everything that can propose moves.

    Signals:
        move_ready(str): Coordinate move for the last request.
        failed(str): The request cannot be answered (no move, transport error).
    """

    move_ready = pyqtSignal(str)
    failed = pyqtSignal(str)

    def __init__(self, name: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def start(self) -> None:
        """Acquire resources (processes, handshakes).  Idempotent."""

    def request_move(self, fen: str, moves: Sequence[str]) -> None:
        """Begin computing a move for *fen*, reached from the start by *moves*."""
        raise NotImplementedError

    def cancel(self) -> None:
        """Forget the pending request; a late answer must not be emitted."""

    def shutdown(self) -> None:
        """Release resources.  The source may not be used afterwards."""
        self.cancel()
