"""RandomMoveSource — picks a uniformly random legal move."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

import chess
from PyQt6.QtCore import QObject, QTimer

from chessarena.engine.source import MoveSource

_LOGGER = logging.getLogger(__name__)


class RandomMoveSource(MoveSource):
    """Answers each request with a random legal move after *think_time_ms*."""

    def __init__(
        self,
        name: str = "Random",
        *,
        think_time_ms: int = 300,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(name, parent)
        self._think_time_ms = think_time_ms
        self._rng = rng or random.Random()
        self._pending: str | None = None

        self._reply_timer = QTimer(self)
        self._reply_timer.setSingleShot(True)
        self._reply_timer.timeout.connect(self._emit_pending)

    def pick(self, fen: str) -> str | None:
        """Return a random legal move for *fen* in coordinate notation."""
        board = chess.Board(fen)
        legal = list(board.legal_moves)
        if not legal:
            return None
        return self._rng.choice(legal).uci()

    def request_move(self, fen: str, moves: Sequence[str]) -> None:
        self.cancel()
        try:
            move = self.pick(fen)
        except ValueError as exc:
            _LOGGER.warning("%s received an invalid FEN %r: %s", self.name, fen, exc)
            self.failed.emit(f"Invalid position: {exc}")
            return
        if move is None:
            self.failed.emit("No legal moves")
            return
        self._pending = move
        self._reply_timer.start(self._think_time_ms)

    def cancel(self) -> None:
        self._reply_timer.stop()
        self._pending = None

    def _emit_pending(self) -> None:
        move = self._pending
        self._pending = None
        if move is not None:
            self.move_ready.emit(move)
