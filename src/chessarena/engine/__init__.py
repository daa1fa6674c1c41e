"""Move sources: random picker, UCI engine client and a canned mock engine."""

from __future__ import annotations

from PyQt6.QtCore import QObject

from chessarena.config import ArenaSettings
from chessarena.engine.random_source import RandomMoveSource
from chessarena.engine.source import MoveSource
from chessarena.engine.uci_source import UciMoveSource


def create_move_source(
    kind: str,
    name: str,
    settings: ArenaSettings,
    parent: QObject | None = None,
) -> MoveSource:
    """Build the move source *kind* (``"random"`` or ``"uci"``)."""
    if kind == "random":
        return RandomMoveSource(
            name, think_time_ms=settings.think_time_ms, parent=parent
        )
    if kind == "uci":
        return UciMoveSource(
            name,
            settings.engine_command,
            depth=settings.engine_depth,
            parent=parent,
        )
    raise ValueError(f"Unknown move source: {kind!r}")


__all__ = [
    "MoveSource",
    "RandomMoveSource",
    "UciMoveSource",
    "create_move_source",
]
