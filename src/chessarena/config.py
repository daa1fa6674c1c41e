"""Application settings."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from chessarena.core.geometry import PER_STEP_MS
from chessarena.core.scheduler import SupersedePolicy

MOVE_SOURCES = ("random", "uci")


def _default_engine_command() -> list[str]:
    return [sys.executable, "-m", "chessarena.engine.mock_engine"]


@dataclass
class ArenaSettings:
    """All user-configurable settings."""

    # Animation
    per_step_ms: int = PER_STEP_MS
    board_width_px: int = 640
    supersede_policy: SupersedePolicy = SupersedePolicy.REPLACE

    # Auto-play pacing
    start_delay_ms: int = 500
    move_delay_ms: int = 2000  # animation + short pause between plies

    # Move sources
    white_source: str = "random"
    black_source: str = "random"
    think_time_ms: int = 300
    engine_command: list[str] = field(default_factory=_default_engine_command)
    engine_depth: int = 5

    def validate(self) -> None:
        """Raise ``ValueError`` on the first inconsistent value."""
        if self.per_step_ms <= 0:
            raise ValueError(f"per_step_ms must be positive: {self.per_step_ms}")
        if self.board_width_px < 8:
            raise ValueError(f"board_width_px too small: {self.board_width_px}")
        for name in ("start_delay_ms", "move_delay_ms", "think_time_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        for side in (self.white_source, self.black_source):
            if side not in MOVE_SOURCES:
                raise ValueError(f"Unknown move source: {side!r}")
        if not self.engine_command:
            raise ValueError("engine_command must not be empty")
        if self.engine_depth < 1:
            raise ValueError(f"engine_depth must be >= 1: {self.engine_depth}")
