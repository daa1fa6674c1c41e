"""Abstract interfaces for the game layer.

The exhibition controller depends on :class:`IRulesEngine`, not on a
concrete chess library, so the rules backend can be swapped without touching
move sources or the board.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto

# ── Exhibition FSM states ────────────────────────────────────────────────────


class ExhibitionPhase(IntEnum):
    """Finite-state-machine states for an auto-played game."""

    NOT_STARTED = auto()
    RUNNING = auto()
    STOPPED = auto()
    GAME_OVER = auto()


class Side(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    def __str__(self) -> str:
        return self.name.capitalize()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IRulesEngine(ABC):
    """Authoritative game state: legality, move application, termination."""

    @property
    @abstractmethod
    def fen(self) -> str: ...

    @property
    @abstractmethod
    def side_to_move(self) -> Side: ...

    @property
    @abstractmethod
    def move_history(self) -> list[str]:
        """Coordinate moves played from the start position."""

    @abstractmethod
    def apply(self, coord_move: str) -> bool:
        """Play *coord_move* if legal.  Returns True when applied."""

    @abstractmethod
    def legal_move_count(self) -> int: ...

    @abstractmethod
    def is_game_over(self) -> bool: ...

    @abstractmethod
    def outcome_text(self) -> str | None:
        """Human-readable result, or None while the game is running."""

    @abstractmethod
    def reset(self) -> None:
        """Return to the standard start position."""
