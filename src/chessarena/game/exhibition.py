"""ExhibitionController — plays an unattended game between two move sources.

Coordinates: rules engine, the two move sources, and pacing timers.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from PyQt6.QtCore import QObject, QTimer

from chessarena.config import ArenaSettings
from chessarena.engine.source import MoveSource
from chessarena.game.interfaces import ExhibitionPhase, IRulesEngine, Side

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

PositionCallback = Callable[[str], None]  # full FEN
MoveCallback = Callable[[str, int], None]  # coordinate move, move number
StatusCallback = Callable[[str], None]
PhaseCallback = Callable[[ExhibitionPhase], None]


@dataclass
class ExhibitionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_position: list[PositionCallback] = field(default_factory=list)
    on_reset: list[PositionCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_status: list[StatusCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class ExhibitionController:
    """Auto-play loop: ask the side to move, apply its answer, wait, repeat.

    The controller never animates anything itself; it publishes every new
    authoritative FEN through ``events.on_position`` and leaves the board to
    reconcile it.  All calls happen on the Qt main thread.
    """

    RETRY_DELAY_MS = 100
    MAX_ILLEGAL_RETRIES = 3

    __slots__ = (
        "__weakref__",
        "_rules",
        "_sources",
        "_settings",
        "_phase",
        "_move_count",
        "_illegal_retries",
        "_source_failures",
        "_turn_timer",
        "_is_set_up",
        "events",
    )

    def __init__(
        self,
        *,
        rules: IRulesEngine,
        white: MoveSource,
        black: MoveSource,
        settings: ArenaSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        if white is black:
            raise ValueError("Each side needs its own move source")
        self._rules = rules
        self._sources = {Side.WHITE: white, Side.BLACK: black}
        self._settings = settings or ArenaSettings()
        self._phase = ExhibitionPhase.NOT_STARTED
        self._move_count = 0
        self._illegal_retries = 0
        self._source_failures: dict[Side, str] = {}
        self._is_set_up = False
        self.events = ExhibitionEvents()

        self._turn_timer = QTimer(parent)
        self._turn_timer.setSingleShot(True)
        self._turn_timer.timeout.connect(self._request_next_move)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def phase(self) -> ExhibitionPhase:
        return self._phase

    @property
    def rules(self) -> IRulesEngine:
        return self._rules

    @property
    def move_count(self) -> int:
        return self._move_count

    def source(self, side: Side) -> MoveSource:
        return self._sources[side]

    # ── Lifecycle ────────────────────────────────────────────────────────

    def setup(self) -> None:
        """Connect and start both move sources.  Idempotent."""
        if self._is_set_up:
            return
        for side, source in self._sources.items():
            source.move_ready.connect(
                lambda move, side=side: self._on_move_ready(side, move)
            )
            source.failed.connect(
                lambda message, side=side: self._on_source_failed(side, message)
            )
            source.start()
        self._is_set_up = True

    def shutdown(self) -> None:
        """Stop play and release both move sources."""
        self._turn_timer.stop()
        for source in self._sources.values():
            source.shutdown()
        self._is_set_up = False

    # ── Commands ─────────────────────────────────────────────────────────

    def start(self) -> bool:
        """Begin (or resume) auto-play.  Returns False if play did not begin."""
        if self._phase == ExhibitionPhase.RUNNING:
            return False
        if self._rules.is_game_over():
            _LOGGER.info("Cannot start: game is already over")
            return False
        if self._source_failures:
            self._report_earlier_failure()
            return False
        self._set_phase(ExhibitionPhase.RUNNING)
        self._illegal_retries = 0
        self._emit_status("Game starting...")
        self._turn_timer.start(self._settings.start_delay_ms)
        return True

    def stop(self) -> None:
        """Pause auto-play; the current position is kept."""
        if self._phase != ExhibitionPhase.RUNNING:
            return
        self._halt()
        self._set_phase(ExhibitionPhase.STOPPED)
        self._emit_status("Game stopped")

    def reset(self) -> None:
        """Stop play and return to the start position without animation."""
        self._halt()
        self._rules.reset()
        self._move_count = 0
        self._illegal_retries = 0
        fen = self._rules.fen
        for cb in self.events.on_reset:
            cb(fen)
        self._set_phase(ExhibitionPhase.NOT_STARTED)
        self._emit_status("Ready to start")

    # ── Internal helpers ─────────────────────────────────────────────────

    def _halt(self) -> None:
        self._turn_timer.stop()
        for source in self._sources.values():
            source.cancel()

    def _request_next_move(self) -> None:
        if self._phase != ExhibitionPhase.RUNNING:
            return
        if self._rules.is_game_over():
            self._finish()
            return
        side = self._rules.side_to_move
        source = self._sources[side]
        _LOGGER.debug("Requesting move from %s (%s)", source.name, side)
        source.request_move(self._rules.fen, self._rules.move_history)

    def _on_move_ready(self, side: Side, coord_move: str) -> None:
        if self._phase != ExhibitionPhase.RUNNING:
            _LOGGER.debug("Ignoring %s from %s: not running", coord_move, side)
            return
        if side != self._rules.side_to_move:
            _LOGGER.warning("Ignoring %s from %s: not its turn", coord_move, side)
            return

        if not self._rules.apply(coord_move):
            self._retry_after_illegal(side, coord_move)
            return

        self._illegal_retries = 0
        self._move_count += 1
        fen = self._rules.fen
        for cb in self.events.on_move:
            cb(coord_move, self._move_count)
        for pos_cb in self.events.on_position:
            pos_cb(fen)

        if self._rules.is_game_over():
            self._finish()
            return

        self._emit_status(
            f"Move {self._move_count} - {self._rules.side_to_move} to move"
        )
        self._turn_timer.start(self._settings.move_delay_ms)

    def _retry_after_illegal(self, side: Side, coord_move: str) -> None:
        if self._illegal_retries >= self.MAX_ILLEGAL_RETRIES:
            self._halt()
            self._set_phase(ExhibitionPhase.STOPPED)
            self._emit_status(f"{side} keeps proposing illegal moves ({coord_move})")
            return
        self._illegal_retries += 1
        self._turn_timer.start(self.RETRY_DELAY_MS)

    def _on_source_failed(self, side: Side, message: str) -> None:
        _LOGGER.error("%s move source failed: %s", side, message)
        if self._phase != ExhibitionPhase.RUNNING:
            # Reported by the next start().
            self._source_failures[side] = message
            return
        self._stop_unavailable(side, message)

    def _report_earlier_failure(self) -> None:
        """Stop on a failure recorded while idle and relaunch that source."""
        side, message = next(iter(self._source_failures.items()))
        self._stop_unavailable(side, message)
        failures, self._source_failures = self._source_failures, {}
        for failed_side in failures:
            self._sources[failed_side].start()

    def _stop_unavailable(self, side: Side, message: str) -> None:
        self._halt()
        self._set_phase(ExhibitionPhase.STOPPED)
        self._emit_status(f"{side} unavailable: {message}")

    def _finish(self) -> None:
        self._halt()
        self._set_phase(ExhibitionPhase.GAME_OVER)
        outcome = self._rules.outcome_text() or "Game over"
        self._emit_status(f"Game Over - {outcome}")

    def _set_phase(self, phase: ExhibitionPhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_status(self, text: str) -> None:
        for cb in self.events.on_status:
            cb(text)
