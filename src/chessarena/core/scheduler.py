"""AnimationScheduler — sequences board updates through timed animations.

The scheduler owns the displayed board.  Each pushed position is diffed
against the previous one; when a move is found the origin piece is hidden,
a single one-shot timer is armed and the new board is committed only when
it fires.  Otherwise the position is committed at once.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Protocol

from chessarena.core.diff import Move, compute_move
from chessarena.core.geometry import PER_STEP_MS, AnimationSpec, classify, offset_at
from chessarena.core.placement import (
    Board,
    parse_placement,
    placement_field,
    without_piece,
)

_LOGGER = logging.getLogger(__name__)

CommitCallback = Callable[[str], None]
EntryCallback = Callable[["AnimationEntry"], None]


class OneShotTimer(Protocol):
    """Cancellable single-shot timer handle."""

    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Arm the timer, replacing any previously armed callback."""

    def cancel(self) -> None:
        """Disarm the timer; the pending callback must not run."""


class SchedulerPhase(IntEnum):
    IDLE = auto()
    ANIMATING = auto()


class SupersedePolicy(str, Enum):
    """What to do with a position that arrives mid-animation."""

    REPLACE = "replace"  # snap the in-flight move, animate the new one
    QUEUE = "queue"  # animate every position in arrival order


@dataclass(slots=True)
class AnimationEntry:
    """The single in-flight animation."""

    move: Move
    spec: AnimationSpec
    started_at_ms: float
    target_placement: str
    target_board: Board

    def offset(self, now_ms: float) -> tuple[float, float]:
        """Pixel offset of the moving piece from its origin square."""
        return offset_at(self.spec, now_ms - self.started_at_ms)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class AnimationScheduler:
    """Two-state machine: ``IDLE`` ↔ ``ANIMATING``.

    Updates are handled to completion in arrival order, so no locking is
    needed as long as every call comes from the same (UI) thread.
    """

    __slots__ = (
        "_timer",
        "_clock",
        "_board_width_px",
        "_per_step_ms",
        "_policy",
        "_on_commit",
        "_on_animation_started",
        "_displayed",
        "_committed",
        "_active",
        "_queue",
        "_closed",
    )

    def __init__(
        self,
        initial_placement: str,
        *,
        timer: OneShotTimer,
        board_width_px: float = 640.0,
        per_step_ms: int = PER_STEP_MS,
        policy: SupersedePolicy = SupersedePolicy.REPLACE,
        clock: Callable[[], float] = _monotonic_ms,
        on_commit: CommitCallback | None = None,
        on_animation_started: EntryCallback | None = None,
    ) -> None:
        self._timer = timer
        self._clock = clock
        self._board_width_px = board_width_px
        self._per_step_ms = per_step_ms
        self._policy = policy
        self._on_commit = on_commit
        self._on_animation_started = on_animation_started

        self._committed = placement_field(initial_placement)
        self._displayed = parse_placement(self._committed)
        self._active: AnimationEntry | None = None
        self._queue: deque[tuple[str, Move | None]] = deque()
        self._closed = False

    # ── Read-only state ──────────────────────────────────────────────────

    @property
    def phase(self) -> SchedulerPhase:
        if self._active is None:
            return SchedulerPhase.IDLE
        return SchedulerPhase.ANIMATING

    @property
    def displayed_board(self) -> Board:
        """Last committed board."""
        return self._displayed

    @property
    def committed_placement(self) -> str:
        return self._committed

    @property
    def static_board(self) -> Board:
        """Displayed board with the origin of the in-flight move suppressed."""
        if self._active is None:
            return self._displayed
        return without_piece(self._displayed, self._active.move.from_sq)

    @property
    def active_entry(self) -> AnimationEntry | None:
        return self._active

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    @property
    def policy(self) -> SupersedePolicy:
        return self._policy

    def now_ms(self) -> float:
        return self._clock()

    # ── Configuration ────────────────────────────────────────────────────

    def set_board_width(self, board_width_px: float) -> None:
        """Pixel width used for animations started from now on."""
        self._board_width_px = board_width_px

    def set_per_step_ms(self, per_step_ms: int) -> None:
        self._per_step_ms = per_step_ms

    def set_policy(self, policy: SupersedePolicy) -> None:
        self._policy = policy

    # ── Position feed ────────────────────────────────────────────────────

    def push(self, position: str) -> None:
        """Feed the next authoritative position (placement field or full FEN)."""
        self._submit(placement_field(position), None)

    def push_move(self, position: str, move: Move) -> None:
        """Feed a position together with the move that produced it.

        Skips diff inference, so castling, promotion and en passant animate
        the piece the caller names.
        """
        self._submit(placement_field(position), move)

    def reset(self, position: str) -> None:
        """Drop any animation or queued update and show *position* at once."""
        if self._closed:
            return
        self._timer.cancel()
        self._active = None
        self._queue.clear()
        placement = placement_field(position)
        self._commit(placement, parse_placement(placement))

    def shutdown(self) -> None:
        """Cancel the armed timer; the scheduler ignores all later input."""
        if self._closed:
            return
        self._closed = True
        self._timer.cancel()
        self._active = None
        self._queue.clear()

    # ── Internals ────────────────────────────────────────────────────────

    def _submit(self, placement: str, move: Move | None) -> None:
        if self._closed:
            _LOGGER.debug("Scheduler closed; dropping position %s", placement)
            return

        if self._active is not None:
            if self._policy is SupersedePolicy.QUEUE:
                self._queue.append((placement, move))
                return
            self._supersede()

        self._start(placement, move)

    def _supersede(self) -> None:
        """Cancel the in-flight timer and commit its target immediately."""
        entry = self._active
        assert entry is not None
        self._timer.cancel()
        self._active = None
        _LOGGER.debug("Superseding animation %s", entry.move)
        self._commit(entry.target_placement, entry.target_board)

    def _start(self, placement: str, move: Move | None) -> None:
        target = parse_placement(placement)
        spec: AnimationSpec | None = None
        try:
            if move is None:
                move = compute_move(self._displayed, target)
            if move is not None:
                spec = classify(move, self._board_width_px, self._per_step_ms)
        except Exception:
            _LOGGER.warning(
                "Animation setup failed; committing %s without animation",
                placement,
                exc_info=True,
            )
            spec = None

        if move is None or spec is None:
            self._commit(placement, target)
            self._drain_queue()
            return

        entry = AnimationEntry(
            move=move,
            spec=spec,
            started_at_ms=self._clock(),
            target_placement=placement,
            target_board=target,
        )
        self._active = entry
        self._timer.start(spec.duration_ms, lambda: self._on_timer(entry))
        _LOGGER.debug("Animating %s over %d ms", move, spec.duration_ms)
        if self._on_animation_started is not None:
            self._on_animation_started(entry)

    def _on_timer(self, entry: AnimationEntry) -> None:
        if self._closed or entry is not self._active:
            _LOGGER.debug("Ignoring stale animation timer for %s", entry.move)
            return
        self._active = None
        self._commit(entry.target_placement, entry.target_board)
        self._drain_queue()

    def _drain_queue(self) -> None:
        if self._active is None and self._queue:
            placement, move = self._queue.popleft()
            self._start(placement, move)

    def _commit(self, placement: str, board: Board) -> None:
        self._displayed = board
        self._committed = placement
        if self._on_commit is not None:
            self._on_commit(placement)
