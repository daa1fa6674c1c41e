"""QTimer-backed one-shot timer handle for the animation scheduler."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer


class QtOneShotTimer:
    """Owns a single-shot ``QTimer``; re-arming replaces the callback."""

    __slots__ = ("_timer", "_callback", "__weakref__")

    def __init__(self, parent: QObject | None = None) -> None:
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._callback: Callable[[], None] | None = None

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start(max(0, int(delay_ms)))

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    def _fire(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()
