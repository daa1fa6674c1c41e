"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class ManualTimer:
    """One-shot timer driven by a :class:`ManualClock`."""

    def __init__(self, clock: ManualClock) -> None:
        self._clock = clock
        self._callback: Callable[[], None] | None = None
        self.due_ms: float | None = None
        self.delay_ms: int | None = None
        self.start_count = 0
        self.cancel_count = 0

    @property
    def armed(self) -> bool:
        return self._callback is not None

    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self.delay_ms = delay_ms
        self.due_ms = self._clock.now + delay_ms
        self.start_count += 1

    def cancel(self) -> None:
        if self._callback is not None:
            self.cancel_count += 1
        self._callback = None
        self.due_ms = None

    def fire(self) -> None:
        callback = self._callback
        self._callback = None
        self.due_ms = None
        if callback is not None:
            callback()

    def advance(self, ms: float) -> None:
        """Move the clock; fire once if the deadline was reached."""
        self._clock.advance(ms)
        if self.due_ms is not None and self._clock.now >= self.due_ms:
            self.fire()

    def run_until_idle(self, limit: int = 100) -> None:
        """Keep jumping to each deadline until nothing is armed."""
        for _ in range(limit):
            if self.due_ms is None:
                return
            self.advance(self.due_ms - self._clock.now)
        raise AssertionError("timer never went idle")


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def manual_timer(manual_clock: ManualClock) -> ManualTimer:
    return ManualTimer(manual_clock)


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for Qt-backed tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()
