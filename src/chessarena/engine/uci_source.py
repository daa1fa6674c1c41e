"""UciMoveSource — drives an external UCI engine process through QProcess."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import chess
from PyQt6.QtCore import QObject, QProcess, pyqtSignal

from chessarena.engine.source import MoveSource
from chessarena.engine.uci import (
    BestMove,
    EngineEvent,
    IdLine,
    InfoLine,
    ReadyOk,
    UciOk,
    format_go,
    format_position,
    parse_engine_line,
)

_LOGGER = logging.getLogger(__name__)


def _replays_from_start(fen: str, moves: Sequence[str]) -> bool:
    """True when *moves* played from the initial position reach *fen*."""
    board = chess.Board()
    try:
        for uci in moves:
            board.push_uci(uci)
    except ValueError:
        return False
    return board.fen() == fen


class UciMoveSource(MoveSource):
    """Move source backed by an engine process speaking UCI on stdio.

    Requests issued before the ``uci``/``isready`` handshake completes are
    held and sent once the engine reports ``readyok``.  Only the latest
    request is kept; a ``bestmove`` answering a cancelled search is dropped.

    Once the process dies, requests fail straight away through ``failed``
    and the next :meth:`start` launches a fresh process.  Games that did not
    begin at the standard position are sent as ``position fen``.

    Signals:
        engine_identified(str): ``id name`` reported by the engine.
        info_received(object): Parsed :class:`InfoLine` search progress.
    """

    engine_identified = pyqtSignal(str)
    info_received = pyqtSignal(object)

    _QUIT_TIMEOUT_MS = 1000

    def __init__(
        self,
        name: str,
        command: Sequence[str],
        *,
        depth: int = 5,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(name, parent)
        if not command:
            raise ValueError("Engine command must not be empty")
        self._command = list(command)
        self._depth = depth
        self._process: QProcess | None = None
        self._buffer = b""
        self._ready = False
        self._pending: tuple[list[str], str | None] | None = None
        self._searching = False
        self._stale_results = 0
        self._is_shutting_down = False
        self._engine_name: str | None = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def engine_name(self) -> str | None:
        return self._engine_name

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        if self._process is not None:
            return
        self._is_shutting_down = False
        process = QProcess(self)
        process.readyReadStandardOutput.connect(self._on_ready_read)
        process.errorOccurred.connect(self._on_process_error)
        process.finished.connect(self._on_process_finished)
        self._process = process

        program, *args = self._command
        _LOGGER.info("Starting engine %s: %s", self.name, " ".join(self._command))
        process.start(program, args)
        self._send("uci")

    def shutdown(self) -> None:
        if self._process is None:
            return
        self._is_shutting_down = True
        self.cancel()
        process = self._process
        self._process = None
        self._ready = False
        if process.state() != QProcess.ProcessState.NotRunning:
            process.write(b"quit\n")
            if not process.waitForFinished(self._QUIT_TIMEOUT_MS):
                _LOGGER.warning("Engine %s ignored quit; killing it", self.name)
                process.kill()
                process.waitForFinished(self._QUIT_TIMEOUT_MS)

    # ── MoveSource API ───────────────────────────────────────────────────

    def request_move(self, fen: str, moves: Sequence[str]) -> None:
        self.cancel()
        if self._process is None:
            self.failed.emit(f"{self.name}: engine is not running")
            return
        moves = list(moves)
        if _replays_from_start(fen, moves):
            self._pending = (moves, None)
        else:
            # Custom start position: the history cannot be replayed.
            self._pending = ([], fen)
        if self._ready:
            self._dispatch()

    def cancel(self) -> None:
        self._pending = None
        if self._searching:
            self._searching = False
            self._stale_results += 1
            self._send("stop")

    # ── Protocol handling ────────────────────────────────────────────────

    def _dispatch(self) -> None:
        pending = self._pending
        if pending is None:
            return
        self._pending = None
        self._searching = True
        moves, fen = pending
        self._send(format_position(moves, fen))
        self._send(format_go(self._depth))

    def _send(self, command: str) -> None:
        if self._process is None:
            return
        _LOGGER.debug("%s <- %s", self.name, command)
        self._process.write((command + "\n").encode())

    def _on_ready_read(self) -> None:
        if self._process is None:
            return
        self.feed(bytes(self._process.readAllStandardOutput()))

    def feed(self, data: bytes) -> None:
        """Consume raw engine output, handling every complete line."""
        self._buffer += data
        *lines, self._buffer = self._buffer.split(b"\n")
        for raw in lines:
            line = raw.decode(errors="replace").strip()
            if line:
                _LOGGER.debug("%s -> %s", self.name, line)
                self._handle_event(parse_engine_line(line))

    def _handle_event(self, event: EngineEvent) -> None:
        if isinstance(event, UciOk):
            self._send("isready")
        elif isinstance(event, ReadyOk):
            self._ready = True
            self._dispatch()
        elif isinstance(event, IdLine):
            if event.key == "name":
                self._engine_name = event.value
                self.engine_identified.emit(event.value)
        elif isinstance(event, InfoLine):
            if self._searching:
                self.info_received.emit(event)
        elif isinstance(event, BestMove):
            self._on_best_move(event)

    def _on_best_move(self, event: BestMove) -> None:
        if self._stale_results > 0:
            self._stale_results -= 1
            return
        if not self._searching:
            return
        self._searching = False
        if event.move is None:
            self.failed.emit(f"{self.name}: engine produced no move")
            return
        self.move_ready.emit(event.move)

    def _on_process_error(self, error: QProcess.ProcessError) -> None:
        # A crash is reported again through finished().
        if self._is_shutting_down or error == QProcess.ProcessError.Crashed:
            return
        _LOGGER.error("Engine %s process error: %s", self.name, error.name)
        if error == QProcess.ProcessError.FailedToStart:
            self._detach_process()
        else:
            self._ready = False
            self._searching = False
        self.failed.emit(f"{self.name}: engine process error ({error.name})")

    def _on_process_finished(
        self, exit_code: int, _exit_status: QProcess.ExitStatus
    ) -> None:
        if self._is_shutting_down:
            return
        _LOGGER.error("Engine %s exited unexpectedly (code %d)", self.name, exit_code)
        self._detach_process()
        self.failed.emit(f"{self.name}: engine exited (code {exit_code})")

    def _detach_process(self) -> None:
        """Forget a dead process so the next :meth:`start` launches a new one."""
        process = self._process
        self._process = None
        self._buffer = b""
        self._ready = False
        self._pending = None
        self._searching = False
        self._stale_results = 0
        if process is not None:
            process.deleteLater()
