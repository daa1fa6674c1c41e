"""Tests for UciMoveSource protocol handling."""

from __future__ import annotations

import sys
from pathlib import Path

import chess
import pytest
from PyQt6.QtCore import QProcess
from PyQt6.QtTest import QSignalSpy

from chessarena.engine.uci import InfoLine
from chessarena.engine.uci_source import UciMoveSource

_SRC_DIR = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture
def sent(qapp, monkeypatch: pytest.MonkeyPatch) -> tuple[UciMoveSource, list[str]]:
    del qapp
    source = UciMoveSource("Engine", ["unused"], depth=4)
    commands: list[str] = []
    monkeypatch.setattr(source, "_send", commands.append)
    source._process = QProcess(source)
    return source, commands


def _fen(*moves: str) -> str:
    board = chess.Board()
    for move in moves:
        board.push_uci(move)
    return board.fen()


def _handshake(source: UciMoveSource) -> None:
    source.feed(b"id name Fake\nuciok\nreadyok\n")


class TestHandshake:
    def test_empty_command_rejected(self, qapp) -> None:
        del qapp
        with pytest.raises(ValueError):
            UciMoveSource("Engine", [])

    def test_uciok_triggers_isready(self, sent) -> None:
        source, commands = sent
        source.feed(b"uciok\n")
        assert commands == ["isready"]
        assert not source.is_ready

    def test_engine_name_reported(self, sent) -> None:
        source, _ = sent
        spy = QSignalSpy(source.engine_identified)
        source.feed(b"id name Fake Engine 1.0\n")
        assert source.engine_name == "Fake Engine 1.0"
        assert spy[0][0] == "Fake Engine 1.0"

    def test_request_before_ready_is_held(self, sent) -> None:
        source, commands = sent
        source.request_move(_fen("e2e4"), ["e2e4"])
        assert commands == []

        _handshake(source)
        assert source.is_ready
        assert commands == ["isready", "position startpos moves e2e4", "go depth 4"]


class TestSearch:
    def test_bestmove_emitted(self, sent) -> None:
        source, commands = sent
        _handshake(source)
        spy = QSignalSpy(source.move_ready)

        source.request_move(chess.STARTING_FEN, [])
        assert commands[-2:] == ["position startpos", "go depth 4"]
        source.feed(b"bestmove e2e4 ponder e7e5\n")

        assert len(spy) == 1
        assert spy[0][0] == "e2e4"

    def test_partial_lines_are_buffered(self, sent) -> None:
        source, _ = sent
        _handshake(source)
        spy = QSignalSpy(source.move_ready)
        source.request_move(chess.STARTING_FEN, [])

        source.feed(b"best")
        assert len(spy) == 0
        source.feed(b"move g1f3\r\n")
        assert spy[0][0] == "g1f3"

    def test_info_forwarded_while_searching(self, sent) -> None:
        source, _ = sent
        _handshake(source)
        spy = QSignalSpy(source.info_received)
        source.feed(b"info depth 1\n")
        assert len(spy) == 0

        source.request_move(chess.STARTING_FEN, [])
        source.feed(b"info depth 2 score cp 15\n")
        assert spy[0][0] == InfoLine(depth=2, score_cp=15)

    def test_cancelled_search_result_is_dropped(self, sent) -> None:
        source, commands = sent
        _handshake(source)
        spy = QSignalSpy(source.move_ready)

        source.request_move(chess.STARTING_FEN, [])
        source.cancel()
        assert commands[-1] == "stop"

        source.request_move(_fen("e2e4"), ["e2e4"])
        source.feed(b"bestmove d2d4\n")  # answer to the cancelled search
        assert len(spy) == 0
        source.feed(b"bestmove e7e5\n")
        assert len(spy) == 1
        assert spy[0][0] == "e7e5"

    def test_custom_start_position_sent_as_fen(self, sent) -> None:
        source, commands = sent
        _handshake(source)
        fen = "7k/8/8/8/8/8/8/K6R w - - 0 1"
        source.request_move(fen, [])
        assert commands[-2:] == [f"position fen {fen}", "go depth 4"]

    def test_history_not_reaching_fen_sent_as_fen(self, sent) -> None:
        source, commands = sent
        _handshake(source)
        fen = "7k/7R/8/8/8/8/8/K7 b - - 1 1"
        source.request_move(fen, ["h1h7"])
        assert commands[-2] == f"position fen {fen}"

    def test_unsolicited_bestmove_ignored(self, sent) -> None:
        source, _ = sent
        _handshake(source)
        spy = QSignalSpy(source.move_ready)
        source.feed(b"bestmove e2e4\n")
        assert len(spy) == 0

    def test_null_bestmove_fails(self, sent) -> None:
        source, _ = sent
        _handshake(source)
        failed = QSignalSpy(source.failed)
        source.request_move(chess.STARTING_FEN, [])
        source.feed(b"bestmove (none)\n")
        assert len(failed) == 1
        assert "no move" in failed[0][0]


class TestProcessFailures:
    def test_failed_to_start_reported(self, sent) -> None:
        source, _ = sent
        failed = QSignalSpy(source.failed)
        source._on_process_error(QProcess.ProcessError.FailedToStart)
        assert len(failed) == 1
        assert "FailedToStart" in failed[0][0]

    def test_crash_reported_once_through_finished(self, sent) -> None:
        source, _ = sent
        failed = QSignalSpy(source.failed)
        source._on_process_error(QProcess.ProcessError.Crashed)
        source._on_process_finished(1, QProcess.ExitStatus.CrashExit)
        assert len(failed) == 1
        assert "exited" in failed[0][0]

    def test_request_after_exit_fails_immediately(self, sent) -> None:
        source, commands = sent
        _handshake(source)
        source._on_process_finished(0, QProcess.ExitStatus.NormalExit)
        assert not source.is_ready

        failed = QSignalSpy(source.failed)
        commands.clear()
        source.request_move(chess.STARTING_FEN, [])
        assert len(failed) == 1
        assert "not running" in failed[0][0]
        assert commands == []

    def test_request_after_failed_start_fails_immediately(self, sent) -> None:
        source, _ = sent
        source.request_move(chess.STARTING_FEN, [])
        source._on_process_error(QProcess.ProcessError.FailedToStart)

        failed = QSignalSpy(source.failed)
        source.request_move(chess.STARTING_FEN, [])
        assert len(failed) == 1


def test_missing_binary_is_relaunched_on_next_start(qapp) -> None:
    del qapp
    source = UciMoveSource("Ghost", ["/nonexistent/engine-binary"])
    failed = QSignalSpy(source.failed)
    try:
        for attempt in (1, 2):
            source.start()
            assert len(failed) >= attempt or failed.wait(5000)
            assert len(failed) == attempt
    finally:
        source.shutdown()


def test_plays_against_mock_engine_process(
    qapp, monkeypatch: pytest.MonkeyPatch
) -> None:
    del qapp
    monkeypatch.setenv("PYTHONPATH", str(_SRC_DIR))
    source = UciMoveSource(
        "Mock",
        [sys.executable, "-m", "chessarena.engine.mock_engine", "--think-ms", "0"],
        depth=2,
    )
    spy = QSignalSpy(source.move_ready)
    try:
        source.start()
        source.request_move(chess.STARTING_FEN, [])
        assert spy.wait(10000)
        assert spy[0][0] in ("e2e4", "d2d4", "g1f3", "c2c4")
        assert source.engine_name == "Arena Mock"
    finally:
        source.shutdown()
