"""A canned UCI engine for exhibitions without a real search engine.

Run as ``python -m chessarena.engine.mock_engine``.  Replies come from a tiny
opening book and per-phase move pools; pool moves that are illegal in the
current position are skipped in favour of a random legal move.
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from collections.abc import Sequence

import chess

from chessarena.engine.uci import parse_position_command

ENGINE_NAME = "Arena Mock"
ENGINE_AUTHOR = "chessarena"

_WHITE_OPENINGS = ("e2e4", "d2d4", "g1f3", "c2c4")
_BLACK_REPLIES: dict[str, tuple[str, ...]] = {
    "e2e4": ("e7e5", "c7c5", "e7e6", "d7d6"),
    "d2d4": ("d7d5", "g8f6", "e7e6", "c7c6"),
}
_BLACK_DEFAULT_REPLIES = ("e7e5", "d7d5", "g8f6")

# (early, middle, late) pools per side
_WHITE_POOLS = (
    ("g1f3", "f1c4", "e1g1", "b1c3", "d2d3", "c2c3", "h2h3"),
    ("f3e5", "c4d5", "c3d5", "f1e1", "d1e2", "a2a4", "b2b3"),
    ("e1e7", "f3g5", "c4f7", "d5e6", "e5f7"),
)
_BLACK_POOLS = (
    ("g8f6", "f8c5", "e8g8", "b8c6", "d7d6", "c7c6", "h7h6"),
    ("f6e4", "c5d4", "c6d4", "f8e8", "d8e7", "a7a5", "b7b6"),
    ("e8e1", "f6g4", "c5f2", "d4e3", "e4f2"),
)


class MockEngine:
    """Stateful UCI responder; :meth:`handle` maps one command to output lines."""

    __slots__ = ("_rng", "_moves", "_board")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._moves: list[str] = []
        self._board = chess.Board()

    @property
    def moves(self) -> list[str]:
        return list(self._moves)

    def handle(self, line: str) -> list[str]:
        tokens = line.split()
        if not tokens:
            return []
        cmd = tokens[0]

        if cmd == "uci":
            return [
                f"id name {ENGINE_NAME}",
                f"id author {ENGINE_AUTHOR}",
                "option name Skill Level type spin default 20 min 0 max 20",
                "uciok",
            ]
        if cmd == "isready":
            return ["readyok"]
        if cmd == "ucinewgame":
            self._set_moves([])
            return []
        if cmd == "position":
            fen, moves = parse_position_command(tokens[1:])
            self._set_moves(moves, fen)
            return []
        if cmd == "go":
            return self._search()
        return []

    def _set_moves(self, moves: list[str], fen: str | None = None) -> None:
        try:
            board = chess.Board(fen or chess.STARTING_FEN)
        except ValueError:
            board = chess.Board()
        applied: list[str] = []
        for uci in moves:
            try:
                board.push_uci(uci)
            except ValueError:
                break
            applied.append(uci)
        self._board = board
        self._moves = applied

    def _candidates(self) -> Sequence[str]:
        count = len(self._moves)
        if count == 0:
            return _WHITE_OPENINGS
        if count == 1:
            return _BLACK_REPLIES.get(self._moves[0], _BLACK_DEFAULT_REPLIES)
        pools = _WHITE_POOLS if count % 2 == 0 else _BLACK_POOLS
        if count < 10:
            return pools[0]
        if count < 20:
            return pools[1]
        return pools[2]

    def choose_move(self) -> str | None:
        legal = {move.uci() for move in self._board.legal_moves}
        if not legal:
            return None
        canned = [m for m in self._candidates() if m in legal]
        if canned:
            return self._rng.choice(canned)
        return self._rng.choice(sorted(legal))

    def _search(self) -> list[str]:
        move = self.choose_move()
        score = self._rng.randint(-100, 99)
        info = f"info depth 1 score cp {score} nodes 100 nps 1000 time 300"
        return [info, f"bestmove {move or '(none)'}"]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Canned UCI engine")
    parser.add_argument("--think-ms", type=int, default=300)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    engine = MockEngine(random.Random(args.seed))

    while True:
        line = sys.stdin.readline()
        if not line:
            break
        line = line.strip()
        if line == "quit":
            break
        if line.split()[:1] == ["go"] and args.think_ms > 0:
            time.sleep(args.think_ms / 1000.0)
        for out in engine.handle(line):
            sys.stdout.write(out + "\n")
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
