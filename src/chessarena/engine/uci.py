"""UCI text-protocol helpers: command formatting and engine-line parsing.

Only the subset spoken between the exhibition and its move sources is
covered.  Lines the parser does not recognise become :class:`UnknownLine`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

NULL_MOVES = frozenset({"(none)", "0000"})


# ── Outbound events (engine → GUI) ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class UciOk:
    pass


@dataclass(frozen=True, slots=True)
class ReadyOk:
    pass


@dataclass(frozen=True, slots=True)
class IdLine:
    key: str  # "name" or "author"
    value: str


@dataclass(frozen=True, slots=True)
class OptionLine:
    name: str
    type: str
    default: str | None = None
    min: int | None = None
    max: int | None = None


@dataclass(frozen=True, slots=True)
class InfoLine:
    depth: int | None = None
    score_cp: int | None = None
    nodes: int | None = None
    nps: int | None = None
    time_ms: int | None = None


@dataclass(frozen=True, slots=True)
class BestMove:
    move: str | None  # ``None`` when the engine has no move

    @property
    def is_null(self) -> bool:
        return self.move is None


@dataclass(frozen=True, slots=True)
class UnknownLine:
    text: str


EngineEvent = UciOk | ReadyOk | IdLine | OptionLine | InfoLine | BestMove | UnknownLine

_INFO_FIELDS = {
    "depth": "depth",
    "nodes": "nodes",
    "nps": "nps",
    "time": "time_ms",
}


def _int_or_none(text: str | None) -> int | None:
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _parse_option(tokens: list[str]) -> OptionLine | None:
    # option name <words...> type <t> [default <d>] [min <l>] [max <h>]
    if "name" not in tokens or "type" not in tokens:
        return None
    name_at = tokens.index("name")
    type_at = tokens.index("type")
    if type_at <= name_at + 1 or type_at + 1 >= len(tokens):
        return None
    name = " ".join(tokens[name_at + 1 : type_at])
    rest = tokens[type_at + 2 :]
    values: dict[str, str] = {}
    for key, value in zip(rest[::2], rest[1::2]):
        values[key] = value
    return OptionLine(
        name=name,
        type=tokens[type_at + 1],
        default=values.get("default"),
        min=_int_or_none(values.get("min")),
        max=_int_or_none(values.get("max")),
    )


def _parse_info(tokens: list[str]) -> InfoLine:
    values: dict[str, int | None] = {}
    i = 1
    while i < len(tokens):
        key = tokens[i]
        if key == "score" and i + 2 < len(tokens) and tokens[i + 1] == "cp":
            values["score_cp"] = _int_or_none(tokens[i + 2])
            i += 3
            continue
        if key in _INFO_FIELDS and i + 1 < len(tokens):
            values[_INFO_FIELDS[key]] = _int_or_none(tokens[i + 1])
            i += 2
            continue
        i += 1
    return InfoLine(**values)


def parse_engine_line(line: str) -> EngineEvent:
    """Classify one line of engine output."""
    text = line.strip()
    tokens = text.split()
    if not tokens:
        return UnknownLine(text)

    head = tokens[0]
    if head == "uciok":
        return UciOk()
    if head == "readyok":
        return ReadyOk()
    if head == "bestmove":
        move = tokens[1] if len(tokens) > 1 else None
        if move is None or move in NULL_MOVES:
            return BestMove(None)
        return BestMove(move)
    if head == "id" and len(tokens) >= 2 and tokens[1] in ("name", "author"):
        return IdLine(tokens[1], " ".join(tokens[2:]))
    if head == "option":
        option = _parse_option(tokens)
        if option is not None:
            return option
    if head == "info":
        return _parse_info(tokens)
    return UnknownLine(text)


# ── Inbound commands (GUI → engine) ──────────────────────────────────────────


def format_position(moves: Sequence[str] = (), fen: str | None = None) -> str:
    """``position startpos [moves ...]``, or ``position fen <fen> [moves ...]``."""
    base = "position startpos" if fen is None else f"position fen {fen}"
    if not moves:
        return base
    return f"{base} moves " + " ".join(moves)


def format_go(depth: int | None = None) -> str:
    if depth is None:
        return "go"
    return f"go depth {depth}"


def parse_position_command(tokens: Sequence[str]) -> tuple[str | None, list[str]]:
    """Start FEN (``None`` for startpos) and move list of a ``position`` command.

    *tokens* excludes the leading ``position`` keyword.
    """
    tokens = list(tokens)
    split = tokens.index("moves") if "moves" in tokens else len(tokens)
    head, moves = tokens[:split], tokens[split + 1 :]
    fen = " ".join(head[1:]) if head[:1] == ["fen"] and len(head) > 1 else None
    return fen, moves
