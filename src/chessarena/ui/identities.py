"""Piece identities — which character artwork represents which piece.

White pieces are Marvel heroes, black pieces DC heroes.  Kings and queens are
unique per side; every other piece is told apart by the file it started on.
The table is built once at startup and passed to the board by reference.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from chessarena.core.types import PieceSymbol


@dataclass(frozen=True, slots=True)
class PieceIdentity:
    name: str
    svg: str


DEFAULT_IDENTITY = PieceIdentity("Unknown", "default.svg")

_UNIQUE = ("K", "Q", "k", "q")

# Fallback home file per piece letter when the start file is unknown.
_FALLBACK_COLS = {"r": 0, "b": 2, "n": 1, "p": 0}

_MARVEL: dict[str, PieceIdentity] = {
    "K": PieceIdentity("Iron Man", "ironman.svg"),
    "Q": PieceIdentity("Scarlet Witch", "wanda.svg"),
    "R_0": PieceIdentity("Thor", "thor.svg"),
    "R_7": PieceIdentity("Captain Marvel", "capmarvel.svg"),
    "B_2": PieceIdentity("Doctor Strange", "strange.svg"),
    "B_5": PieceIdentity("Vision", "vision.svg"),
    "N_1": PieceIdentity("Black Panther", "blackp.svg"),
    "N_6": PieceIdentity("Spider-Man", "spiderman.svg"),
}
_MARVEL_PAWNS = (
    PieceIdentity("Hawkeye", "hawkeye.svg"),
    PieceIdentity("Black Widow", "blackwidow.svg"),
    PieceIdentity("Falcon", "falcon.svg"),
    PieceIdentity("Ant-Man", "antman.svg"),
    PieceIdentity("War Machine", "warmachine.svg"),
    PieceIdentity("Winter Soldier", "wintersol.svg"),
    PieceIdentity("Wasp", "wasp.svg"),
    PieceIdentity("Star-Lord", "starlord.svg"),
)

_DC: dict[str, PieceIdentity] = {
    "k": PieceIdentity("Superman", "superman.svg"),
    "q": PieceIdentity("Wonder Woman", "wonder.svg"),
    "r_0": PieceIdentity("Green Lantern", "green.svg"),
    "r_7": PieceIdentity("Shazam", "shazam.svg"),
    "b_2": PieceIdentity("Martian Manhunter", "martian.svg"),
    "b_5": PieceIdentity("Cyborg", "cyborg.svg"),
    "n_1": PieceIdentity("The Flash", "flash.svg"),
    "n_6": PieceIdentity("Batman", "batman.svg"),
}
# No dedicated Batgirl artwork; she borrows Batman's.
_DC_PAWNS = (
    PieceIdentity("Batgirl", "batman.svg"),
    PieceIdentity("Robin", "Robin.svg"),
    PieceIdentity("Hawkman", "hawkman.svg"),
    PieceIdentity("Zatanna", "zatanna.svg"),
    PieceIdentity("Blue Beetle", "blue.svg"),
    PieceIdentity("Green Arrow", "arrow.svg"),
    PieceIdentity("Black Canary", "blackcanary.svg"),
    PieceIdentity("Plastic Man", "plastic man.svg"),
)


def _key(symbol: PieceSymbol, col: int) -> str:
    return f"{symbol}_{col}"


class IdentityTable:
    """Read-only lookup ``(piece symbol, home file) → PieceIdentity``."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, PieceIdentity]) -> None:
        self._entries = MappingProxyType(dict(entries))

    @property
    def entries(self) -> Mapping[str, PieceIdentity]:
        return self._entries

    def lookup(self, symbol: PieceSymbol, home_col: int = 0) -> PieceIdentity:
        if symbol in _UNIQUE:
            return self._entries.get(symbol, DEFAULT_IDENTITY)
        identity = self._entries.get(_key(symbol, home_col))
        if identity is not None:
            return identity
        fallback_col = _FALLBACK_COLS.get(symbol.lower())
        if fallback_col is None:
            return DEFAULT_IDENTITY
        return self._entries.get(_key(symbol, fallback_col), DEFAULT_IDENTITY)


def build_identity_table() -> IdentityTable:
    """Assemble the full Marvel-vs-DC table."""
    entries: dict[str, PieceIdentity] = {**_MARVEL, **_DC}
    for col, identity in enumerate(_MARVEL_PAWNS):
        entries[_key("P", col)] = identity
    for col, identity in enumerate(_DC_PAWNS):
        entries[_key("p", col)] = identity
    return IdentityTable(entries)
