"""Tests for the piece identity table."""

import pytest

from chessarena.ui.identities import (
    DEFAULT_IDENTITY,
    IdentityTable,
    PieceIdentity,
    build_identity_table,
)


@pytest.fixture(scope="module")
def table() -> IdentityTable:
    return build_identity_table()


class TestLookup:
    def test_unique_pieces_ignore_column(self, table: IdentityTable) -> None:
        assert table.lookup("K", 0).name == "Iron Man"
        assert table.lookup("K", 7).name == "Iron Man"
        assert table.lookup("q").name == "Wonder Woman"

    @pytest.mark.parametrize(
        ("symbol", "col", "name"),
        [
            ("R", 0, "Thor"),
            ("R", 7, "Captain Marvel"),
            ("N", 6, "Spider-Man"),
            ("b", 2, "Martian Manhunter"),
            ("n", 6, "Batman"),
            ("P", 0, "Hawkeye"),
            ("P", 7, "Star-Lord"),
            ("p", 3, "Zatanna"),
        ],
    )
    def test_column_specific(
        self, table: IdentityTable, symbol: str, col: int, name: str
    ) -> None:
        assert table.lookup(symbol, col).name == name

    def test_unknown_column_falls_back_per_piece(self, table: IdentityTable) -> None:
        assert table.lookup("R", 4).name == "Thor"
        assert table.lookup("b", 4).name == "Martian Manhunter"
        assert table.lookup("N", 3).name == "Black Panther"
        assert table.lookup("p", 9).name == "Batgirl"

    def test_unknown_symbol_gets_default(self, table: IdentityTable) -> None:
        assert table.lookup("x", 0) is DEFAULT_IDENTITY

    def test_every_start_square_has_a_hero(self, table: IdentityTable) -> None:
        back = "RNBQKBNR"
        for col, letter in enumerate(back):
            assert table.lookup(letter, col) is not DEFAULT_IDENTITY
            assert table.lookup(letter.lower(), col) is not DEFAULT_IDENTITY
            assert table.lookup("P", col) is not DEFAULT_IDENTITY
            assert table.lookup("p", col) is not DEFAULT_IDENTITY


class TestImmutability:
    def test_entries_are_read_only(self, table: IdentityTable) -> None:
        with pytest.raises(TypeError):
            table.entries["K"] = PieceIdentity("Nobody", "nobody.svg")  # type: ignore[index]

    def test_source_mapping_is_copied(self) -> None:
        source = {"K": PieceIdentity("A", "a.svg")}
        table = IdentityTable(source)
        source["K"] = PieceIdentity("B", "b.svg")
        assert table.lookup("K").name == "A"

    def test_identity_is_frozen(self) -> None:
        identity = PieceIdentity("A", "a.svg")
        with pytest.raises(AttributeError):
            identity.name = "B"  # type: ignore[misc]
