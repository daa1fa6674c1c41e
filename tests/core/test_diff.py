"""Tests for move inference between successive boards."""

import pytest

from chessarena.core import diff as diff_module
from chessarena.core.diff import Move, compute_move, find_changes, infer_move
from chessarena.core.placement import STARTING_PLACEMENT, parse_placement
from chessarena.core.types import Square, parse_square

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"


class TestFindChanges:
    def test_identical_boards_have_no_changes(self) -> None:
        board = parse_placement(STARTING_PLACEMENT)
        assert find_changes(board, board) == []

    def test_changes_are_in_row_major_order(self) -> None:
        changes = find_changes(
            parse_placement(STARTING_PLACEMENT), parse_placement(AFTER_E4)
        )
        assert [c.square for c in changes] == [Square(4, 4), Square(6, 4)]
        assert changes[0].arrived and changes[1].vacated


class TestComputeMove:
    def test_pawn_push_e2e4(self) -> None:
        move = compute_move(
            parse_placement(STARTING_PLACEMENT), parse_placement(AFTER_E4)
        )
        assert move == Move(Square(6, 4), Square(4, 4), "P", captured=False)

    def test_black_knight_quiet_move(self) -> None:
        old = parse_placement(AFTER_E4)
        new = parse_placement("r1bqkbnr/pppppppp/2n5/8/4P3/8/PPPP1PPP/RNBQKBNR")
        move = compute_move(old, new)
        assert move is not None
        assert move.from_sq == parse_square("b8")
        assert move.to_sq == parse_square("c6")
        assert move.piece == "n"
        assert not move.captured

    def test_bishop_capture_on_diagonal(self) -> None:
        old = parse_placement("4k3/8/8/2b5/8/8/5P2/4K3")
        new = parse_placement("4k3/8/8/8/8/8/5b2/4K3")
        move = compute_move(old, new)
        assert move is not None
        assert move.from_sq == parse_square("c5")
        assert move.to_sq == parse_square("f2")
        assert move.piece == "b"
        assert move.captured is True
        assert move.captured_piece == "P"

    def test_same_position_twice_yields_no_move(self) -> None:
        board = parse_placement(AFTER_E4)
        assert compute_move(board, board) is None

    def test_single_change_is_not_animatable(self) -> None:
        old = parse_placement("4k3/8/8/8/8/8/8/4K2R")
        new = parse_placement("4k3/8/8/8/8/8/8/4K3")
        assert compute_move(old, new) is None

    def test_kingside_castling_animates_the_king(self) -> None:
        old = parse_placement("4k3/8/8/8/8/8/8/4K2R")
        new = parse_placement("4k3/8/8/8/8/8/8/5RK1")
        move = compute_move(old, new)
        assert move == Move(parse_square("e1"), parse_square("g1"), "K")

    def test_queenside_castling_reports_the_rook(self) -> None:
        old = parse_placement("4k3/8/8/8/8/8/8/R3K3")
        new = parse_placement("4k3/8/8/8/8/8/8/2KR4")
        move = compute_move(old, new)
        assert move == Move(parse_square("a1"), parse_square("d1"), "R")

    def test_promotion_uses_vacating_symbol(self) -> None:
        old = parse_placement("8/4P3/8/8/8/8/8/k6K")
        new = parse_placement("4Q3/8/8/8/8/8/8/k6K")
        move = compute_move(old, new)
        assert move == Move(parse_square("e7"), parse_square("e8"), "P")

    def test_en_passant_fallback_takes_first_vacated_piece(self) -> None:
        old = parse_placement("4k3/8/8/3pP3/8/8/8/4K3")
        new = parse_placement("4k3/8/3P4/8/8/8/8/4K3")
        move = compute_move(old, new)
        # The captured pawn vacates first in scan order and is reported.
        assert move == Move(parse_square("d5"), parse_square("d6"), "p")

    def test_first_matching_pair_wins(self) -> None:
        # Both rooks shift one file; the earliest pair in scan order is chosen.
        old = parse_placement("R7/8/8/8/8/8/8/R7")
        new = parse_placement("1R6/8/8/8/8/8/8/1R6")
        move = infer_move(old, new)
        assert move == Move(parse_square("a8"), parse_square("b8"), "R")

    def test_exception_maps_to_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _boom(_old, _new):
            raise RuntimeError("boom")

        monkeypatch.setattr(diff_module, "find_changes", _boom)
        board = parse_placement(STARTING_PLACEMENT)
        assert compute_move(board, parse_placement(AFTER_E4)) is None

    def test_malformed_board_maps_to_none(self) -> None:
        short = parse_placement("8/8")
        assert compute_move(short, parse_placement(STARTING_PLACEMENT)) is None


class TestMoveStr:
    def test_quiet(self) -> None:
        assert str(Move(Square(6, 4), Square(4, 4), "P")) == "Pe2-e4"

    def test_capture(self) -> None:
        move = Move(parse_square("c5"), parse_square("f2"), "b", captured=True)
        assert str(move) == "bc5xf2"
