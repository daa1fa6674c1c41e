"""BoardScene — QGraphicsScene that draws the board and animates moves."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import QGraphicsRectItem, QGraphicsScene, QGraphicsSimpleTextItem

from chessarena.config import ArenaSettings
from chessarena.core.diff import Move
from chessarena.core.placement import STARTING_PLACEMENT, Board
from chessarena.core.scheduler import (
    AnimationEntry,
    AnimationScheduler,
    OneShotTimer,
    SchedulerPhase,
)
from chessarena.core.types import Square
from chessarena.ui.board.piece_item import PieceItem
from chessarena.ui.board.qt_timer import QtOneShotTimer
from chessarena.ui.identities import IdentityTable, build_identity_table
from chessarena.ui.styles.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates and piece items.

    Positions are fed in through :meth:`push_position`; the embedded
    :class:`AnimationScheduler` decides when each one becomes visible.
    While a move animates, the origin square is drawn empty and a single
    floating :class:`PieceItem` hops towards the destination.

    Signals:
        position_committed(str): A placement became the displayed board.
        animation_started(object): A :class:`Move` began animating.
    """

    position_committed = pyqtSignal(str)
    animation_started = pyqtSignal(object)

    _FRAME_INTERVAL_MS = 16

    def __init__(
        self,
        settings: ArenaSettings | None = None,
        identities: IdentityTable | None = None,
        parent: QObject | None = None,
        *,
        timer: OneShotTimer | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__(parent)
        settings = settings or ArenaSettings()
        self._theme = BoardTheme.default()
        self._identities = identities or build_identity_table()
        self._tile = settings.board_width_px // 8

        # Current square → file the piece started the game on.
        self._home_cols: dict[Square, int] = {}
        self._moving: Move | None = None
        self._committed_board: Board | None = None

        self._square_items: list[QGraphicsRectItem] = []
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._highlight_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Square, PieceItem] = {}
        self._moving_item: PieceItem | None = None

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(self._FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

        extra = {} if clock is None else {"clock": clock}
        self._scheduler = AnimationScheduler(
            STARTING_PLACEMENT,
            timer=timer or QtOneShotTimer(self),
            board_width_px=8 * self._tile,
            per_step_ms=settings.per_step_ms,
            policy=settings.supersede_policy,
            on_commit=self._on_commit,
            on_animation_started=self._on_animation_started,
            **extra,
        )

        self._draw_board()
        self._committed_board = self._scheduler.displayed_board
        self._rebuild_home_cols(self._committed_board)
        self._sync_pieces()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def scheduler(self) -> AnimationScheduler:
        return self._scheduler

    @property
    def tile_size(self) -> int:
        return self._tile

    def piece_items(self) -> dict[Square, PieceItem]:
        """Static piece items keyed by square (the moving piece excluded)."""
        return dict(self._piece_items)

    def moving_item(self) -> PieceItem | None:
        return self._moving_item

    def push_position(self, fen: str) -> None:
        """Queue the next authoritative position for display."""
        self._scheduler.push(fen)

    def reset_position(self, fen: str) -> None:
        """Show *fen* immediately, discarding any animation."""
        self._moving = None
        self._home_cols.clear()
        self._scheduler.reset(fen)

    def apply_settings(self, settings: ArenaSettings) -> None:
        self._scheduler.set_per_step_ms(settings.per_step_ms)
        self._scheduler.set_policy(settings.supersede_policy)

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self._sync_pieces()

    def shutdown(self) -> None:
        """Stop all timers; later positions are ignored."""
        self._frame_timer.stop()
        self._scheduler.shutdown()

    # ── Scheduler callbacks ──────────────────────────────────────────────

    def _on_animation_started(self, entry: AnimationEntry) -> None:
        self._moving = entry.move
        self._sync_pieces()
        self._highlight_move(entry.move)
        self._frame_timer.start()
        self.animation_started.emit(entry.move)

    def _on_commit(self, placement: str) -> None:
        board = self._scheduler.displayed_board
        previous, self._committed_board = self._committed_board, board
        moved_to: Square | None = None
        if self._moving is not None:
            moved_to = self._moving.to_sq
            self._carry_home_col(self._moving)
            self._moving = None
            self._clear_items(self._highlight_items)
        self._reconcile_home_cols(previous, board, moved_to)

        if self._scheduler.phase is SchedulerPhase.IDLE:
            self._frame_timer.stop()
        self._sync_pieces()
        self.position_committed.emit(placement)

    def _on_frame(self) -> None:
        entry = self._scheduler.active_entry
        if entry is None or self._moving_item is None:
            self._frame_timer.stop()
            return
        self._place_moving_item(entry)

    # ── Identity tracking ────────────────────────────────────────────────

    def _rebuild_home_cols(self, board: Board) -> None:
        self._home_cols = {
            Square(row, col): col
            for row, cells in enumerate(board)
            for col, cell in enumerate(cells)
            if cell is not None
        }

    def _carry_home_col(self, move: Move) -> None:
        home = self._home_cols.pop(move.from_sq, move.from_sq.col)
        self._home_cols[move.to_sq] = home

    def _reconcile_home_cols(
        self, previous: Board | None, board: Board, moved_to: Square | None
    ) -> None:
        """Forget vacated squares and re-home pieces that changed in place.

        A piece that appeared without an animation takes the home file of a
        same-symbol piece that vanished elsewhere, else its current file.
        """
        vanished: dict[str, list[int]] = {}
        changed: list[tuple[Square, str]] = []
        occupied: set[Square] = set()
        for row, cells in enumerate(board):
            for col, cell in enumerate(cells):
                square = Square(row, col)
                if cell is not None:
                    occupied.add(square)
                was = cell if previous is None else previous[row][col]
                if was == cell or square == moved_to:
                    continue
                if cell is not None:
                    changed.append((square, cell))
                elif was is not None and square in self._home_cols:
                    vanished.setdefault(was, []).append(self._home_cols[square])

        for square in list(self._home_cols):
            if square not in occupied:
                del self._home_cols[square]
        for square, symbol in changed:
            homes = vanished.get(symbol)
            self._home_cols[square] = homes.pop(0) if homes else square.col
        for square in occupied:
            self._home_cols.setdefault(square, square.col)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        self._clear_items(self._square_items)
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self._tile
        font = QFont()
        font.setPixelSize(max(9, t // 6))

        for row in range(8):
            for col in range(8):
                is_light = (row + col) % 2 == 0
                color = self._theme.light_square if is_light else self._theme.dark_square
                rect = QGraphicsRectItem(col * t, row * t, t, t)
                rect.setBrush(QBrush(color))
                rect.setPen(QPen(Qt.PenStyle.NoPen))
                rect.setZValue(0)
                self.addItem(rect)
                self._square_items.append(rect)

                coord_color = self._theme.coord_dark if is_light else self._theme.coord_light
                # Rank numbers (left edge)
                if col == 0:
                    self._add_coord(str(8 - row), coord_color, font, 2, row * t + 1)
                # File letters (bottom edge)
                if row == 7:
                    self._add_coord(
                        chr(ord("a") + col), coord_color, font, col * t + t - 12, row * t + t - 16
                    )

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _add_coord(self, label: str, color: QColor, font: QFont, x: float, y: float) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        self.addItem(txt)
        self._coord_items.append(txt)

    def _highlight_move(self, move: Move) -> None:
        self._clear_items(self._highlight_items)
        t = self._tile
        for square, color in (
            (move.from_sq, self._theme.last_move_from),
            (move.to_sq, self._theme.last_move_to),
        ):
            rect = QGraphicsRectItem(square.col * t, square.row * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0.5)
            self.addItem(rect)
            self._highlight_items.append(rect)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Piece synchronisation ────────────────────────────────────────────

    def _make_piece(self, symbol: str, square: Square, home_col: int) -> PieceItem:
        identity = self._identities.lookup(symbol, home_col)
        item = PieceItem(symbol, identity, square, self._tile)
        item.setPos(square.col * self._tile, square.row * self._tile)
        self.addItem(item)
        return item

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the scheduler's visible state."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()
        if self._moving_item is not None:
            self.removeItem(self._moving_item)
            self._moving_item = None

        for row, cells in enumerate(self._scheduler.static_board):
            for col, symbol in enumerate(cells):
                if symbol is None:
                    continue
                square = Square(row, col)
                home = self._home_cols.get(square, col)
                self._piece_items[square] = self._make_piece(symbol, square, home)

        entry = self._scheduler.active_entry
        if entry is None:
            return
        origin = entry.move.from_sq
        item = self._make_piece(
            entry.move.piece, origin, self._home_cols.get(origin, origin.col)
        )
        item.setZValue(2)
        self._moving_item = item
        self._place_moving_item(entry)

    def _place_moving_item(self, entry: AnimationEntry) -> None:
        assert self._moving_item is not None
        origin = entry.move.from_sq
        dx, dy = entry.offset(self._scheduler.now_ms())
        self._moving_item.setPos(origin.col * self._tile + dx, origin.row * self._tile + dy)
