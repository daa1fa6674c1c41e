"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from chessarena.config import ArenaSettings
from chessarena.engine import create_move_source
from chessarena.engine.source import MoveSource
from chessarena.game.exhibition import ExhibitionController
from chessarena.game.interfaces import ExhibitionPhase, Side
from chessarena.game.rules import ChessRules
from chessarena.ui.board.board_view import BoardView
from chessarena.ui.identities import build_identity_table
from chessarena.ui.panels.control_panel import ControlPanel

_LOGGER = logging.getLogger(__name__)

TCallback = TypeVar("TCallback", bound=Callable[..., None])


class MainWindow(QMainWindow):
    """Exhibition window: one animated board, status labels and controls.

    Move sources default to the ones named in *settings*; tests pass their
    own through *white* / *black*.
    """

    def __init__(
        self,
        settings: ArenaSettings | None = None,
        *,
        white: MoveSource | None = None,
        black: MoveSource | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Marvel vs DC Chess Arena")
        self.setMinimumSize(520, 640)
        self.resize(720, 820)

        self._settings = settings or ArenaSettings()
        self._identities = build_identity_table()

        white = white or create_move_source(
            self._settings.white_source, "Marvel", self._settings, self
        )
        black = black or create_move_source(
            self._settings.black_source, "DC", self._settings, self
        )
        self._controller = ExhibitionController(
            rules=ChessRules(),
            white=white,
            black=black,
            settings=self._settings,
            parent=self,
        )

        self._setup_ui()
        self._connect_signals()
        self._connect_game_events()
        self._controller.setup()
        self._update_turn_label()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._status_label = QLabel("Ready to start")
        self._status_label.setObjectName("statusLabel")
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._status_label)

        self._turn_label = QLabel()
        self._turn_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._turn_label)

        self._board_view = BoardView(self._settings, self._identities)
        root.addWidget(self._board_view, stretch=1)

        self._move_label = QLabel("Move: 0")
        self._move_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._move_label)

        self._control_panel = ControlPanel()
        root.addWidget(self._control_panel)

    # ── Signal wiring ────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        """Connect Qt widget signals."""
        self._control_panel.start_clicked.connect(self._on_start)
        self._control_panel.stop_clicked.connect(self._controller.stop)
        self._control_panel.reset_clicked.connect(self._controller.reset)

    def _connect_game_events(self) -> None:
        """Subscribe to ExhibitionController callbacks (idempotent)."""
        events = self._controller.events
        self._replace_callback(events.on_position, self._on_position)
        self._replace_callback(events.on_reset, self._on_reset)
        self._replace_callback(events.on_move, self._on_move)
        self._replace_callback(events.on_status, self._status_label.setText)
        self._replace_callback(events.on_phase_changed, self._on_phase_changed)

    @staticmethod
    def _replace_callback(
        callbacks: list[TCallback],
        callback: TCallback,
    ) -> None:
        callbacks[:] = [cb for cb in callbacks if cb != callback]
        callbacks.append(callback)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def controller(self) -> ExhibitionController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    # ── Game callbacks ───────────────────────────────────────────────────

    def _on_start(self) -> None:
        if not self._controller.start():
            _LOGGER.info("Start ignored in phase %s", self._controller.phase.name)

    def _on_position(self, fen: str) -> None:
        self._board_view.board_scene.push_position(fen)
        self._update_turn_label()

    def _on_reset(self, fen: str) -> None:
        self._board_view.board_scene.reset_position(fen)
        self._move_label.setText("Move: 0")
        self._update_turn_label()

    def _on_move(self, coord_move: str, move_number: int) -> None:
        self._move_label.setText(f"Move: {move_number} ({coord_move})")

    def _on_phase_changed(self, phase: ExhibitionPhase) -> None:
        self._control_panel.set_running(phase == ExhibitionPhase.RUNNING)

    def _update_turn_label(self) -> None:
        side = self._controller.rules.side_to_move
        team = "Marvel" if side is Side.WHITE else "DC"
        self._turn_label.setText(f"Turn: {side} ({team})")

    # ── Lifecycle ────────────────────────────────────────────────────────

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._controller.shutdown()
        self._board_view.board_scene.shutdown()
        super().closeEvent(event)
