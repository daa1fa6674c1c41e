"""ControlPanel — exhibition action buttons."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QWidget


class ControlPanel(QWidget):
    """Buttons for exhibition actions: start, stop, reset."""

    start_clicked = pyqtSignal()
    stop_clicked = pyqtSignal()
    reset_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()
        self.set_running(False)

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        btn_font = QFont()
        btn_font.setPointSize(10)

        self._btn_start = QPushButton("Start Game")
        self._btn_start.setFont(btn_font)
        self._btn_start.setMinimumHeight(36)
        self._btn_start.setStyleSheet(
            "QPushButton { background-color: #1f5f2a; }"
            "QPushButton:hover { background-color: #2a7a37; }"
        )
        self._btn_start.clicked.connect(self.start_clicked)
        layout.addWidget(self._btn_start)

        self._btn_stop = QPushButton("Stop Game")
        self._btn_stop.setFont(btn_font)
        self._btn_stop.setMinimumHeight(36)
        self._btn_stop.setStyleSheet(
            "QPushButton { background-color: #6b2020; }"
            "QPushButton:hover { background-color: #8b2020; }"
        )
        self._btn_stop.clicked.connect(self.stop_clicked)
        layout.addWidget(self._btn_stop)

        self._btn_reset = QPushButton("Reset")
        self._btn_reset.setFont(btn_font)
        self._btn_reset.setMinimumHeight(36)
        self._btn_reset.clicked.connect(self.reset_clicked)
        layout.addWidget(self._btn_reset)

    def set_running(self, running: bool) -> None:
        """Enable/disable buttons based on whether play is running."""
        self._btn_start.setEnabled(not running)
        self._btn_stop.setEnabled(running)
