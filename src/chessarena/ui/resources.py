"""Piece artwork helpers: SVG renderers with a Unicode fallback."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtSvg import QSvgRenderer

from chessarena.core.types import PieceSymbol

_LOGGER = logging.getLogger(__name__)

_PACKAGE_ASSETS_DIR = Path(__file__).resolve().parents[1] / "assets"
_REPO_ASSETS_DIR = Path(__file__).resolve().parents[3] / "assets"

_UNICODE: dict[PieceSymbol, str] = {
    "K": "♔",
    "Q": "♕",
    "R": "♖",
    "B": "♗",
    "N": "♘",
    "P": "♙",
    "k": "♚",
    "q": "♛",
    "r": "♜",
    "b": "♝",
    "n": "♞",
    "p": "♟",
}

# Cache SVG renderers (one per artwork file); None marks a missing asset.
_renderers: dict[str, QSvgRenderer | None] = {}


def assets_dir() -> Path:
    """Return the root directory for runtime assets."""
    if _PACKAGE_ASSETS_DIR.is_dir():
        return _PACKAGE_ASSETS_DIR
    return _REPO_ASSETS_DIR


def piece_glyph(symbol: PieceSymbol) -> str:
    """Unicode chess glyph, or the raw symbol for unknown letters."""
    return _UNICODE.get(symbol, symbol)


def piece_renderer(svg_name: str) -> QSvgRenderer | None:
    """Return a cached renderer for *svg_name*, or None if it cannot load."""
    if svg_name not in _renderers:
        path = assets_dir() / "pieces" / svg_name
        renderer: QSvgRenderer | None = None
        if path.is_file():
            renderer = QSvgRenderer(str(path))
            if not renderer.isValid():
                _LOGGER.warning("Invalid SVG asset: %s", path)
                renderer = None
        _renderers[svg_name] = renderer
    return _renderers[svg_name]
