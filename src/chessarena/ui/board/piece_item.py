"""PieceItem — one piece on the QGraphicsScene."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtSvgWidgets import QGraphicsSvgItem
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsRectItem, QGraphicsSimpleTextItem

from chessarena.core.types import PieceSymbol, Square
from chessarena.ui.identities import PieceIdentity
from chessarena.ui.resources import piece_glyph, piece_renderer


class PieceItem(QGraphicsRectItem):
    """A tile-sized container drawing the piece artwork.

    Falls back to a Unicode glyph when the identity's SVG is unavailable.
    """

    _MARGIN_RATIO = 0.1  # artwork covers 80% of the tile
    _GLYPH_RATIO = 0.7

    def __init__(
        self,
        symbol: PieceSymbol,
        identity: PieceIdentity,
        square: Square,
        tile_size: int,
    ) -> None:
        super().__init__(0.0, 0.0, float(tile_size), float(tile_size))
        self.symbol = symbol
        self.identity = identity
        self.square = square
        self._artwork: QGraphicsItem

        self.setPen(QPen(Qt.PenStyle.NoPen))
        self.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        self.setToolTip(identity.name)
        self.setZValue(1)

        renderer = piece_renderer(identity.svg)
        if renderer is not None:
            self._artwork = self._make_svg(renderer, tile_size)
        else:
            self._artwork = self._make_glyph(symbol, tile_size)

    @property
    def has_artwork(self) -> bool:
        return isinstance(self._artwork, QGraphicsSvgItem)

    def _make_svg(self, renderer, tile_size: int) -> QGraphicsSvgItem:
        margin = tile_size * self._MARGIN_RATIO
        draw_size = max(tile_size - 2.0 * margin, 1.0)

        item = QGraphicsSvgItem(self)
        item.setSharedRenderer(renderer)
        bounds = item.boundingRect()
        width = float(bounds.width()) or float(renderer.defaultSize().width()) or 1.0
        height = float(bounds.height()) or float(renderer.defaultSize().height()) or 1.0
        item.setScale(min(draw_size / width, draw_size / height))
        item.setPos(margin, margin)
        return item

    def _make_glyph(self, symbol: PieceSymbol, tile_size: int) -> QGraphicsSimpleTextItem:
        item = QGraphicsSimpleTextItem(piece_glyph(symbol), self)
        font = QFont()
        font.setPixelSize(max(8, int(tile_size * self._GLYPH_RATIO)))
        item.setFont(font)
        item.setBrush(QBrush(QColor(20, 20, 20) if symbol.islower() else QColor(250, 250, 250)))
        item.setPen(QPen(QColor(128, 128, 128)))
        rect = item.boundingRect()
        item.setPos((tile_size - rect.width()) / 2, (tile_size - rect.height()) / 2)
        return item
