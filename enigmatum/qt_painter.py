"""PyQt6 painter adapter, text measurer and draw-mode palette."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen, QPolygonF

from enigmatum.coordinator import DrawMode
from enigmatum.face_renderer import FacePainterAdapter
from enigmatum.hands import Hand
from enigmatum.metrics import BoundingBox, MetricsUnavailable

_FALLBACK_COLOR = "white"
_AMBIENT_HAND_PEN_WIDTH = 2
_MARKER_PEN_WIDTH = 3


def _qcolor(value: str, fallback: str = _FALLBACK_COLOR) -> QColor:
    color = QColor(value)
    if not color.isValid():
        color = QColor(fallback)
    return color


def _default_hand_colors() -> Dict[str, str]:
    return {Hand.HOUR.value: "#e0e0e0", Hand.MINUTE.value: "#b0bec5", Hand.SECOND.value: "#ff7043"}


@dataclass(frozen=True)
class FacePalette:
    """Color lookup keyed by draw mode."""

    interactive_background: str = "#101418"
    ambient_background: str = "#000000"
    interactive_text: str = "#ffffff"
    ambient_text: str = "#8a8a8a"
    interactive_hands: Dict[str, str] = field(default_factory=_default_hand_colors)
    ambient_hand: str = "#8a8a8a"
    marker: str = "red"

    def background_color(self, draw_mode: DrawMode) -> str:
        return self.ambient_background if draw_mode is DrawMode.AMBIENT else self.interactive_background

    def text_color(self, draw_mode: DrawMode) -> str:
        return self.ambient_text if draw_mode is DrawMode.AMBIENT else self.interactive_text

    def hand_color(self, hand: Hand, draw_mode: DrawMode) -> str:
        if draw_mode is DrawMode.AMBIENT:
            return self.ambient_hand
        return self.interactive_hands.get(hand.value, self.interactive_text)


class QtTextMeasurer:
    """Measures the tight ink box of a label, like a canvas ``getTextBounds``."""

    def __call__(self, text: str, point_size: float, font_family: str) -> BoundingBox:
        if point_size <= 0:
            raise MetricsUnavailable(text, f"point size {point_size} is not positive")
        font = QFont(font_family)
        font.setPointSizeF(point_size)
        font.setWeight(QFont.Weight.Normal)
        rect = QFontMetricsF(font).tightBoundingRect(text)
        return BoundingBox(width=rect.width(), height=rect.height())


class QtFacePainterAdapter(FacePainterAdapter):
    def __init__(
        self,
        painter: QPainter,
        surface: QRectF,
        *,
        font_family: str,
        palette: Optional[FacePalette] = None,
    ) -> None:
        self._painter = painter
        self._surface = surface
        self._font_family = font_family
        self._palette = palette or FacePalette()
        self._font_cache: Dict[float, QFont] = {}

    def _font(self, point_size: float) -> QFont:
        font = self._font_cache.get(point_size)
        if font is None:
            font = QFont(self._font_family)
            font.setPointSizeF(point_size)
            font.setWeight(QFont.Weight.Normal)
            self._font_cache[point_size] = font
        return font

    def fill_background(self, draw_mode: DrawMode) -> None:
        self._painter.fillRect(self._surface, _qcolor(self._palette.background_color(draw_mode), "black"))

    def draw_text(self, x: float, y: float, text: str, point_size: float, draw_mode: DrawMode) -> None:
        self._painter.setFont(self._font(point_size))
        self._painter.setPen(_qcolor(self._palette.text_color(draw_mode)))
        self._painter.drawText(QPointF(x, y), text)

    def draw_polygon(
        self,
        points: Sequence[Tuple[float, float]],
        hand: Hand,
        *,
        filled: bool,
        draw_mode: DrawMode,
    ) -> None:
        color = _qcolor(self._palette.hand_color(hand, draw_mode))
        polygon = QPolygonF([QPointF(x, y) for x, y in points])
        if filled:
            self._painter.setPen(Qt.PenStyle.NoPen)
            self._painter.setBrush(QBrush(color))
        else:
            pen = QPen(color)
            pen.setWidth(_AMBIENT_HAND_PEN_WIDTH)
            self._painter.setPen(pen)
            self._painter.setBrush(Qt.BrushStyle.NoBrush)
        self._painter.drawPolygon(polygon)

    def draw_point_marker(self, x: float, y: float) -> None:
        pen = QPen(_qcolor(self._palette.marker, "red"))
        pen.setWidth(_MARKER_PEN_WIDTH)
        self._painter.setPen(pen)
        self._painter.drawPoint(QPointF(x, y))
