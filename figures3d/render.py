"""QPainter drawing primitives shared by every figure."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, TYPE_CHECKING

from PyQt5 import QtCore, QtGui

from .geometry import Edge
from .projection import ScreenPoint

if TYPE_CHECKING:  # pragma: no cover
    from .figures.base import Figure

__all__ = ["fill_background", "draw_edges", "draw_points", "render_image", "POINT_SIZE"]

POINT_SIZE = 2


def fill_background(painter: QtGui.QPainter, color: QtGui.QColor, width: int, height: int) -> None:
    """Paint the whole viewport opaquely, discarding previous contents."""

    if width <= 0 or height <= 0:
        return
    painter.save()
    try:
        painter.setOpacity(1.0)
        painter.setCompositionMode(QtGui.QPainter.CompositionMode_Source)
        opaque = QtGui.QColor(color)
        opaque.setAlpha(255)
        painter.fillRect(0, 0, int(width), int(height), opaque)
    finally:
        painter.restore()


def draw_edges(
    painter: QtGui.QPainter,
    points: Sequence[Optional[ScreenPoint]],
    edges: Iterable[Edge],
    color: QtGui.QColor,
    alpha: float,
) -> None:
    lines = []
    for a, b in edges:
        p1 = points[a]
        p2 = points[b]
        if p1 is None or p2 is None:
            continue
        lines.append(QtCore.QLine(p1[0], p1[1], p2[0], p2[1]))
    if not lines:
        return
    painter.save()
    try:
        painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)
        painter.setOpacity(alpha)
        painter.setPen(QtGui.QPen(color, 1))
        painter.drawLines(lines)
    finally:
        painter.restore()


def draw_points(
    painter: QtGui.QPainter,
    points: Iterable[ScreenPoint],
    color: QtGui.QColor,
    alpha: float,
    size: int = POINT_SIZE,
) -> None:
    rects = [QtCore.QRect(x, y, size, size) for x, y in points]
    if not rects:
        return
    painter.save()
    try:
        painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)
        painter.setOpacity(alpha)
        painter.setPen(QtCore.Qt.NoPen)
        painter.setBrush(QtGui.QBrush(color))
        painter.drawRects(rects)
    finally:
        painter.restore()


def render_image(figure: "Figure", width: int, height: int) -> QtGui.QImage:
    """Render one frame of ``figure`` into a new ARGB32 image."""

    image = QtGui.QImage(max(1, int(width)), max(1, int(height)), QtGui.QImage.Format_ARGB32)
    image.fill(QtCore.Qt.transparent)
    painter = QtGui.QPainter(image)
    try:
        figure.render(painter, int(width), int(height))
    finally:
        painter.end()
    return image
