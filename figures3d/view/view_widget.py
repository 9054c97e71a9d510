"""Raster widget animating one figure on a fixed timer tick.

The widget owns nothing but the tick: each timeout advances the active figure
and schedules a repaint, and ``paintEvent`` hands a ``QPainter`` to the
figure.  Configuration lives in a :class:`RenderConfig` shared with the
control window; wheel zoom is reported back through :attr:`zoomChanged`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from ..control.config import RenderConfig, frame_interval_ms
from ..figures import Figure

__all__ = ["FpsCounter", "FigureViewWidget"]

log = logging.getLogger(__name__)


class FpsCounter:
    """Frames rendered per wall-clock second, published once a second."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._window_start = clock()
        self._frames = 0
        self.fps = 0

    def tick(self) -> int:
        self._frames += 1
        now = self._clock()
        if now - self._window_start >= 1.0:
            self.fps = self._frames
            self._frames = 0
            self._window_start = now
        return self.fps


class FigureViewWidget(QtWidgets.QWidget):
    zoomChanged = QtCore.pyqtSignal(float)

    def __init__(
        self,
        figure: Figure,
        config: Optional[RenderConfig] = None,
        parent: Optional[QtWidgets.QWidget] = None,
        *,
        autostart: bool = True,
    ) -> None:
        super().__init__(parent)
        self.setAttribute(QtCore.Qt.WA_OpaquePaintEvent, True)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)
        self.config = config if config is not None else RenderConfig()
        self.figure = figure
        self.config.apply_to(self.figure)
        self.fps_counter = FpsCounter()

        self._timer = QtCore.QTimer(self)
        self._frame_interval_ms = frame_interval_ms()
        self._timer.timeout.connect(self.tick)
        if autostart:
            self._timer.start(self._frame_interval_ms)

        shortcut = QtWidgets.QShortcut(QtGui.QKeySequence(QtCore.Qt.Key_Space), self)
        shortcut.setContext(QtCore.Qt.WindowShortcut)
        shortcut.activated.connect(self.toggle_pause)

    # ------------------------------------------------------------------ loop
    def tick(self) -> None:
        self.figure.update()
        self.fps_counter.tick()
        self.update()

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start(self._frame_interval_ms)

    def stop(self) -> None:
        self._timer.stop()

    def set_frame_interval(self, interval_ms: int) -> None:
        interval_ms = max(int(interval_ms), 1)
        self._frame_interval_ms = interval_ms
        if self._timer.isActive():
            self._timer.setInterval(interval_ms)

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    # ------------------------------------------------------------------ API
    def set_figure(self, figure: Figure) -> None:
        """Make ``figure`` active; its previous trail is discarded."""

        figure.clear_trail()
        self.config.apply_to(figure)
        self.figure = figure
        log.debug("active figure: %r", figure)
        self.update()

    def set_zoom(self, zoom: float) -> None:
        """Apply a zoom coming from the controls; does not emit :attr:`zoomChanged`."""

        self.figure.set_zoom(self.config.set_zoom(zoom))
        self.update()

    def set_figure_color(self, color: QtGui.QColor) -> None:
        self.figure.set_figure_color(color)
        self.config.figure_color = self.figure.figure_color
        self.update()

    def set_background_color(self, color: QtGui.QColor) -> None:
        self.figure.set_background_color(color)
        self.config.background_color = self.figure.background_color
        self.update()

    def set_show_fps(self, show: bool) -> None:
        self.config.show_fps = bool(show)
        self.update()

    def toggle_pause(self) -> None:
        self.figure.toggle_pause()

    def render_frame(self) -> QtGui.QImage:
        """Render the current frame into an image the size of the widget."""

        image = QtGui.QImage(max(1, self.width()), max(1, self.height()), QtGui.QImage.Format_ARGB32)
        painter = QtGui.QPainter(image)
        try:
            self._paint(painter)
        finally:
            painter.end()
        return image

    # ------------------------------------------------------------------ Qt events
    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # type: ignore[override]
        del event
        painter = QtGui.QPainter(self)
        try:
            self._paint(painter)
        finally:
            painter.end()

    def wheelEvent(self, event: QtGui.QWheelEvent) -> None:  # type: ignore[override]
        steps = event.angleDelta().y()
        if steps == 0:
            steps = event.angleDelta().x()
        if steps == 0:
            event.ignore()
            return
        self.apply_wheel(-steps / 120.0)
        event.accept()

    def apply_wheel(self, rotation: float) -> float:
        """Zoom by ``rotation`` wheel notches and notify listeners."""

        zoom = self.config.apply_wheel(rotation)
        self.figure.set_zoom(zoom)
        self.zoomChanged.emit(zoom)
        self.update()
        return zoom

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.update()

    # ------------------------------------------------------------------ painting
    def _paint(self, painter: QtGui.QPainter) -> None:
        width = self.width()
        height = self.height()
        self.figure.render(painter, width, height)
        if self.config.show_fps:
            self._draw_fps(painter, width, height)

    def _draw_fps(self, painter: QtGui.QPainter, width: int, height: int) -> None:
        text = f"FPS: {self.fps_counter.fps}"
        painter.save()
        try:
            painter.setOpacity(1.0)
            painter.setCompositionMode(QtGui.QPainter.CompositionMode_SourceOver)
            painter.setPen(QtGui.QColor(QtCore.Qt.green))
            font = QtGui.QFont("Monospace", 12)
            font.setStyleHint(QtGui.QFont.Monospace)
            painter.setFont(font)
            metrics = painter.fontMetrics()
            x = (width - metrics.horizontalAdvance(text)) // 2
            painter.drawText(x, height - 10, text)
        finally:
            painter.restore()
