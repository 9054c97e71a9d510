import logging
from typing import Dict, Optional

from PyQt5 import QtWidgets, QtCore, QtGui

from .config import (
    DEFAULTS,
    SLIDER_RANGES,
    TOOLTIPS,
    RenderConfig,
    axis_speed_from_slider,
    gamma_from_slider,
    speed_from_slider,
    trail_from_slider,
    zoom_from_slider,
    zoom_to_slider,
)
from .widgets import LabeledSlider, open_color_dialog, row
from ..figures import FIGURES, Figure
from ..view.view_widget import FigureViewWidget

log = logging.getLogger(__name__)


class ControlWindow(QtWidgets.QMainWindow):
    """Main window: figure view in the centre, controls above and below.

    Every figure is built once; switching the selector swaps the active one
    and re-applies the shared :class:`RenderConfig`.
    """

    def __init__(self, config: Optional[RenderConfig] = None, figure_name: Optional[str] = None, *, autostart: bool = True):
        super().__init__(None)
        self.setWindowTitle("3D Animation")
        self.config = config if config is not None else RenderConfig()
        self.figures: Dict[str, Figure] = {name: factory() for name, factory in FIGURES.items()}
        name = figure_name or DEFAULTS["figure"]["name"]
        if name not in self.figures:
            raise KeyError(f"unknown figure {name!r}")

        self.view = FigureViewWidget(self.figures[name], self.config, autostart=autostart)

        # Top strip
        self.cb_figure = QtWidgets.QComboBox()
        self.cb_figure.addItems(list(self.figures))
        self.cb_figure.setCurrentText(name)
        self.bt_fg = QtWidgets.QPushButton("Figure Color")
        self.bt_bg = QtWidgets.QPushButton("Background Color")
        self.sl_speed = self._slider("speed", int(round(self.config.speed * 10)), lambda v: f"Speed: {speed_from_slider(v):.1f}", 20)
        self.sl_trail = self._slider("trail", self.config.trail_length, lambda v: f"Trail: {trail_from_slider(v)}", 5)
        self.sl_gamma = self._slider("gamma", int(round(self.config.gamma * 100)), lambda v: f"Gamma: {v}", 20)
        self.chk_fps = QtWidgets.QCheckBox("Show FPS")
        self.chk_fps.setChecked(self.config.show_fps)

        # Bottom strip
        self.sl_rotX = self._slider("rotX", int(round(self.config.rotate_x * 100)), lambda v: f"X Speed: {axis_speed_from_slider(v):.2f}", 20)
        self.sl_rotY = self._slider("rotY", int(round(self.config.rotate_y * 100)), lambda v: f"Y Speed: {axis_speed_from_slider(v):.2f}", 20)
        self.sl_rotZ = self._slider("rotZ", int(round(self.config.rotate_z * 100)), lambda v: f"Z Speed: {axis_speed_from_slider(v):.2f}", 20)
        self.sl_zoom = self._slider("zoom", zoom_to_slider(self.config.zoom), lambda v: f"Zoom: {v / 100.0:.2f}", 1000)

        top = QtWidgets.QHBoxLayout(); top.setContentsMargins(6, 6, 6, 0)
        row(top, self.cb_figure, TOOLTIPS["figure.name"])
        row(top, self.bt_fg, TOOLTIPS["appearance.figureColor"])
        row(top, self.bt_bg, TOOLTIPS["appearance.backgroundColor"])
        row(top, self.sl_speed, TOOLTIPS["dynamics.speed"])
        row(top, self.sl_trail, TOOLTIPS["trail.length"])
        row(top, self.sl_gamma, TOOLTIPS["trail.gamma"])
        row(top, self.chk_fps, TOOLTIPS["system.showFps"])

        bottom = QtWidgets.QHBoxLayout(); bottom.setContentsMargins(6, 0, 6, 6)
        row(bottom, self.sl_rotX, TOOLTIPS["dynamics.rotX"])
        row(bottom, self.sl_rotY, TOOLTIPS["dynamics.rotY"])
        row(bottom, self.sl_rotZ, TOOLTIPS["dynamics.rotZ"])
        row(bottom, self.sl_zoom, TOOLTIPS["camera.zoom"])

        central = QtWidgets.QWidget()
        lay = QtWidgets.QVBoxLayout(central)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(4)
        lay.addLayout(top)
        lay.addWidget(self.view, 1)
        lay.addLayout(bottom)
        self.setCentralWidget(central)
        self.resize(1700, 800)

        self.cb_figure.currentTextChanged.connect(self.on_figure_selected)
        self.bt_fg.clicked.connect(self.pick_figure_color)
        self.bt_bg.clicked.connect(self.pick_background_color)
        self.sl_speed.valueChanged.connect(self.on_speed)
        self.sl_trail.valueChanged.connect(self.on_trail)
        self.sl_gamma.valueChanged.connect(self.on_gamma)
        self.sl_rotX.valueChanged.connect(lambda v: self.on_axis("x", v))
        self.sl_rotY.valueChanged.connect(lambda v: self.on_axis("y", v))
        self.sl_rotZ.valueChanged.connect(lambda v: self.on_axis("z", v))
        self.sl_zoom.valueChanged.connect(self.on_zoom_slider)
        self.chk_fps.toggled.connect(self.view.set_show_fps)
        self.view.zoomChanged.connect(self.on_view_zoom)

    def _slider(self, key: str, value: int, fmt, tick: int) -> LabeledSlider:
        lo, hi = SLIDER_RANGES[key]
        return LabeledSlider(lo, hi, value, fmt, tick)

    @property
    def figure(self) -> Figure:
        return self.view.figure

    # ------------------------------------------------------------------ slots
    def on_figure_selected(self, name: str):
        figure = self.figures.get(name)
        if figure is None:
            log.warning("figure %r is not registered", name)
            return
        self.view.set_figure(figure)

    def on_speed(self, raw: int):
        self.config.speed = speed_from_slider(raw)
        self.figure.set_speed(self.config.speed)

    def on_trail(self, raw: int):
        self.config.trail_length = trail_from_slider(raw)
        self.figure.set_trail_length(self.config.trail_length)

    def on_gamma(self, raw: int):
        self.config.gamma = gamma_from_slider(raw)
        self.figure.set_gamma(self.config.gamma)

    def on_axis(self, axis: str, raw: int):
        value = axis_speed_from_slider(raw)
        setattr(self.config, f"rotate_{axis}", value)
        getattr(self.figure, f"set_rotate_{axis}")(value)

    def on_zoom_slider(self, raw: int):
        self.view.set_zoom(zoom_from_slider(raw))

    def on_view_zoom(self, zoom: float):
        self.sl_zoom.setValue(zoom_to_slider(zoom))

    def apply_figure_color(self, color: QtGui.QColor):
        if color.isValid():
            self.view.set_figure_color(color)

    def apply_background_color(self, color: QtGui.QColor):
        if color.isValid():
            self.view.set_background_color(color)

    def pick_figure_color(self):
        self.apply_figure_color(open_color_dialog(self, self.config.figure_color, "Choose Figure Color"))

    def pick_background_color(self):
        self.apply_background_color(open_color_dialog(self, self.config.background_color, "Choose Background Color"))

    def keyPressEvent(self, event: QtGui.QKeyEvent):  # type: ignore[override]
        if event.key() == QtCore.Qt.Key_Escape:
            self.close()
            return
        super().keyPressEvent(event)
