from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from PyQt5 import QtGui

from ..figures import Figure
from ..projection import ZOOM_MAX, ZOOM_MIN, clamp_zoom

log = logging.getLogger(__name__)

FRAME_INTERVAL_ENV = "FIGURES3D_FRAME_MS"

DEFAULTS = dict(
    figure=dict(name="Donut"),
    appearance=dict(figureColor="#FFFFFF", backgroundColor="#000000"),
    dynamics=dict(speed=10, rotX=10, rotY=10, rotZ=10),
    trail=dict(length=1, gamma=90),
    camera=dict(zoom=100, wheelStep=1.1),
    system=dict(showFps=False, frameIntervalMs=16),
)

SLIDER_RANGES = dict(
    speed=(0, 100),
    trail=(0, 20),
    gamma=(0, 100),
    rotX=(0, 100),
    rotY=(0, 100),
    rotZ=(0, 100),
    zoom=(0, int(ZOOM_MAX * 100)),
)

TOOLTIPS = {
    "figure.name": "Figure currently animated in the view.",
    "appearance.figureColor": "Colour used for edges and points.",
    "appearance.backgroundColor": "Colour the view is cleared with before each frame.",
    "dynamics.speed": "Global speed multiplier applied to every axis (slider / 10).",
    "dynamics.rotX": "Rotation added around the X axis on each tick (slider / 100 rad).",
    "dynamics.rotY": "Rotation added around the Y axis on each tick (slider / 100 rad).",
    "dynamics.rotZ": "Rotation added around the Z axis on each tick (slider / 100 rad).",
    "trail.length": "Number of previous poses kept for the motion trail.",
    "trail.gamma": "Fade curvature of the trail: how quickly older poses disappear.",
    "camera.zoom": "Zoom factor (slider / 100). The mouse wheel changes it too.",
    "system.showFps": "Draw the frames-per-second counter under the figure.",
}


def speed_from_slider(value: int) -> float:
    return value / 10.0


def trail_from_slider(value: int) -> int:
    return max(0, int(value))


def gamma_from_slider(value: int) -> float:
    return value / 100.0


def axis_speed_from_slider(value: int) -> float:
    return value / 100.0


def zoom_from_slider(value: int) -> float:
    return clamp_zoom(value / 100.0)


def zoom_to_slider(zoom: float) -> int:
    return int(clamp_zoom(zoom) * 100)


def wheel_zoom(current: float, rotation: float, step: Optional[float] = None) -> float:
    """Zoom after ``rotation`` wheel notches; positive notches (towards the user) zoom out."""

    base = float(step if step is not None else DEFAULTS["camera"]["wheelStep"])
    return clamp_zoom(float(current) * base ** (-float(rotation)))


def frame_interval_ms() -> int:
    default = int(DEFAULTS["system"]["frameIntervalMs"])
    raw = os.environ.get(FRAME_INTERVAL_ENV, "").strip()
    if not raw:
        return default
    try:
        value = int(float(raw))
    except ValueError:
        log.warning("ignoring %s=%r: not a number", FRAME_INTERVAL_ENV, raw)
        return default
    return max(1, min(1000, value))


def _default_color(key: str) -> QtGui.QColor:
    return QtGui.QColor(DEFAULTS["appearance"][key])


@dataclass
class RenderConfig:
    """Shell-owned settings pushed into the active figure through its setters."""

    figure_color: QtGui.QColor = field(default_factory=lambda: _default_color("figureColor"))
    background_color: QtGui.QColor = field(default_factory=lambda: _default_color("backgroundColor"))
    speed: float = speed_from_slider(DEFAULTS["dynamics"]["speed"])
    trail_length: int = trail_from_slider(DEFAULTS["trail"]["length"])
    gamma: float = gamma_from_slider(DEFAULTS["trail"]["gamma"])
    rotate_x: float = axis_speed_from_slider(DEFAULTS["dynamics"]["rotX"])
    rotate_y: float = axis_speed_from_slider(DEFAULTS["dynamics"]["rotY"])
    rotate_z: float = axis_speed_from_slider(DEFAULTS["dynamics"]["rotZ"])
    zoom: float = zoom_from_slider(DEFAULTS["camera"]["zoom"])
    show_fps: bool = bool(DEFAULTS["system"]["showFps"])

    @classmethod
    def from_defaults(cls) -> "RenderConfig":
        return cls()

    def set_zoom(self, zoom: float) -> float:
        self.zoom = clamp_zoom(zoom)
        return self.zoom

    def apply_wheel(self, rotation: float) -> float:
        return self.set_zoom(wheel_zoom(self.zoom, rotation))

    def apply_to(self, figure: Figure) -> None:
        figure.set_figure_color(self.figure_color)
        figure.set_background_color(self.background_color)
        figure.set_speed(self.speed)
        figure.set_trail_length(self.trail_length)
        figure.set_gamma(self.gamma)
        figure.set_rotate_x(self.rotate_x)
        figure.set_rotate_y(self.rotate_y)
        figure.set_rotate_z(self.rotate_z)
        figure.set_zoom(self.zoom)


__all__ = [
    "DEFAULTS",
    "SLIDER_RANGES",
    "TOOLTIPS",
    "FRAME_INTERVAL_ENV",
    "ZOOM_MIN",
    "ZOOM_MAX",
    "RenderConfig",
    "speed_from_slider",
    "trail_from_slider",
    "gamma_from_slider",
    "axis_speed_from_slider",
    "zoom_from_slider",
    "zoom_to_slider",
    "wheel_zoom",
    "frame_interval_ms",
]
