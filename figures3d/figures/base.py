"""Capability set shared by every animated figure."""

from __future__ import annotations

import abc
import logging
import math
from typing import Any, Sequence, Tuple

from PyQt5 import QtCore, QtGui

from ..projection import clamp_zoom
from ..rotation import RotationState

__all__ = ["Figure", "coerce_color"]

log = logging.getLogger(__name__)

ColorLike = Any


def coerce_color(value: ColorLike, fallback: QtGui.QColor) -> QtGui.QColor:
    """Return ``value`` as an opaque ``QColor`` or ``fallback`` when it is not a colour."""

    if isinstance(value, QtGui.QColor):
        color = QtGui.QColor(value)
    elif isinstance(value, (tuple, list)) and len(value) >= 3:
        try:
            color = QtGui.QColor(int(value[0]), int(value[1]), int(value[2]))
        except (TypeError, ValueError):
            color = QtGui.QColor()
    elif isinstance(value, (str, QtCore.Qt.GlobalColor)):
        color = QtGui.QColor(value)
    else:
        color = QtGui.QColor()
    if not color.isValid():
        log.warning("ignoring invalid colour %r", value)
        return QtGui.QColor(fallback)
    color.setAlpha(255)
    return color


def _coerce_float(value: object, default: float) -> float:
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


class Figure(abc.ABC):
    """Animated figure driven by a periodic tick.

    Subclasses own their shape, rotation state and trail; only plain
    configuration fields live here.
    """

    default_trail_length = 8
    default_figure_color: ColorLike = QtCore.Qt.white
    default_background_color: ColorLike = QtCore.Qt.black

    def __init__(self) -> None:
        self._zoom = 1.0
        self._speed = 1.0
        self._gamma = 0.9
        self._paused = False
        self._trail_length = int(self.default_trail_length)
        self._figure_color = QtGui.QColor(self.default_figure_color)
        self._background_color = QtGui.QColor(self.default_background_color)

    # ------------------------------------------------------------------ contract
    @abc.abstractmethod
    def update(self) -> None:
        """Advance one animation tick."""

    @abc.abstractmethod
    def render(self, painter: QtGui.QPainter, width: int, height: int) -> None:
        """Draw the current frame and its trail."""

    @abc.abstractmethod
    def clear_trail(self) -> None:
        """Forget every stored trail entry."""

    @property
    @abc.abstractmethod
    def angles(self) -> Tuple[RotationState, ...]:
        """Current rotation state of every body of the figure."""

    @property
    @abc.abstractmethod
    def trail(self) -> Sequence[Any]:
        """Stored trail entries, oldest first."""

    @abc.abstractmethod
    def _apply_axis_speed(self, axis: str, value: float) -> None:
        ...

    # ------------------------------------------------------------------ setters
    def set_zoom(self, zoom: float) -> None:
        self._zoom = clamp_zoom(zoom)

    def set_speed(self, speed: float) -> None:
        self._speed = _coerce_float(speed, self._speed)

    def set_gamma(self, gamma: float) -> None:
        self._gamma = _coerce_float(gamma, self._gamma)

    def set_trail_length(self, trail_length: int) -> None:
        try:
            self._trail_length = max(0, int(trail_length))
        except (TypeError, ValueError):
            log.warning("ignoring invalid trail length %r", trail_length)

    def set_figure_color(self, color: ColorLike) -> None:
        self._figure_color = coerce_color(color, self._figure_color)

    def set_background_color(self, color: ColorLike) -> None:
        self._background_color = coerce_color(color, self._background_color)

    def set_rotate_x(self, speed: float) -> None:
        self._apply_axis_speed("x", _coerce_float(speed, 0.0))

    def set_rotate_y(self, speed: float) -> None:
        self._apply_axis_speed("y", _coerce_float(speed, 0.0))

    def set_rotate_z(self, speed: float) -> None:
        self._apply_axis_speed("z", _coerce_float(speed, 0.0))

    def toggle_pause(self) -> None:
        self._paused = not self._paused

    # ------------------------------------------------------------------ accessors
    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def gamma(self) -> float:
        return self._gamma

    @property
    def trail_length(self) -> int:
        return self._trail_length

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def figure_color(self) -> QtGui.QColor:
        return QtGui.QColor(self._figure_color)

    @property
    def background_color(self) -> QtGui.QColor:
        return QtGui.QColor(self._background_color)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(zoom={self._zoom:.2f}, speed={self._speed}, "
            f"trail={self._trail_length}, paused={self._paused})"
        )
