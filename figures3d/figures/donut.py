"""Point-cloud donut resolved with a per-pixel depth test.

Unlike the wireframe figures the donut stores already-projected frames: the
current frame is sampled and drawn during :meth:`DonutFigure.render`, then
appended to the history, which keeps ``trail_length + 1`` frames.  A trail
length of zero therefore leaves only the background.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from PyQt5 import QtGui

from ..geometry import CloudParams
from ..projection import CloudProjector, DepthBuffer, ScreenPoint
from ..render import draw_points, fill_background
from ..rotation import RotationState, Rotator
from ..trail import TrailBuffer, trail_alpha
from .base import Figure

__all__ = ["CloudFrame", "DonutFigure"]


@dataclass(frozen=True)
class CloudFrame:
    """Screen pixels of one sampled frame, each the closest point at its pixel."""

    points: Tuple[ScreenPoint, ...]
    pose: RotationState

    def __len__(self) -> int:
        return len(self.points)


class DonutFigure(Figure):
    default_trail_length = 3

    def __init__(self, params: CloudParams = CloudParams(), projector: CloudProjector = CloudProjector()) -> None:
        super().__init__()
        self.params = params
        self.projector = projector
        self.rotator = Rotator()
        self._depth = DepthBuffer()
        self._frames: TrailBuffer[CloudFrame] = TrailBuffer(self._trail_length + 1)

    def update(self) -> None:
        if not self._paused:
            self.rotator.advance(self._speed)

    def render(self, painter: QtGui.QPainter, width: int, height: int) -> None:
        fill_background(painter, self._background_color, width, height)
        if self._trail_length == 0 or width <= 0 or height <= 0:
            return

        count = len(self._frames)
        for index, frame in enumerate(self._frames):
            if self._trail_length == 1:
                alpha = 1.0
            else:
                alpha = trail_alpha(index, count, self._gamma, floor=0.0)
            draw_points(painter, frame.points, self._figure_color, alpha)

        frame = self.sample(width, height)
        draw_points(painter, frame.points, self._figure_color, 1.0)

        self._frames.capacity = self._trail_length + 1
        self._frames.push(frame)

    def sample(self, width: int, height: int) -> CloudFrame:
        pose = self.rotator.snapshot()
        points = self.projector.sample(self.params, pose, width, height, self._zoom, self._depth)
        return CloudFrame(points, pose)

    def set_trail_length(self, trail_length: int) -> None:
        super().set_trail_length(trail_length)
        # capacity follows on the next render; a zero trail keeps nothing
        self._frames.trim(self._trail_length + 1 if self._trail_length else 0)

    def clear_trail(self) -> None:
        self._frames.clear()

    def _apply_axis_speed(self, axis: str, value: float) -> None:
        setattr(self.rotator, f"speed_{axis}", value)

    @property
    def angles(self) -> Tuple[RotationState, ...]:
        return (self.rotator.snapshot(),)

    @property
    def trail(self) -> Sequence[CloudFrame]:
        return tuple(self._frames)
