"""Edge-drawn figures whose trail stores rotation poses.

A pose is a tuple with one :class:`RotationState` per body; every render
re-projects the stored poses, so colour changes apply to the whole trail at
once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from PyQt5 import QtCore, QtGui

from ..geometry import Shape, build_bridge, build_cube, build_pyramid, build_torus
from ..projection import Projector
from ..render import draw_edges, fill_background
from ..rotation import RotationState, Rotator
from ..trail import TrailBuffer, trail_alpha
from .base import Figure

__all__ = [
    "Body",
    "Pose",
    "WireframeFigure",
    "CubeFigure",
    "PyramidFigure",
    "BridgeFigure",
    "CompositeFigure",
]

Pose = Tuple[RotationState, ...]


@dataclass
class Body:
    """One rigid shape with its own rotation, drawn at a fixed x offset."""

    shape: Shape
    rotator: Rotator
    offset_x: float = 0.0


class WireframeFigure(Figure):
    projector = Projector()

    def __init__(self, bodies: Sequence[Body]) -> None:
        super().__init__()
        if not bodies:
            raise ValueError("a wireframe figure needs at least one body")
        self.bodies: Tuple[Body, ...] = tuple(bodies)
        self._trail: TrailBuffer[Pose] = TrailBuffer(self._trail_length)

    def update(self) -> None:
        if not self._paused:
            for body in self.bodies:
                body.rotator.advance(self._speed)
        self._trail.capacity = self._trail_length
        self._trail.push(tuple(body.rotator.snapshot() for body in self.bodies))

    def render(self, painter: QtGui.QPainter, width: int, height: int) -> None:
        fill_background(painter, self._background_color, width, height)
        if width <= 0 or height <= 0:
            return
        count = len(self._trail)
        for index, pose in enumerate(self._trail):
            alpha = trail_alpha(index, count, self._gamma)
            for body, state in zip(self.bodies, pose):
                self.draw_body(painter, body, state, width, height, alpha)

    def draw_body(
        self,
        painter: QtGui.QPainter,
        body: Body,
        state: RotationState,
        width: int,
        height: int,
        alpha: float,
    ) -> None:
        points = self.projector.project_all(
            body.shape.vertices, state, width, height, self._zoom, body.offset_x
        )
        draw_edges(painter, points, body.shape.edges, self._figure_color, alpha)

    def set_trail_length(self, trail_length: int) -> None:
        super().set_trail_length(trail_length)
        self._trail.capacity = self._trail_length
        self._trail.trim()

    def clear_trail(self) -> None:
        self._trail.clear()

    def _apply_axis_speed(self, axis: str, value: float) -> None:
        for body in self.bodies:
            setattr(body.rotator, f"speed_{axis}", value)

    @property
    def angles(self) -> Tuple[RotationState, ...]:
        return tuple(body.rotator.snapshot() for body in self.bodies)

    @property
    def trail(self) -> Sequence[Pose]:
        return tuple(self._trail)


class CubeFigure(WireframeFigure):
    """Unit cube, rotated X then Y then Z."""

    default_trail_length = 8
    projector = Projector(divisor=2.5, focal=3.0, distance=5.0, order="xyz")

    def __init__(self) -> None:
        super().__init__([Body(build_cube(), Rotator())])


class PyramidFigure(WireframeFigure):
    default_trail_length = 8
    projector = Projector(divisor=2.5, focal=3.0, distance=5.0, order="xyz")

    def __init__(self) -> None:
        super().__init__([Body(build_pyramid(), Rotator())])


class BridgeFigure(WireframeFigure):
    """Rounded double frame with a prism, rotated Z then Y then X."""

    default_trail_length = 10
    default_figure_color = QtCore.Qt.red
    projector = Projector(divisor=2.5, focal=3.0, distance=5.0, order="zyx")

    def __init__(self) -> None:
        super().__init__([Body(build_bridge(), Rotator())])


class CompositeFigure(WireframeFigure):
    """Wireframe torus on the left and a cube on the right.

    Each body spins at its own default rate; the shared axis setters
    overwrite both with the same value.
    """

    default_trail_length = 10
    projector = Projector(divisor=4.0, focal=3.0, distance=6.0, order="xyz")

    TORUS_OFFSET = -3.0
    CUBE_OFFSET = 3.0

    def __init__(self) -> None:
        super().__init__(
            [
                Body(build_torus(), Rotator(0.05, 0.03, 0.02), self.TORUS_OFFSET),
                Body(build_cube(), Rotator(0.01, 0.04, 0.06), self.CUBE_OFFSET),
            ]
        )

    @property
    def torus(self) -> Body:
        return self.bodies[0]

    @property
    def cube(self) -> Body:
        return self.bodies[1]
