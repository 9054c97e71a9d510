"""Rotation matrices, perspective divide and the point-cloud depth test.

Screen coordinates follow the integer conventions of a raster surface: the
viewport centre is ``width // 2`` and projected values are truncated toward
zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from .geometry import CloudParams, Vertex
from .rotation import RotationState

__all__ = [
    "ScreenPoint",
    "ZOOM_MIN",
    "ZOOM_MAX",
    "clamp_zoom",
    "rotate_xyz",
    "rotate_zyx",
    "ROTATION_ORDERS",
    "Projector",
    "DepthBuffer",
    "CloudProjector",
]

ScreenPoint = Tuple[int, int]

ZOOM_MAX = 45.0
ZOOM_MIN = 0.01


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def clamp_zoom(value: float) -> float:
    try:
        zoom = float(value)
    except (TypeError, ValueError):
        return 1.0
    if math.isnan(zoom):
        return 1.0
    return clamp(zoom, ZOOM_MIN, ZOOM_MAX)


def rotate_xyz(vertex: Vertex, state: RotationState) -> Vertex:
    """Rotate around X, then Y, then Z."""

    x, y, z = vertex
    cos_a, sin_a = math.cos(state.ax), math.sin(state.ax)
    y, z = y * cos_a - z * sin_a, y * sin_a + z * cos_a
    cos_b, sin_b = math.cos(state.ay), math.sin(state.ay)
    x, z = x * cos_b + z * sin_b, -x * sin_b + z * cos_b
    cos_c, sin_c = math.cos(state.az), math.sin(state.az)
    x, y = x * cos_c - y * sin_c, x * sin_c + y * cos_c
    return (x, y, z)


def rotate_zyx(vertex: Vertex, state: RotationState) -> Vertex:
    """Rotate around Z, then Y, then X."""

    x, y, z = vertex
    cos_c, sin_c = math.cos(state.az), math.sin(state.az)
    x, y = x * cos_c - y * sin_c, x * sin_c + y * cos_c
    cos_b, sin_b = math.cos(state.ay), math.sin(state.ay)
    x, z = x * cos_b + z * sin_b, -x * sin_b + z * cos_b
    cos_a, sin_a = math.cos(state.ax), math.sin(state.ax)
    y, z = y * cos_a - z * sin_a, y * sin_a + z * cos_a
    return (x, y, z)


ROTATION_ORDERS: Dict[str, Callable[[Vertex, RotationState], Vertex]] = {
    "xyz": rotate_xyz,
    "zyx": rotate_zyx,
}


@dataclass(frozen=True)
class Projector:
    """Perspective projection of a wireframe vertex.

    ``scale = min(width, height) / divisor`` and
    ``perspective = focal / (z + distance)``; the x offset is applied after
    rotation so composite bodies spin around their own centre.
    """

    divisor: float = 2.5
    focal: float = 3.0
    distance: float = 5.0
    order: str = "xyz"
    flip_y: bool = False

    def __post_init__(self) -> None:
        if self.order not in ROTATION_ORDERS:
            raise ValueError(f"unknown rotation order {self.order!r}")
        if self.divisor <= 0.0:
            raise ValueError("divisor must be positive")

    def rotate(self, vertex: Vertex, state: RotationState) -> Vertex:
        return ROTATION_ORDERS[self.order](vertex, state)

    def project_rotated(
        self,
        rotated: Vertex,
        width: int,
        height: int,
        zoom: float = 1.0,
        offset_x: float = 0.0,
    ) -> Optional[ScreenPoint]:
        x, y, z = rotated
        depth = z + self.distance
        if depth <= 0.0:
            return None
        scale = min(width, height) / self.divisor * zoom
        perspective = self.focal / depth
        px = int(width // 2 + (x + offset_x) * scale * perspective)
        dy = y * scale * perspective
        py = int(height // 2 - dy if self.flip_y else height // 2 + dy)
        return (px, py)

    def project(
        self,
        vertex: Vertex,
        state: RotationState,
        width: int,
        height: int,
        zoom: float = 1.0,
        offset_x: float = 0.0,
    ) -> Optional[ScreenPoint]:
        return self.project_rotated(self.rotate(vertex, state), width, height, zoom, offset_x)

    def project_all(
        self,
        vertices: Sequence[Vertex],
        state: RotationState,
        width: int,
        height: int,
        zoom: float = 1.0,
        offset_x: float = 0.0,
    ) -> List[Optional[ScreenPoint]]:
        return [self.project(v, state, width, height, zoom, offset_x) for v in vertices]


class DepthBuffer:
    """Per-pixel ``1/z`` store reused from frame to frame.

    ``reset`` reallocates only when the viewport size changes; otherwise it
    zeroes the pixels touched during the previous frame.
    """

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self._values: List[float] = []
        self._dirty: Set[int] = set()

    def reset(self, width: int, height: int) -> None:
        width = max(0, int(width))
        height = max(0, int(height))
        if width != self.width or height != self.height:
            self.width = width
            self.height = height
            self._values = [0.0] * (width * height)
            self._dirty = set()
            return
        values = self._values
        for idx in self._dirty:
            values[idx] = 0.0
        self._dirty.clear()

    def test_and_set(self, x: int, y: int, ooz: float) -> bool:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        idx = x + self.width * y
        if ooz > self._values[idx]:
            self._values[idx] = ooz
            self._dirty.add(idx)
            return True
        return False

    @property
    def written(self) -> int:
        return len(self._dirty)


@dataclass(frozen=True)
class CloudProjector:
    """Camera of the point-cloud donut.

    Zoom moves the camera (``camera_distance / zoom``) rather than scaling the
    image, so points behind the eye produce a non-positive ``1/z`` and never
    pass the depth test.
    """

    camera_distance: float = 1500.0
    scale: float = 500.0

    def sample(
        self,
        params: CloudParams,
        state: RotationState,
        width: int,
        height: int,
        zoom: float,
        depth: DepthBuffer,
    ) -> Tuple[ScreenPoint, ...]:
        if width <= 0 or height <= 0:
            return ()
        depth.reset(width, height)
        zoom = clamp_zoom(zoom)
        cos_a, sin_a = math.cos(state.ax), math.sin(state.ax)
        cos_b, sin_b = math.cos(state.ay), math.sin(state.ay)
        cos_c, sin_c = math.cos(state.az), math.sin(state.az)
        eye = self.camera_distance / zoom
        cx = width // 2
        cy = height // 2
        k2 = self.scale
        r1 = params.tube_radius
        r2 = params.ring_radius
        phis = [(math.cos(p), math.sin(p)) for p in params.phi_samples()]
        winners: Dict[int, ScreenPoint] = {}

        for theta in params.theta_samples():
            cos_t, sin_t = math.cos(theta), math.sin(theta)
            circle = r2 + r1 * cos_t
            z = r1 * sin_t
            for cos_p, sin_p in phis:
                x = circle * cos_p
                y = circle * sin_p

                # Z
                xz = x * cos_c - y * sin_c
                yz = x * sin_c + y * cos_c
                # Y
                xy = xz * cos_b + z * sin_b
                zy = -xz * sin_b + z * cos_b
                # X
                yr = yz * cos_a - zy * sin_a
                zr = yz * sin_a + zy * cos_a

                denom = zr + eye
                if denom == 0.0:
                    continue
                ooz = 1.0 / denom
                xp = int(cx + k2 * xy * ooz)
                yp = int(cy - k2 * yr * ooz)
                if depth.test_and_set(xp, yp, ooz):
                    winners[xp + width * yp] = (xp, yp)
        return tuple(winners.values())
