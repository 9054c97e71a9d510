"""Static topology for the animated figures.

Every builder is a pure function of its constants and returns a validated
:class:`Shape`.  The point-cloud donut is not a mesh: it only carries the
parametric description in :class:`CloudParams` and is re-sampled by the
projector on every frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

__all__ = [
    "Vertex",
    "Edge",
    "Shape",
    "CloudParams",
    "build_cube",
    "build_torus",
    "build_bridge",
    "build_pyramid",
    "frange",
    "SHAPE_BUILDERS",
]

Vertex = Tuple[float, float, float]
Edge = Tuple[int, int]

_CUBE_EDGES: Tuple[Edge, ...] = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)

_PRISM_VERTICES: Tuple[Vertex, ...] = (
    (-0.4, -0.3, 0.01), (0.5, 0.0, 0.01), (-0.4, 0.3, 0.01),
    (-0.4, -0.3, 0.05), (0.5, 0.0, 0.05), (-0.4, 0.3, 0.05),
)
_PRISM_EDGES: Tuple[Edge, ...] = (
    (0, 1), (1, 2), (2, 0), (3, 4), (4, 5), (5, 3), (0, 3), (1, 4), (2, 5),
)


@dataclass(frozen=True)
class Shape:
    """Vertex list plus edge list of a wireframe figure."""

    vertices: Tuple[Vertex, ...]
    edges: Tuple[Edge, ...]

    def validate(self) -> "Shape":
        count = len(self.vertices)
        for a, b in self.edges:
            if not (0 <= a < count and 0 <= b < count):
                raise ValueError(f"edge ({a}, {b}) references a missing vertex (have {count})")
            if a == b:
                raise ValueError(f"degenerate edge ({a}, {b})")
        return self

    @classmethod
    def from_lists(cls, vertices: Sequence[Sequence[float]], edges: Sequence[Sequence[int]]) -> "Shape":
        verts = tuple((float(v[0]), float(v[1]), float(v[2])) for v in vertices)
        pairs = tuple((int(e[0]), int(e[1])) for e in edges)
        return cls(verts, pairs).validate()


def frange(start: float, stop: float, step: float) -> List[float]:
    """Return ``start, start+step, ...`` accumulated in floating point while ``< stop``."""

    if step <= 0.0:
        raise ValueError("step must be positive")
    values: List[float] = []
    value = start
    while value < stop:
        values.append(value)
        value += step
    return values


@dataclass(frozen=True)
class CloudParams:
    """Parametric description of the point-cloud torus.

    ``theta`` walks around the tube cross-section and ``phi`` around the ring,
    both sampled with the accumulated step sizes below.
    """

    tube_radius: float = 100.0
    ring_radius: float = 200.0
    theta_step: float = 0.07
    phi_step: float = 0.02

    def theta_samples(self) -> List[float]:
        return frange(0.0, 2 * math.pi, self.theta_step)

    def phi_samples(self) -> List[float]:
        return frange(0.0, 2 * math.pi, self.phi_step)


def build_cube(size: float = 1.0) -> Shape:
    s = float(size)
    vertices = (
        (-s, -s, -s), (s, -s, -s), (s, s, -s), (-s, s, -s),
        (-s, -s, s), (s, -s, s), (s, s, s), (-s, s, s),
    )
    return Shape(vertices, _CUBE_EDGES).validate()


def build_torus(
    ring_radius: float = 1.5,
    tube_radius: float = 0.5,
    ring_steps: int = 20,
    tube_steps: int = 20,
) -> Shape:
    """Quad-mesh torus: every vertex links to its next tube and next ring neighbour."""

    vertices: List[Vertex] = []
    for i in range(ring_steps):
        theta = 2 * math.pi * i / ring_steps
        for j in range(tube_steps):
            phi = 2 * math.pi * j / tube_steps
            x = (ring_radius + tube_radius * math.cos(phi)) * math.cos(theta)
            y = (ring_radius + tube_radius * math.cos(phi)) * math.sin(theta)
            z = tube_radius * math.sin(phi)
            vertices.append((x, y, z))

    edges: List[Edge] = []
    for i in range(ring_steps):
        for j in range(tube_steps):
            current = i * tube_steps + j
            next_tube = i * tube_steps + (j + 1) % tube_steps
            next_ring = ((i + 1) % ring_steps) * tube_steps + j
            edges.append((current, next_tube))
            edges.append((current, next_ring))
    return Shape(tuple(vertices), tuple(edges)).validate()


def build_bridge(
    width: float = 2.0,
    height: float = 1.2,
    depth: float = 0.2,
    radius: float = 0.3,
    corner_segments: int = 10,
) -> Shape:
    """Two rounded-rectangle faces joined edge to edge, plus a small prism."""

    corners = ((-1, -1), (1, -1), (1, 1), (-1, 1))
    vertices: List[Vertex] = []
    for face in range(2):
        z = -depth if face == 0 else depth
        for c, (sx, sy) in enumerate(corners):
            cx = sx * (width / 2 - radius)
            cy = sy * (height / 2 - radius)
            start = c * math.pi / 2
            for i in range(corner_segments + 1):
                theta = start + i * math.pi / 2 / corner_segments
                vertices.append((cx + radius * math.cos(theta), cy + radius * math.sin(theta), z))

    per_face = 4 * (corner_segments + 1)
    edges: List[Edge] = []
    for i in range(per_face):
        edges.append((i, (i + 1) % per_face))
        edges.append((i + per_face, (i + 1) % per_face + per_face))
        edges.append((i, i + per_face))

    offset = len(vertices)
    vertices.extend(_PRISM_VERTICES)
    edges.extend((offset + a, offset + b) for a, b in _PRISM_EDGES)
    return Shape(tuple(vertices), tuple(edges)).validate()


def build_pyramid(size: float = 1.0) -> Shape:
    # screen y grows downwards, so the apex sits at -y
    s = float(size)
    vertices = (
        (-s, s, -s), (s, s, -s), (s, s, s), (-s, s, s),
        (0.0, -s, 0.0),
    )
    edges = (
        (0, 1), (1, 2), (2, 3), (3, 0),
        (0, 4), (1, 4), (2, 4), (3, 4),
    )
    return Shape(vertices, edges).validate()


SHAPE_BUILDERS: Dict[str, Callable[[], Shape]] = {
    "cube": build_cube,
    "torus": build_torus,
    "bridge": build_bridge,
    "pyramid": build_pyramid,
}
