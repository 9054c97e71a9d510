"""Per-axis rotation angles and their angular speeds."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["RotationState", "Rotator", "DEFAULT_AXIS_SPEED"]

DEFAULT_AXIS_SPEED = 0.1


@dataclass(frozen=True)
class RotationState:
    """Immutable snapshot of the three rotation angles (radians)."""

    ax: float = 0.0
    ay: float = 0.0
    az: float = 0.0

    def as_tuple(self) -> tuple:
        return (self.ax, self.ay, self.az)


class Rotator:
    """Accumulates angles from three independent per-axis speeds.

    Angles are never wrapped; the caller decides whether a tick advances them
    (pause handling lives in the figure).
    """

    def __init__(
        self,
        speed_x: float = DEFAULT_AXIS_SPEED,
        speed_y: float = DEFAULT_AXIS_SPEED,
        speed_z: float = DEFAULT_AXIS_SPEED,
    ) -> None:
        self.ax = 0.0
        self.ay = 0.0
        self.az = 0.0
        self.speed_x = float(speed_x)
        self.speed_y = float(speed_y)
        self.speed_z = float(speed_z)

    def advance(self, multiplier: float = 1.0) -> None:
        self.ax += self.speed_x * multiplier
        self.ay += self.speed_y * multiplier
        self.az += self.speed_z * multiplier

    def snapshot(self) -> RotationState:
        return RotationState(self.ax, self.ay, self.az)

    def __repr__(self) -> str:
        return (
            f"Rotator(angles=({self.ax:.3f}, {self.ay:.3f}, {self.az:.3f}), "
            f"speeds=({self.speed_x}, {self.speed_y}, {self.speed_z}))"
        )
