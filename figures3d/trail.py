"""Bounded pose history and the fade ramp used to draw it."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, List, Optional, TypeVar

__all__ = ["TrailBuffer", "trail_alpha", "trail_alphas", "TRAIL_ALPHA_FLOOR"]

T = TypeVar("T")

TRAIL_ALPHA_FLOOR = 0.1


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def trail_alpha(index: int, count: int, gamma: float, floor: float = TRAIL_ALPHA_FLOOR) -> float:
    """Opacity of entry ``index`` (0 = oldest) in a trail of ``count`` entries."""

    if count <= 1:
        return 1.0
    return clamp01(min(floor + gamma * (index / float(count - 1)), 1.0))


def trail_alphas(count: int, gamma: float, floor: float = TRAIL_ALPHA_FLOOR) -> List[float]:
    return [trail_alpha(i, count, gamma, floor) for i in range(count)]


class TrailBuffer(Generic[T]):
    """Append-only history trimmed from the head to at most ``capacity`` items.

    Lowering the capacity does not drop anything immediately: the excess is
    evicted by the next :meth:`push`, matching the per-tick trimming of the
    animation loop.
    """

    def __init__(self, capacity: int = 0) -> None:
        self._items: Deque[T] = deque()
        self._capacity = max(0, int(capacity))

    @property
    def capacity(self) -> int:
        return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        self._capacity = max(0, int(value))

    def push(self, entry: T) -> None:
        self._items.append(entry)
        self.trim()

    def trim(self, limit: Optional[int] = None) -> None:
        bound = self._capacity if limit is None else max(0, int(limit))
        while len(self._items) > bound:
            self._items.popleft()

    def clear(self) -> None:
        self._items.clear()

    def latest(self) -> Optional[T]:
        return self._items[-1] if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __repr__(self) -> str:
        return f"TrailBuffer(size={len(self._items)}, capacity={self._capacity})"
