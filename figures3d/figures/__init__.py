"""Figure registry in the order shown by the figure selector."""

from __future__ import annotations

from typing import Dict, List, Type

from .base import Figure, coerce_color
from .donut import CloudFrame, DonutFigure
from .wireframe import (
    Body,
    BridgeFigure,
    CompositeFigure,
    CubeFigure,
    PyramidFigure,
    WireframeFigure,
)

FIGURES: Dict[str, Type[Figure]] = {
    "Donut": DonutFigure,
    "Cube": CubeFigure,
    "Pyramid": PyramidFigure,
    "Strange Bridge": BridgeFigure,
    "Composition of Donut and Cube": CompositeFigure,
}


def figure_names() -> List[str]:
    return list(FIGURES)


def create_figure(name: str) -> Figure:
    """Instantiate the figure registered under ``name``."""

    try:
        factory = FIGURES[name]
    except KeyError:
        raise KeyError(f"unknown figure {name!r}; choose one of {', '.join(FIGURES)}") from None
    return factory()


__all__ = [
    "Figure",
    "coerce_color",
    "Body",
    "WireframeFigure",
    "CubeFigure",
    "PyramidFigure",
    "BridgeFigure",
    "CompositeFigure",
    "CloudFrame",
    "DonutFigure",
    "FIGURES",
    "figure_names",
    "create_figure",
]
