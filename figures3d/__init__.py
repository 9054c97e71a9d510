"""Rotating 3D wireframe and point-cloud figures with a fading motion trail."""

from .figures import (
    FIGURES,
    BridgeFigure,
    CompositeFigure,
    CubeFigure,
    DonutFigure,
    Figure,
    PyramidFigure,
    create_figure,
)
from .render import render_image

__version__ = "1.0.0"

__all__ = [
    "FIGURES",
    "Figure",
    "CubeFigure",
    "PyramidFigure",
    "BridgeFigure",
    "CompositeFigure",
    "DonutFigure",
    "create_figure",
    "render_image",
    "__version__",
]
