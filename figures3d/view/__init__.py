from .view_widget import FigureViewWidget, FpsCounter

__all__ = ["FigureViewWidget", "FpsCounter"]
