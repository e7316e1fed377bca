"""
Rendering surface abstraction.

The mask store holds plain geometry; after each mutation its state is pushed
one way into a surface that draws it. The browser canvas is the real
renderer, SceneSurface keeps the scene as plain data for it.
"""

from typing import Protocol

from maskedit.geometry import points_to_flat
from maskedit.models import Polygon
from maskedit.store import MaskStore


class RenderSurface(Protocol):
    """Anything that can display polygons."""

    def clear(self) -> None:
        ...

    def add_shape(self, shape: dict) -> None:
        ...

    def draw(self) -> None:
        ...


class SceneSurface:
    """In-memory surface that records the shapes it was asked to draw."""

    def __init__(self):
        self._pending: list[dict] = []
        self._shapes: list[dict] = []
        self.draw_count = 0

    def clear(self) -> None:
        self._pending = []

    def add_shape(self, shape: dict) -> None:
        self._pending.append(shape)

    def draw(self) -> None:
        self._shapes = list(self._pending)
        self.draw_count += 1

    def snapshot(self) -> list[dict]:
        """Shapes as of the last draw."""
        return [dict(shape) for shape in self._shapes]


def polygon_to_shape(polygon: Polygon) -> dict:
    """Convert a polygon to a line-shape description."""
    return {
        "points": points_to_flat(polygon.points),
        "stroke": polygon.stroke,
        "fill": polygon.fill,
        "closed": polygon.closed,
    }


def sync_surface(store: MaskStore, surface: RenderSurface) -> None:
    """
    Redraw a surface from the store.

    Finalized polygons are drawn first, in insertion order, then the polygon
    being drawn.
    """
    surface.clear()
    for polygon in store.polygons:
        surface.add_shape(polygon_to_shape(polygon))
    current = store.current
    if current is not None:
        surface.add_shape(polygon_to_shape(current))
    surface.draw()
