"""
MaskStore - in-memory collection of finalized polygons and the polygon
currently being drawn.
"""

import logging
import math
from typing import Optional

from maskedit.errors import InvalidStateError
from maskedit.geometry import point_in_polygon
from maskedit.models import DEFAULT_FILL, DEFAULT_STROKE, Point, Polygon

logger = logging.getLogger(__name__)


class MaskStore:
    """
    Owns every polygon of an editing session.

    At most one polygon is open at a time. Closing it freezes it and moves it
    to the end of the finalized list; it is never reopened.
    """

    def __init__(self, stroke: str = DEFAULT_STROKE, fill: str = DEFAULT_FILL):
        """
        Initialize an empty store.

        Args:
            stroke: Stroke color given to new polygons
            fill: Fill color given to new polygons
        """
        self.stroke = stroke
        self.fill = fill
        self._polygons: list[Polygon] = []
        self._current: Optional[list[Point]] = None

    def __len__(self) -> int:
        return len(self._polygons)

    @property
    def polygons(self) -> tuple[Polygon, ...]:
        """Finalized polygons in insertion order."""
        return tuple(self._polygons)

    @property
    def has_current(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> Optional[Polygon]:
        """Open snapshot of the polygon being drawn, or None."""
        if self._current is None:
            return None
        return Polygon(
            points=tuple(self._current),
            closed=False,
            stroke=self.stroke,
            fill=self.fill,
        )

    # ==================== Drawing ====================

    def start_polygon(self, point: Point) -> None:
        """
        Begin a new polygon at a point.

        Raises:
            InvalidStateError: If a polygon is already being drawn
        """
        if self._current is not None:
            raise InvalidStateError("A polygon is already in progress; close it first")
        self._current = [_as_point(point)]

    def append_point(self, point: Point) -> None:
        """
        Append a vertex to the current polygon. Repeated points are kept.

        Raises:
            InvalidStateError: If no polygon is being drawn
        """
        if self._current is None:
            raise InvalidStateError("No polygon in progress")
        self._current.append(_as_point(point))

    def close_current(self) -> Polygon:
        """
        Close the current polygon and move it to the finalized list.

        No minimum vertex count is enforced here; consumers skip degenerate
        polygons.

        Returns:
            The finalized polygon

        Raises:
            InvalidStateError: If no polygon is being drawn
        """
        if self._current is None:
            raise InvalidStateError("No polygon in progress")

        polygon = Polygon(
            points=tuple(self._current),
            closed=True,
            stroke=self.stroke,
            fill=self.fill,
        )
        self._polygons.append(polygon)
        self._current = None

        if len(polygon) < 3:
            logger.info(f"Closed degenerate polygon with {len(polygon)} point(s)")
        return polygon

    # ==================== Erasing ====================

    def remove_at(self, point: Point) -> list[Polygon]:
        """
        Remove every finalized polygon containing a point.

        Args:
            point: (x, y) hit point

        Returns:
            The removed polygons, in insertion order
        """
        point = _as_point(point)
        kept = []
        removed = []
        for polygon in self._polygons:
            if point_in_polygon(point, polygon.points):
                removed.append(polygon)
            else:
                kept.append(polygon)

        self._polygons = kept
        return removed

    def clear_all(self) -> None:
        """Remove all finalized polygons and discard the current one."""
        self._polygons = []
        self._current = None


def _as_point(point) -> Point:
    x, y = float(point[0]), float(point[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"Point coordinates must be finite, got {point}")
    return (x, y)
