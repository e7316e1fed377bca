"""
Polygon geometry: hit testing, validity checks and rasterization.

Containment follows the even-odd rule. A point lying exactly on a polygon
edge or vertex has no defined inside/outside classification.
"""

import math
from typing import Iterable, Sequence

import numpy as np

from maskedit.models import Point, Polygon

MIN_POLYGON_POINTS = 3


def point_in_polygon(point: Point, points: Sequence[Point]) -> bool:
    """
    Test whether a point lies inside a polygon using ray casting.

    A horizontal ray is cast from the point towards +x and the inside flag is
    toggled for every edge it crosses, including the closing edge from the
    last vertex back to the first. Horizontal edges never count as a
    crossing.

    Args:
        point: (x, y) point to test
        points: Polygon vertices in order

    Returns:
        True if the point is inside, False otherwise (always False for
        fewer than 3 vertices)
    """
    n = len(points)
    if n < MIN_POLYGON_POINTS:
        return False

    x, y = point
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = points[i]
        xj, yj = points[j]
        j = i

        if yi == yj:
            continue

        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside

    return inside


def is_valid_polygon(points: Sequence[Point]) -> bool:
    """A polygon is valid when it has at least 3 vertices."""
    return len(points) >= MIN_POLYGON_POINTS


def polygon_area(points: Sequence[Point]) -> float:
    """
    Calculate the area of a polygon using the shoelace formula.

    Args:
        points: List of (x, y) coordinates

    Returns:
        Area in square stage units (0.0 for fewer than 3 points)
    """
    n = len(points)
    if n < MIN_POLYGON_POINTS:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i][0] * points[j][1]
        area -= points[j][0] * points[i][1]

    return abs(area) / 2.0


def points_to_flat(points: Iterable[Point]) -> list[float]:
    """
    Flatten points to a list of coordinates [x1, y1, x2, y2, ...].

    Args:
        points: Iterable of (x, y) tuples

    Returns:
        Flat coordinate list
    """
    result = []
    for x, y in points:
        result.extend([float(x), float(y)])
    return result


def flat_to_points(flat: Sequence[float]) -> list[Point]:
    """
    Pair a flat coordinate list [x1, y1, x2, y2, ...] into points.

    Raises:
        ValueError: If the input is not a list of finite numbers or has
            an odd number of values
    """
    if not isinstance(flat, (list, tuple)):
        raise ValueError(f"Coordinates must be a list, got {type(flat).__name__}")
    if len(flat) % 2 != 0:
        raise ValueError(f"Odd number of coordinates: {len(flat)}")
    try:
        values = [float(v) for v in flat]
    except TypeError as e:
        raise ValueError(f"Non-numeric coordinate: {e}") from e
    if not all(math.isfinite(v) for v in values):
        raise ValueError("Coordinates must be finite")
    return [(values[i], values[i + 1]) for i in range(0, len(values), 2)]


def _even_odd_fill(
    points: Sequence[Point], xs: np.ndarray, ys: np.ndarray
) -> np.ndarray:
    """Vectorized point_in_polygon over a grid of sample coordinates."""
    inside = np.zeros((ys.shape[0], xs.shape[1]), dtype=bool)
    n = len(points)
    j = n - 1
    for i in range(n):
        xi, yi = points[i]
        xj, yj = points[j]
        j = i

        if yi == yj:
            continue

        crosses = (yi > ys) != (yj > ys)
        x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
        inside ^= crosses & (xs < x_cross)

    return inside


def rasterize(polygons: Iterable[Polygon], width: int, height: int) -> np.ndarray:
    """
    Rasterize polygons into a binary bitmap.

    Each pixel is sampled at its center (col + 0.5, row + 0.5) with the same
    even-odd rule as point_in_polygon. Polygons with fewer than 3 points are
    skipped. Filling is unconditional, so overlapping regions stay filled.

    Args:
        polygons: Polygons in insertion order
        width: Bitmap width in pixels
        height: Bitmap height in pixels

    Returns:
        Bitmap (height, width) with dtype uint8: 0 background, 1 filled
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Bitmap dimensions must be positive, got {width}x{height}")

    bitmap = np.zeros((height, width), dtype=np.uint8)

    for polygon in polygons:
        points = polygon.points
        if not is_valid_polygon(points):
            continue

        coords = np.asarray(points, dtype=np.float64)
        min_x, min_y = coords.min(axis=0)
        max_x, max_y = coords.max(axis=0)

        # Only pixel centers inside the bounding box can be filled
        col0 = max(0, math.ceil(min_x - 0.5))
        col1 = min(width - 1, math.floor(max_x - 0.5))
        row0 = max(0, math.ceil(min_y - 0.5))
        row1 = min(height - 1, math.floor(max_y - 0.5))
        if col0 > col1 or row0 > row1:
            continue

        xs = (np.arange(col0, col1 + 1, dtype=np.float64) + 0.5)[np.newaxis, :]
        ys = (np.arange(row0, row1 + 1, dtype=np.float64) + 0.5)[:, np.newaxis]

        filled = _even_odd_fill(points, xs, ys)
        bitmap[row0:row1 + 1, col0:col1 + 1][filled] = 1

    return bitmap
