"""
Tests for polygon geometry.
"""

import numpy as np
import pytest

from maskedit.geometry import (
    point_in_polygon,
    is_valid_polygon,
    polygon_area,
    points_to_flat,
    flat_to_points,
    rasterize,
)
from maskedit.models import Polygon


SQUARE = [(10.0, 10.0), (100.0, 10.0), (100.0, 100.0), (10.0, 100.0)]
TRIANGLE = [(0.0, 0.0), (60.0, 0.0), (30.0, 60.0)]
# L-shaped (concave) polygon
L_SHAPE = [(0, 0), (40, 0), (40, 10), (10, 10), (10, 40), (0, 40)]


class TestPointInPolygon:
    """Tests for point_in_polygon function."""

    def test_centroid_inside(self):
        """Test that centroids of simple convex polygons are inside."""
        for points in (SQUARE, TRIANGLE):
            cx = sum(x for x, _ in points) / len(points)
            cy = sum(y for _, y in points) / len(points)
            assert point_in_polygon((cx, cy), points)

    def test_far_outside(self):
        """Test points far outside the bounding box."""
        for point in [(-1000, -1000), (1000, 50), (50, 1000), (-5, 50)]:
            assert not point_in_polygon(point, SQUARE)

    def test_concave_notch(self):
        """Test a point in the notch of a concave polygon."""
        assert point_in_polygon((5, 30), L_SHAPE)
        assert point_in_polygon((30, 5), L_SHAPE)
        assert not point_in_polygon((30, 30), L_SHAPE)

    def test_horizontal_edges_at_ray_height(self):
        """Test that a ray running along horizontal edges does not divide by zero."""
        # The ray at y=10 runs along the top edge and the inner step of the L
        assert point_in_polygon((5, 10.0001), L_SHAPE)
        point_in_polygon((50, 10), SQUARE)

    def test_closing_edge_counts(self):
        """Test that the edge from the last vertex back to the first is used."""
        # Only the closing edge (10,100)-(10,10) lies left of this point
        assert not point_in_polygon((5, 50), SQUARE)
        assert point_in_polygon((15, 50), SQUARE)

    def test_degenerate_polygons(self):
        """Test that fewer than 3 points never contain anything."""
        assert not point_in_polygon((0, 0), [])
        assert not point_in_polygon((0, 0), [(0, 0)])
        assert not point_in_polygon((5, 5), [(0, 0), (10, 10)])

    def test_duplicate_points(self):
        """Test polygons with repeated vertices."""
        points = [(10, 10), (10, 10), (100, 10), (100, 100), (10, 100)]
        assert point_in_polygon((50, 50), points)


class TestPolygonHelpers:
    """Tests for validity, area and flat conversion helpers."""

    def test_is_valid_polygon(self):
        assert is_valid_polygon(TRIANGLE)
        assert not is_valid_polygon([(0, 0), (1, 1)])

    def test_square_area(self):
        """Test area of a square."""
        assert abs(polygon_area(SQUARE) - 8100.0) < 0.001

    def test_degenerate_area(self):
        """Test with too few points."""
        assert polygon_area([(0, 0), (1, 1)]) == 0.0

    def test_flattening(self):
        """Test point flattening and pairing."""
        flat = points_to_flat([(0.1, 0.2), (0.3, 0.4), (0.5, 0.6)])

        assert flat == [0.1, 0.2, 0.3, 0.4, 0.5, 0.6]
        assert flat_to_points(flat) == [(0.1, 0.2), (0.3, 0.4), (0.5, 0.6)]

    def test_odd_coordinates(self):
        """Test pairing an odd number of values."""
        with pytest.raises(ValueError, match="Odd"):
            flat_to_points([1.0, 2.0, 3.0])


class TestRasterize:
    """Tests for rasterize function."""

    def test_square_fill(self):
        """Test that the square interior is filled and the rest is background."""
        bitmap = rasterize([Polygon(points=tuple(SQUARE))], 200, 200)

        assert bitmap.shape == (200, 200)
        assert bitmap.dtype == np.uint8
        # Pixel centers 10.5..99.5 lie inside the square
        assert bitmap[10:100, 10:100].all()
        assert bitmap.sum() == 90 * 90
        assert bitmap[50, 50] == 1
        assert bitmap[5, 5] == 0
        assert bitmap[150, 150] == 0

    def test_matches_point_in_polygon(self):
        """Test that every pixel agrees with point_in_polygon at its center."""
        polygon = Polygon(points=((3.2, 1.7), (28.9, 6.1), (17.4, 29.3), (9.0, 14.0)))
        bitmap = rasterize([polygon], 32, 32)

        for row in range(32):
            for col in range(32):
                expected = point_in_polygon((col + 0.5, row + 0.5), polygon.points)
                assert bitmap[row, col] == int(expected)

    def test_idempotent(self):
        """Test that rasterizing twice gives identical bitmaps."""
        polygons = [Polygon(points=tuple(SQUARE)), Polygon(points=tuple(TRIANGLE))]

        first = rasterize(polygons, 120, 120)
        second = rasterize(polygons, 120, 120)

        np.testing.assert_array_equal(first, second)

    def test_skips_degenerate(self):
        """Test that polygons with fewer than 3 points are skipped."""
        polygons = [Polygon(points=((5.0, 5.0),)), Polygon(points=((0.0, 0.0), (50.0, 50.0)))]

        bitmap = rasterize(polygons, 64, 64)

        assert bitmap.sum() == 0

    def test_overlap_stays_filled(self):
        """Test that overlapping polygons do not cancel each other out."""
        a = Polygon(points=((0.0, 0.0), (20.0, 0.0), (20.0, 20.0), (0.0, 20.0)))
        b = Polygon(points=((10.0, 10.0), (30.0, 10.0), (30.0, 30.0), (10.0, 30.0)))

        bitmap = rasterize([a, b], 40, 40)

        assert bitmap[15, 15] == 1
        assert bitmap.sum() == 400 + 400 - 100

    def test_clipped_to_bounds(self):
        """Test polygons extending past the bitmap edges."""
        polygon = Polygon(points=((-50.0, -50.0), (50.0, -50.0), (50.0, 50.0), (-50.0, 50.0)))

        bitmap = rasterize([polygon], 20, 20)

        assert bitmap.all()

    def test_outside_bitmap(self):
        """Test a polygon entirely outside the bitmap."""
        polygon = Polygon(points=((500.0, 500.0), (600.0, 500.0), (550.0, 600.0)))

        assert rasterize([polygon], 50, 50).sum() == 0

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            rasterize([], 0, 10)
