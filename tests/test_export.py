"""
Tests for JSON and binary PNG export.
"""

import io
import json

import numpy as np
import pytest
from PIL import Image

from maskedit.bitmap import (
    bitmap_area, bitmap_bbox, bitmap_to_png, png_to_bitmap,
)
from maskedit.errors import NothingToExportError
from maskedit.export import (
    RASTER_FILENAME,
    export_json_artifact,
    export_raster_artifact,
    json_filename,
    parse_json,
    to_binary_raster,
    to_json,
)
from maskedit.store import MaskStore


def draw(store, points, close=True):
    store.start_polygon(points[0])
    for point in points[1:]:
        store.append_point(point)
    if close:
        store.close_current()


SQUARE = [(10, 10), (100, 10), (100, 100), (10, 100)]


class TestToJson:
    """Tests for vector export."""

    def test_document_shape(self):
        """Test the exported array of polygon objects."""
        store = MaskStore()
        draw(store, SQUARE)

        data = json.loads(to_json(store))

        assert data == [{
            "points": [10.0, 10.0, 100.0, 10.0, 100.0, 100.0, 10.0, 100.0],
            "color": "blue",
            "fill": "rgba(0, 0, 255, 0.3)",
        }]

    def test_empty_raises(self):
        """Test that an empty mask is not exported as JSON."""
        with pytest.raises(NothingToExportError):
            to_json(MaskStore())

    def test_current_excluded(self):
        """Test that the polygon being drawn is left out."""
        store = MaskStore()
        draw(store, SQUARE)
        draw(store, [(1, 1), (2, 2)], close=False)

        assert len(json.loads(to_json(store))) == 1

    def test_only_current_raises(self):
        """Test that an open polygon alone counts as nothing to export."""
        store = MaskStore()
        draw(store, SQUARE, close=False)

        with pytest.raises(NothingToExportError):
            to_json(store)

    def test_round_trip(self):
        """Test that parsing an export reconstructs the same points in order."""
        store = MaskStore()
        draw(store, [(0.1, 0.2), (123.456789, 7.0), (3.3333333333, 99.999)])
        draw(store, SQUARE)
        draw(store, [(5, 5), (5, 5)])

        parsed = parse_json(to_json(store))

        assert [p.points for p in parsed] == [p.points for p in store.polygons]
        assert [p.stroke for p in parsed] == ["blue"] * 3
        assert all(p.closed for p in parsed)

    def test_parse_rejects_non_list(self):
        with pytest.raises(ValueError):
            parse_json('{"points": []}')

    def test_parse_rejects_missing_points(self):
        with pytest.raises(ValueError):
            parse_json('[{"color": "blue"}]')

    @pytest.mark.parametrize("document", [
        '[{"points": 5}]',
        '[{"points": "1,2,3,4"}]',
        '[{"points": [null, 1]}]',
        '[{"points": [1, 2, NaN, 4, 5, 6]}]',
        '[{"points": [1, 2, Infinity, 4, 5, 6]}]',
    ])
    def test_parse_rejects_bad_coordinates(self, document):
        """Test that malformed point lists raise ValueError."""
        with pytest.raises(ValueError):
            parse_json(document)

    def test_filename(self):
        assert json_filename(1700000000000) == "maskjson1700000000000.json"
        assert json_filename().startswith("maskjson")

    def test_artifact(self):
        store = MaskStore()
        draw(store, SQUARE)

        artifact = export_json_artifact(store, timestamp_ms=42)

        assert artifact.filename == "maskjson42.json"
        assert artifact.media_type == "application/json"
        assert json.loads(artifact.data.decode("utf-8"))[0]["color"] == "blue"


class TestToBinaryRaster:
    """Tests for raster export."""

    def test_square_png(self):
        """Test the square scenario rasterized on a 200x200 canvas."""
        store = MaskStore()
        draw(store, SQUARE)

        data = to_binary_raster(store, 200, 200)

        with Image.open(io.BytesIO(data)) as image:
            assert image.format == "PNG"
            assert image.size == (200, 200)
            pixels = np.array(image.convert("L"))
        assert pixels[50, 50] == 0  # black fill
        assert pixels[150, 150] == 255  # white background
        assert set(np.unique(pixels)) == {0, 255}

    def test_empty_produces_background(self):
        """Test that an empty mask still rasterizes to an all-white image."""
        data = to_binary_raster(MaskStore(), 64, 32)

        bitmap = png_to_bitmap(data)

        assert bitmap.shape == (32, 64)
        assert bitmap.sum() == 0

    def test_current_excluded(self):
        """Test that the polygon being drawn is not rasterized."""
        store = MaskStore()
        draw(store, SQUARE, close=False)

        assert png_to_bitmap(to_binary_raster(store, 200, 200)).sum() == 0

    def test_artifact(self):
        artifact = export_raster_artifact(MaskStore(), 10, 10)

        assert artifact.filename == RASTER_FILENAME == "binary_mask.png"
        assert artifact.media_type == "image/png"


class TestBitmapHelpers:
    """Tests for bitmap measurement and PNG helpers."""

    def test_png_round_trip(self):
        bitmap = np.zeros((10, 10), dtype=np.uint8)
        bitmap[3:7, 3:7] = 1

        np.testing.assert_array_equal(png_to_bitmap(bitmap_to_png(bitmap)), bitmap)

    def test_rejects_non_2d(self):
        with pytest.raises(ValueError):
            bitmap_to_png(np.zeros((4, 4, 3), dtype=np.uint8))

    def test_bbox_and_area(self):
        bitmap = np.zeros((100, 100), dtype=np.uint8)
        bitmap[20:50, 30:70] = 1

        assert bitmap_bbox(bitmap) == [30.0, 20.0, 70.0, 50.0]
        assert bitmap_area(bitmap) == 1200

    def test_bbox_empty(self):
        assert bitmap_bbox(np.zeros((5, 5), dtype=np.uint8)) == [0, 0, 0, 0]
