"""
Mask export.

Vector export writes finalized polygons as a JSON array:
    [{"points": [x1, y1, x2, y2, ...], "color": "blue", "fill": "..."}, ...]

Raster export writes a two-tone PNG (white background, black fill). Only
finalized polygons are exported; the polygon being drawn is left out.
An empty mask cannot be exported as JSON but still rasterizes to an
all-background image.
"""

import json
import logging
import time
from typing import Optional

from maskedit.bitmap import bitmap_area, bitmap_to_png
from maskedit.errors import NothingToExportError
from maskedit.geometry import flat_to_points, points_to_flat, rasterize
from maskedit.models import DEFAULT_FILL, DEFAULT_STROKE, ExportArtifact, Polygon
from maskedit.store import MaskStore

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
PNG_MEDIA_TYPE = "image/png"
RASTER_FILENAME = "binary_mask.png"


def json_filename(timestamp_ms: Optional[int] = None) -> str:
    """Filename for a vector export, e.g. maskjson1700000000000.json"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"maskjson{timestamp_ms}.json"


def to_json(store: MaskStore) -> str:
    """
    Serialize finalized polygons to JSON.

    Args:
        store: Mask store to read

    Returns:
        JSON document (array of polygon objects)

    Raises:
        NothingToExportError: If there are no finalized polygons
    """
    polygons = store.polygons
    if not polygons:
        raise NothingToExportError("Nothing to export")

    mask_data = [
        {
            "points": points_to_flat(polygon.points),
            "color": polygon.stroke,
            "fill": polygon.fill,
        }
        for polygon in polygons
    ]
    return json.dumps(mask_data, indent=2)


def parse_json(text: str) -> list[Polygon]:
    """
    Parse a vector export back into closed polygons.

    Args:
        text: JSON document produced by to_json

    Returns:
        Polygons in document order

    Raises:
        ValueError: If the document is not a list of polygon objects
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Mask JSON must be an array of polygons")

    polygons = []
    for i, item in enumerate(data):
        if not isinstance(item, dict) or "points" not in item:
            raise ValueError(f"Polygon {i} has no points")
        polygons.append(Polygon(
            points=tuple(flat_to_points(item["points"])),
            closed=True,
            stroke=item.get("color", DEFAULT_STROKE),
            fill=item.get("fill", DEFAULT_FILL),
        ))
    return polygons


def to_binary_raster(store: MaskStore, width: int, height: int) -> bytes:
    """
    Rasterize finalized polygons into a binary PNG.

    Args:
        store: Mask store to read
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        PNG bytes
    """
    bitmap = rasterize(store.polygons, width, height)
    logger.info(
        f"Rasterized {len(store)} polygon(s) into {width}x{height} bitmap "
        f"({bitmap_area(bitmap)} filled pixels)"
    )
    return bitmap_to_png(bitmap)


def export_json_artifact(
    store: MaskStore, timestamp_ms: Optional[int] = None
) -> ExportArtifact:
    """Vector export wrapped as a downloadable artifact."""
    text = to_json(store)
    return ExportArtifact(
        filename=json_filename(timestamp_ms),
        media_type=JSON_MEDIA_TYPE,
        data=text.encode("utf-8"),
    )


def export_raster_artifact(store: MaskStore, width: int, height: int) -> ExportArtifact:
    """Raster export wrapped as a downloadable artifact."""
    return ExportArtifact(
        filename=RASTER_FILENAME,
        media_type=PNG_MEDIA_TYPE,
        data=to_binary_raster(store, width, height),
    )
