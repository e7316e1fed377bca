"""
maskedit - Polygon mask editing: geometry, mask store, interaction and export
"""

__version__ = "0.1.0"

from maskedit.models import Polygon, ToolMode, StageSize, BackgroundImage, ExportArtifact
from maskedit.errors import (
    MaskEditError, InvalidStateError, NothingToExportError,
    ImageDecodeError, UninitializedSurfaceError,
)
from maskedit.geometry import point_in_polygon, is_valid_polygon, rasterize
from maskedit.store import MaskStore
from maskedit.controller import InteractionController
from maskedit.export import to_json, parse_json, to_binary_raster
from maskedit.session import EditorSession

__all__ = [
    "Polygon", "ToolMode", "StageSize", "BackgroundImage", "ExportArtifact",
    "MaskEditError", "InvalidStateError", "NothingToExportError",
    "ImageDecodeError", "UninitializedSurfaceError",
    "point_in_polygon", "is_valid_polygon", "rasterize",
    "MaskStore",
    "InteractionController",
    "to_json", "parse_json", "to_binary_raster",
    "EditorSession",
]
