"""
EditorSession - one mask editing session over one stage.

The session owns the mask store, the interaction controller and a handle to
the rendering surface. Every mask operation requires the stage to be
initialized first.
"""

import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from maskedit.controller import InteractionController
from maskedit.errors import ImageDecodeError, UninitializedSurfaceError
from maskedit.export import export_json_artifact, export_raster_artifact
from maskedit.input import DEFAULT_CLOSE_KEY, dispatch, parse_event
from maskedit.models import (
    DEFAULT_FILL, DEFAULT_STROKE, BackgroundImage, ExportArtifact, Point,
    Polygon, StageSize, ToolMode,
)
from maskedit.store import MaskStore
from maskedit.surface import RenderSurface, SceneSurface, sync_surface

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Handles all editing operations for a single loaded image.
    """

    def __init__(
        self,
        stroke: str = DEFAULT_STROKE,
        fill: str = DEFAULT_FILL,
        close_key: str = DEFAULT_CLOSE_KEY,
        clear_on_image_change: bool = False,
    ):
        """
        Initialize a session. The stage is created later by initialize().

        Args:
            stroke: Stroke color for new polygons
            fill: Fill color for new polygons
            close_key: Key that finishes the current polygon
            clear_on_image_change: Clear the mask when the background image
                is replaced or removed
        """
        self.store = MaskStore(stroke=stroke, fill=fill)
        self.controller = InteractionController(self.store)
        self.close_key = close_key
        self.clear_on_image_change = clear_on_image_change
        self.stage: Optional[StageSize] = None
        self.surface: Optional[RenderSurface] = None
        self.image: Optional[BackgroundImage] = None

    @property
    def initialized(self) -> bool:
        return self.stage is not None and self.surface is not None

    def initialize(
        self, width: int, height: int, surface: Optional[RenderSurface] = None
    ) -> None:
        """
        Create the stage and attach a rendering surface.

        Args:
            width: Stage width in pixels
            height: Stage height in pixels
            surface: Surface to draw on (a SceneSurface if not provided)
        """
        self.stage = StageSize(width, height)
        self.surface = surface if surface is not None else SceneSurface()
        logger.info(f"Stage initialized at {width}x{height}")
        self._sync()

    def _require_surface(self, operation: str) -> None:
        if not self.initialized:
            logger.error(f"'{operation}' called before the stage was initialized")
            raise UninitializedSurfaceError(
                f"Cannot {operation}: stage is not initialized"
            )

    def _sync(self) -> None:
        sync_surface(self.store, self.surface)

    # ==================== Interaction ====================

    @property
    def mode(self) -> ToolMode:
        return self.controller.mode

    def click(self, point: Point) -> list[Polygon]:
        """Handle a primary click at a stage point."""
        self._require_surface("click")
        removed = self.controller.click(point)
        if removed:
            logger.info(f"Erased {len(removed)} polygon(s) at {point}")
        self._sync()
        return removed

    def finish_polygon(self) -> Optional[Polygon]:
        """Close the polygon being drawn, if any."""
        self._require_surface("close polygon")
        polygon = self.controller.finish_polygon()
        self._sync()
        return polygon

    def toggle_mode(self) -> ToolMode:
        self._require_surface("toggle mode")
        return self.controller.toggle_mode()

    def set_mode(self, mode: ToolMode) -> ToolMode:
        self._require_surface("set mode")
        return self.controller.set_mode(mode)

    def clear(self) -> None:
        """Remove every polygon, including the one being drawn."""
        self._require_surface("clear mask")
        self.controller.clear()
        self._sync()

    def handle_event(self, event: dict) -> bool:
        """
        Handle a raw input event.

        Args:
            event: Pointer or keyboard event payload

        Returns:
            True if the event mapped to an action, False if it was ignored
        """
        self._require_surface("handle event")
        action = parse_event(event, close_key=self.close_key)
        if action is None:
            return False
        dispatch(self.controller, action)
        self._sync()
        return True

    # ==================== Stage and background ====================

    def resize(self, width: int, height: int) -> None:
        """Resize the stage and refit the background image."""
        self._require_surface("resize stage")
        self.stage = StageSize(width, height)
        if self.image is not None:
            self.image.fit_to(self.stage)
        self._sync()

    def load_image(self, data: bytes) -> BackgroundImage:
        """
        Decode an image and use it as the stage background.

        On failure the current background is left unchanged.

        Args:
            data: Encoded image file contents

        Returns:
            The fitted background image

        Raises:
            ImageDecodeError: If the data is not a decodable image
        """
        self._require_surface("load image")
        if not data:
            raise ImageDecodeError("Please select an image file to upload")

        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                width, height = img.size
                image_format = img.format
        except (
            UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError,
        ) as e:
            logger.warning(f"Failed to decode image: {e}")
            raise ImageDecodeError(f"Failed to load image: {e}") from e

        self.image = BackgroundImage(
            width=width, height=height, format=image_format, data=data
        ).fit_to(self.stage)
        logger.info(
            f"Loaded {width}x{height} {image_format} image "
            f"(scale {self.image.scale:.3f})"
        )

        if self.clear_on_image_change:
            self.clear()
        return self.image

    def remove_image(self) -> None:
        """Remove the background image."""
        self._require_surface("remove image")
        self.image = None
        if self.clear_on_image_change:
            self.clear()

    # ==================== Export ====================

    def export_json(self, timestamp_ms: Optional[int] = None) -> ExportArtifact:
        """Export finalized polygons as a JSON artifact."""
        self._require_surface("export mask")
        artifact = export_json_artifact(self.store, timestamp_ms)
        logger.info(f"Exported {len(self.store)} polygon(s) to {artifact.filename}")
        return artifact

    def export_raster(self) -> ExportArtifact:
        """Export finalized polygons as a binary PNG the size of the stage."""
        self._require_surface("export mask")
        return export_raster_artifact(self.store, self.stage.width, self.stage.height)

    def state(self) -> dict:
        """Summary of the session for clients."""
        current = self.store.current
        image = None
        if self.image is not None:
            image = {
                "width": self.image.width,
                "height": self.image.height,
                "scale": self.image.scale,
                "x": self.image.offset_x,
                "y": self.image.offset_y,
            }
        return {
            "initialized": self.initialized,
            "width": self.stage.width if self.stage else None,
            "height": self.stage.height if self.stage else None,
            "mode": self.mode.value,
            "polygon_count": len(self.store),
            "current_points": len(current) if current is not None else None,
            "image": image,
        }
