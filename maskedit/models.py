"""
Core data models for the mask editor.

Dataclasses representing polygons, the stage, the background image and
export artifacts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

Point = tuple[float, float]

DEFAULT_STROKE = "blue"
DEFAULT_FILL = "rgba(0, 0, 255, 0.3)"


class ToolMode(str, Enum):
    """Active interaction behavior for primary clicks."""
    DRAW = "draw"
    ERASE = "erase"


@dataclass(frozen=True)
class Polygon:
    """
    A polygon snapshot.

    Finalized polygons are closed and never change. Open snapshots are
    handed out for the polygon currently being drawn.
    """
    points: tuple[Point, ...]
    closed: bool = True
    stroke: str = DEFAULT_STROKE
    fill: str = DEFAULT_FILL

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class StageSize:
    """Pixel dimensions of the drawing stage."""
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Stage dimensions must be positive, got {self.width}x{self.height}"
            )


@dataclass
class BackgroundImage:
    """A decoded background image fitted onto the stage."""
    width: int  # Natural image width
    height: int  # Natural image height
    format: Optional[str] = None  # Pillow format name, e.g. "PNG"
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    data: bytes = field(default=b"", repr=False)

    def fit_to(self, stage: StageSize) -> "BackgroundImage":
        """
        Scale the image to fit inside the stage, centered.

        Args:
            stage: Stage to fit into

        Returns:
            This image with scale and offset updated
        """
        self.scale = min(stage.width / self.width, stage.height / self.height)
        self.offset_x = (stage.width - self.width * self.scale) / 2
        self.offset_y = (stage.height - self.height * self.scale) / 2
        return self

    @property
    def display_width(self) -> float:
        return self.width * self.scale

    @property
    def display_height(self) -> float:
        return self.height * self.scale

    @property
    def media_type(self) -> str:
        if self.format:
            return f"image/{self.format.lower()}"
        return "application/octet-stream"


@dataclass
class ExportArtifact:
    """A downloadable export result."""
    filename: str
    media_type: str
    data: bytes = field(repr=False)
