"""
Interaction controller: maps user actions onto mask store operations.
"""

import logging
from typing import Optional

from maskedit.errors import InvalidStateError
from maskedit.models import Point, Polygon, ToolMode
from maskedit.store import MaskStore

logger = logging.getLogger(__name__)


class InteractionController:
    """
    Holds the current tool mode and interprets clicks with it.

    Switching modes never touches the polygon being drawn. Switching to
    erase mid-draw leaves it open until the user returns to draw mode and
    closes it.
    """

    def __init__(self, store: MaskStore, mode: ToolMode = ToolMode.DRAW):
        self.store = store
        self._mode = mode

    @property
    def mode(self) -> ToolMode:
        return self._mode

    def set_mode(self, mode: ToolMode) -> ToolMode:
        self._mode = ToolMode(mode)
        return self._mode

    def toggle_mode(self) -> ToolMode:
        """Flip between draw and erase."""
        if self._mode == ToolMode.DRAW:
            self._mode = ToolMode.ERASE
        else:
            self._mode = ToolMode.DRAW
        return self._mode

    def click(self, point: Point) -> list[Polygon]:
        """
        Handle a primary click at a stage point.

        In draw mode this starts a polygon or extends the current one. In
        erase mode it removes every polygon under the point.

        Returns:
            Polygons removed by the click (always empty in draw mode)
        """
        try:
            if self._mode == ToolMode.ERASE:
                return self.store.remove_at(point)

            if self.store.has_current:
                self.store.append_point(point)
            else:
                self.store.start_polygon(point)
        except InvalidStateError as e:
            logger.warning(f"Ignoring click at {point}: {e}")
        return []

    def finish_polygon(self) -> Optional[Polygon]:
        """Close the current polygon. Does nothing when none is open."""
        if not self.store.has_current:
            return None
        try:
            return self.store.close_current()
        except InvalidStateError as e:
            logger.warning(f"Ignoring close: {e}")
            return None

    def clear(self) -> None:
        self.store.clear_all()
