"""
Input adapter - normalizes raw pointer and keyboard events into editor
actions.

Events arrive as plain dicts, as a browser client would post them:
    {"type": "click", "x": 10.0, "y": 20.0, "button": 0}
    {"type": "keydown", "key": "n"}
    {"type": "toggle_mode"}
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from maskedit.controller import InteractionController
from maskedit.models import Point

DEFAULT_CLOSE_KEY = "n"

POINTER_EVENTS = {"click", "pointerdown", "tap"}
PRIMARY_BUTTON = 0


@dataclass(frozen=True)
class ClickAction:
    point: Point


@dataclass(frozen=True)
class CloseAction:
    pass


@dataclass(frozen=True)
class ToggleModeAction:
    pass


@dataclass(frozen=True)
class ClearAction:
    pass


Action = Union[ClickAction, CloseAction, ToggleModeAction, ClearAction]


def parse_event(event: dict, close_key: str = DEFAULT_CLOSE_KEY) -> Optional[Action]:
    """
    Translate a raw event payload into an action.

    Args:
        event: Event dict with at least a "type" entry
        close_key: Key that finishes the current polygon

    Returns:
        The matching action, or None for events the editor ignores

    Raises:
        ValueError: If a pointer event has missing or non-numeric coordinates
    """
    event_type = str(event.get("type", "")).lower()

    if event_type in POINTER_EVENTS:
        if event.get("button", PRIMARY_BUTTON) != PRIMARY_BUTTON:
            return None
        try:
            point = (float(event["x"]), float(event["y"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid pointer coordinates in event: {event}") from e
        if not all(math.isfinite(v) for v in point):
            raise ValueError(f"Pointer coordinates must be finite: {event}")
        return ClickAction(point=point)

    if event_type == "keydown":
        if event.get("key") == close_key:
            return CloseAction()
        return None

    if event_type == "close":
        return CloseAction()
    if event_type == "toggle_mode":
        return ToggleModeAction()
    if event_type == "clear":
        return ClearAction()

    return None


def dispatch(controller: InteractionController, action: Action) -> None:
    """Apply an action to the controller."""
    if isinstance(action, ClickAction):
        controller.click(action.point)
    elif isinstance(action, CloseAction):
        controller.finish_polygon()
    elif isinstance(action, ToggleModeAction):
        controller.toggle_mode()
    elif isinstance(action, ClearAction):
        controller.clear()
    else:
        raise TypeError(f"Unknown action: {action!r}")
