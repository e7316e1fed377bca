"""
Exceptions raised by the mask editor.

None of these are fatal: callers recover at the interaction or export
boundary and report the condition to the user.
"""


class MaskEditError(Exception):
    """Base exception for mask editing failures."""

    pass


class InvalidStateError(MaskEditError):
    """Polygon operation not allowed in the current drawing state."""

    pass


class NothingToExportError(MaskEditError):
    """Vector export requested with no finalized polygons."""

    pass


class ImageDecodeError(MaskEditError):
    """Selected file could not be decoded as an image."""

    pass


class UninitializedSurfaceError(MaskEditError):
    """Mask operation invoked before the stage and surface exist."""

    pass
