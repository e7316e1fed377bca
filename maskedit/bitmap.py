"""
Bitmap utilities - PNG encoding/decoding and filled-region measurements.
"""

import io

import numpy as np
from PIL import Image

# PNG pixel values for the two tones
BACKGROUND_VALUE = 255  # white
FILL_VALUE = 0  # black


def bitmap_to_png(bitmap: np.ndarray) -> bytes:
    """
    Encode a binary bitmap as a two-tone grayscale PNG.

    Args:
        bitmap: Binary bitmap of shape (H, W), nonzero = filled

    Returns:
        PNG bytes with a white background and black fill
    """
    if bitmap.ndim != 2:
        raise ValueError(f"Bitmap must be 2D, got shape {bitmap.shape}")

    pixels = np.where(bitmap > 0, FILL_VALUE, BACKGROUND_VALUE).astype(np.uint8)
    image = Image.fromarray(pixels)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def png_to_bitmap(data: bytes) -> np.ndarray:
    """
    Decode a two-tone PNG back into a binary bitmap.

    Dark pixels (below mid-gray) are treated as filled.

    Args:
        data: PNG bytes

    Returns:
        Binary bitmap of shape (H, W) with dtype uint8
    """
    with Image.open(io.BytesIO(data)) as image:
        pixels = np.array(image.convert("L"))
    return (pixels < 128).astype(np.uint8)


def bitmap_bbox(bitmap: np.ndarray) -> list[float]:
    """
    Get the bounding box of the filled region.

    Args:
        bitmap: Binary bitmap of shape (H, W)

    Returns:
        Bounding box [x1, y1, x2, y2] in pixel coordinates
    """
    rows = np.any(bitmap, axis=1)
    cols = np.any(bitmap, axis=0)

    if not rows.any():
        return [0, 0, 0, 0]

    y1, y2 = np.where(rows)[0][[0, -1]]
    x1, x2 = np.where(cols)[0][[0, -1]]

    return [float(x1), float(y1), float(x2 + 1), float(y2 + 1)]


def bitmap_area(bitmap: np.ndarray) -> int:
    """Get the number of filled pixels of a bitmap."""
    return int(np.sum(bitmap > 0))
