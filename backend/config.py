"""
Backend configuration
"""

import os

# API settings
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# CORS origins (frontend URL)
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS", "http://localhost:4200,http://127.0.0.1:4200"
).split(",")

# Default stage size when the client does not send one
STAGE_WIDTH = int(os.getenv("STAGE_WIDTH", "1280"))
STAGE_HEIGHT = int(os.getenv("STAGE_HEIGHT", "720"))

# Polygon display colors
STROKE_COLOR = os.getenv("STROKE_COLOR", "blue")
FILL_COLOR = os.getenv("FILL_COLOR", "rgba(0, 0, 255, 0.3)")

# Key that finishes the polygon being drawn
CLOSE_KEY = os.getenv("CLOSE_KEY", "n")

# Clear the mask when the background image is replaced or removed
CLEAR_ON_IMAGE_CHANGE = os.getenv("CLEAR_ON_IMAGE_CHANGE", "false").lower() in (
    "1", "true", "yes",
)

# Largest accepted image upload, in bytes
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))
