"""
Background image API endpoints
"""

from fastapi import APIRouter, HTTPException, UploadFile, File
from fastapi.responses import Response
from pydantic import BaseModel
from typing import Optional

from maskedit.errors import ImageDecodeError
from backend.api.session import get_session
from backend.config import MAX_UPLOAD_BYTES

router = APIRouter()


class ImageResponse(BaseModel):
    width: int
    height: int
    format: Optional[str] = None
    scale: float
    x: float
    y: float
    display_width: float
    display_height: float


def image_to_response(image) -> ImageResponse:
    """Convert BackgroundImage to ImageResponse."""
    return ImageResponse(
        width=image.width,
        height=image.height,
        format=image.format,
        scale=image.scale,
        x=image.offset_x,
        y=image.offset_y,
        display_width=image.display_width,
        display_height=image.display_height,
    )


@router.post("", response_model=ImageResponse)
async def upload_image(file: UploadFile = File(...)):
    """Upload an image and use it as the stage background."""
    session = get_session()

    data = await file.read()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Image is too large ({len(data)} bytes, max {MAX_UPLOAD_BYTES})",
        )

    try:
        image = session.load_image(data)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return image_to_response(image)


@router.get("", response_model=Optional[ImageResponse])
async def get_image():
    """Get the background image metadata, if any."""
    session = get_session()
    if session.image is None:
        return None
    return image_to_response(session.image)


@router.get("/file")
async def get_image_file():
    """Serve the background image file."""
    session = get_session()
    if session.image is None:
        raise HTTPException(status_code=404, detail="No background image loaded")
    return Response(content=session.image.data, media_type=session.image.media_type)


@router.delete("")
async def remove_image():
    """Remove the background image."""
    session = get_session()
    session.remove_image()
    return {"status": "removed"}
