"""
Export API endpoints
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from maskedit.errors import NothingToExportError
from backend.api.session import get_session

router = APIRouter()


def artifact_to_response(artifact) -> Response:
    """Serve an ExportArtifact as a file download."""
    return Response(
        content=artifact.data,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


@router.get("/json")
async def export_json():
    """Download finalized polygons as a JSON mask."""
    session = get_session()
    try:
        artifact = session.export_json()
    except NothingToExportError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return artifact_to_response(artifact)


@router.get("/png")
async def export_png():
    """Download finalized polygons as a binary PNG mask."""
    session = get_session()
    artifact = session.export_raster()
    return artifact_to_response(artifact)
