"""
FastAPI application entry point
"""

import sys
import logging
import traceback
from pathlib import Path

# Add parent directory to path so we can import maskedit
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from maskedit.errors import UninitializedSurfaceError
from backend.config import CORS_ORIGINS, API_HOST, API_PORT
from backend.api import session, images, export

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Mask editor API starting...")
    yield
    # Shutdown
    logger.info("Mask editor API shutting down...")


app = FastAPI(
    title="Mask Editor API",
    description="Polygon mask editing with JSON and binary PNG export",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(UninitializedSurfaceError)
async def uninitialized_handler(request: Request, exc: UninitializedSurfaceError):
    """Operations before POST /api/session are rejected, not crashed."""
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log all unhandled exceptions with full traceback."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
    logger.error(traceback.format_exc())
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(session.router, prefix="/api/session", tags=["Session"])
app.include_router(images.router, prefix="/api/image", tags=["Image"])
app.include_router(export.router, prefix="/api/export", tags=["Export"])


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "mask-editor-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT)
