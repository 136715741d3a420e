# Operational and page routes
# Handles the health check, the file listing API and the landing page assets

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from pathlib import Path

import psutil
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from ..state import ServerContext, python_version
from .dependencies import get_context
from .models import FilesResponse, HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def process_uptime() -> float:
    """Seconds since this process started."""
    created = psutil.Process().create_time()
    return max(0.0, time.time() - created)


def _public_asset(context: ServerContext, name: str) -> FileResponse:
    asset = Path(context.settings.public_dir) / name
    if not asset.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return FileResponse(asset)


@router.get("/health", response_model=HealthResponse, tags=["Operations"])
def health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        uptime=process_uptime(),
        timestamp=datetime.now(timezone.utc).isoformat(),
        pythonVersion=python_version(),
    )


@router.get("/api/files", response_model=FilesResponse, tags=["Files"])
def list_files(context: ServerContext = Depends(get_context)) -> FilesResponse:
    return FilesResponse(
        files=context.available_files(),
        pythonVersion=python_version(),
        port=context.settings.port,
        hasTunnel=context.has_tunnel,
        publicUrl=context.tunnel_url,
    )


@router.get("/", include_in_schema=False)
def index(context: ServerContext = Depends(get_context)) -> FileResponse:
    return _public_asset(context, "index.html")


@router.get("/style.css", include_in_schema=False)
def stylesheet(context: ServerContext = Depends(get_context)) -> FileResponse:
    return _public_asset(context, "style.css")
