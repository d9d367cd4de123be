"""
Health check endpoints.

Provides liveness and readiness probes. Readiness checks database
connectivity and that the image directory accepts uploads.
"""

import os
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db.database import get_session
from cardbinder.services.image_store import ImageStore, get_image_store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    image_storage: str | None = None


def _image_dir_writable(root: Path) -> bool:
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False
    return os.access(root, os.W_OK)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    store: Annotated[ImageStore, Depends(get_image_store)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the database is unreachable or the image directory is
    not writable.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except (SQLAlchemyError, OSError):
        database = "disconnected"

    image_storage = "writable" if _image_dir_writable(store.root) else "unavailable"

    if database != "connected" or image_storage != "writable":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database=database, image_storage=image_storage)

    return HealthResponse(status="ready", database=database, image_storage=image_storage)
