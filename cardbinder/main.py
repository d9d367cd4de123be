import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from cardbinder.api import (
    cards_router,
    dashboard_router,
    filters_router,
    health_router,
)
from cardbinder.config import settings
from cardbinder.db.database import init_db
from cardbinder.models.failure import KnownError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    Path(settings.image_dir).mkdir(parents=True, exist_ok=True)
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("cardbinder"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(dashboard_router)
app.include_router(filters_router)
app.include_router(health_router)

# Uploaded photos are served from disk unless published from another host
if settings.image_base_url.startswith("/"):
    app.mount(
        settings.image_base_url,
        StaticFiles(directory=settings.image_dir, check_dir=False),
        name="images",
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a KnownError as its FailureDetail with the error's status code."""
    if exc.status_code >= 500:
        logger.error("%s: %s (%s)", exc.kind.value, exc.message, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )
