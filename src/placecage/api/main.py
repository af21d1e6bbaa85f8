"""Placecage image server: FastAPI application.

This module defines the FastAPI ``app`` instance, the image routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Path binding** is done by FastAPI: ``subject`` and ``kind`` are bound to
  the :class:`~placecage.core.catalog.Subject` and
  :class:`~placecage.core.catalog.ImageKind` enums, ``width`` and ``height``
  to non-negative integers. Anything else is rejected with ``422`` before the
  pipeline runs.
- **Image generation** is performed by
  :class:`~placecage.core.pipeline.ImagePipeline`, created once at startup and
  stored on ``app.state``. Each call runs in the thread pool because
  decoding, resizing, and encoding are blocking.
- **File serving** uses ``FileResponse`` on the generated JPEG.

Endpoints
---------
========  ======================================  ===============================
Method    Path                                    Purpose
========  ======================================  ===============================
GET       ``/api/catalog``                        Supported subjects and kinds
GET       ``/{subject}/{kind}/{width}/{height}``  Image for an explicit kind
GET       ``/{subject}/{width}/{height}``         Image with the default kind
GET       ``/{width}/{height}``                   Image with default subject/kind
========  ======================================  ===============================

Error Mapping
-------------
=============================  ======
Pipeline error                 Status
=============================  ======
InvalidInputError              400
DecodeError                    500
EncodeError                    500
UnsupportedOperationError      500
=============================  ======

Usage
-----
CLI (installed entry point)::

    placecage

Direct invocation::

    python -m placecage.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Path, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from placecage import __version__
from placecage.api.models import CatalogEntryResponse, CatalogResponse
from placecage.core.catalog import (
    DEFAULT_KIND,
    DEFAULT_SUBJECT,
    ImageKind,
    Subject,
    supported_entries,
)
from placecage.core.config import config
from placecage.core.errors import PlacecageError
from placecage.core.pipeline import MAX_DIMENSION_SUM, ImagePipeline

logger = logging.getLogger(__name__)

JPEG_MEDIA_TYPE = "image/jpeg"


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the image pipeline on startup.

    The pipeline captures ``config.images_dir`` once, so later changes to the
    process working directory do not move the cache. The catalog source tree
    is checked and missing photos are logged; the server still starts, and
    requests that select a missing photo fail with a decode error.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    pipeline = ImagePipeline(config)
    app.state.pipeline = pipeline
    logger.info(f"ImagePipeline initialised (images_dir={config.images_dir}).")

    missing = pipeline.check_catalog()
    if missing:
        logger.warning(f"{len(missing)} catalog source images are missing.")

    yield


app = FastAPI(
    title="Placecage",
    description="Deterministic placeholder photos resized to any size.",
    version=__version__,
    lifespan=lifespan,
)


def get_pipeline(request: Request) -> ImagePipeline:
    """Return the pipeline created by :func:`lifespan`."""
    return request.app.state.pipeline


async def _serve_image(
    pipeline: ImagePipeline,
    width: int,
    height: int,
    subject: Subject | None = None,
    kind: ImageKind | None = None,
) -> FileResponse:
    """Run the pipeline off the event loop and stream the result.

    Raises:
        HTTPException: With the status of the pipeline error category.
    """
    try:
        output_path = await run_in_threadpool(pipeline.get_image, width, height, subject, kind)
    except PlacecageError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"error": e.category, "message": str(e)},
        ) from e
    return FileResponse(output_path, media_type=JPEG_MEDIA_TYPE)


# ---------------------------------------------------------------------------
# Routes.
#
# ``/api/catalog`` must be registered before ``/{width}/{height}``, which
# would otherwise capture it and fail integer binding.
# ---------------------------------------------------------------------------


@app.get("/api/catalog", response_model=CatalogResponse)
async def get_catalog() -> CatalogResponse:
    """List the supported subject/kind pairs and request defaults."""
    return CatalogResponse(
        version=__version__,
        default_subject=DEFAULT_SUBJECT,
        default_kind=DEFAULT_KIND,
        max_dimension_sum=MAX_DIMENSION_SUM,
        entries=[CatalogEntryResponse.from_entry(entry) for entry in supported_entries()],
    )


@app.get("/{subject}/{kind}/{width}/{height}", response_class=FileResponse)
async def get_image(
    subject: Subject,
    kind: ImageKind,
    width: int = Path(..., ge=0),
    height: int = Path(..., ge=0),
    pipeline: ImagePipeline = Depends(get_pipeline),
) -> FileResponse:
    """Serve a photo of ``subject`` in style ``kind`` at ``width`` x ``height``."""
    return await _serve_image(pipeline, width, height, subject, kind)


@app.get("/{subject}/{width}/{height}", response_class=FileResponse)
async def get_default_kind_image(
    subject: Subject,
    width: int = Path(..., ge=0),
    height: int = Path(..., ge=0),
    pipeline: ImagePipeline = Depends(get_pipeline),
) -> FileResponse:
    """Serve a photo of ``subject`` with the default kind."""
    return await _serve_image(pipeline, width, height, subject)


@app.get("/{width}/{height}", response_class=FileResponse)
async def get_default_image(
    width: int = Path(..., ge=0),
    height: int = Path(..., ge=0),
    pipeline: ImagePipeline = Depends(get_pipeline),
) -> FileResponse:
    """Serve a photo with the default subject and kind."""
    return await _serve_image(pipeline, width, height)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port, and log level from :data:`~placecage.core.config.config`
    (``PLACECAGE_SERVER_HOST``, ``PLACECAGE_SERVER_PORT``,
    ``PLACECAGE_LOG_LEVEL``). Defaults to ``127.0.0.1:8080``.

    This function is registered as the ``placecage`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting Placecage {__version__} on {config.server_host}:{config.server_port}")

    uvicorn.run(
        "placecage.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
