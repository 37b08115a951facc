"""Visions Gallery - FastAPI Application.

This module defines the FastAPI application factory, the four image CRUD
routes, and the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application follows a stateless REST pattern:

- **Persistence** is an :class:`~visions_gallery.core.image_store.ImageStore`
  constructed once at startup and kept on ``app.state.store``.  Tests pass
  their own (usually in-memory) store to :func:`create_app`.
- **Validation** is limited to requiring a non-empty ``url`` on create.
- **Errors** from the store become a 500 with a fixed message per operation;
  details are logged server-side only.

Admin mode is purely a client-side display flag: the mutating routes below
perform no authentication.

Endpoints
---------
========  ========================  ====================================
Method    Path                      Purpose
========  ========================  ====================================
GET       ``/health``               Liveness probe
GET       ``/api/images``           All images, newest first
POST      ``/api/images``           Create an image record
GET       ``/api/images/{id}``      Single image record
PUT       ``/api/images/{id}``      Replace url/title/description
DELETE    ``/api/images/{id}``      Delete an image record
========  ========================  ====================================

Usage
-----
CLI (installed entry point)::

    visions

Direct invocation::

    python -m visions_gallery.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from visions_gallery import __version__
from visions_gallery.api.models import ImagePayload, ImageResponse, SuccessResponse
from visions_gallery.core.config import GalleryConfig, config
from visions_gallery.core.image_store import ImageStore, StoreError

logger = logging.getLogger(__name__)


def get_store(request: Request) -> ImageStore:
    """Return the store bound to the running application."""
    return request.app.state.store


def _store_failure(message: str) -> HTTPException:
    """Log the active store exception and build a generic 500 error."""
    logger.exception(message)
    return HTTPException(status_code=500, detail=message)


def create_app(store: ImageStore | None = None, settings: GalleryConfig | None = None) -> FastAPI:
    """Build the gallery API application.

    Args:
        store: Store to serve.  When omitted, one is opened at startup from
            ``settings.database_path``.
        settings: Configuration to use.  Defaults to the global ``config``.

    Returns:
        The configured FastAPI application.
    """
    if settings is None:
        settings = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Open the store on startup (unless one was injected)."""
        # --- Startup -------------------------------------------------------
        owns_store = store is None
        if owns_store:
            app.state.store = ImageStore(settings.database_path)
        else:
            app.state.store = store
            app.state.store.initialize()
        logger.info(f"Gallery API ready (store: {app.state.store.db_path}).")

        yield  # Application runs here.

        # --- Shutdown ------------------------------------------------------
        if owns_store:
            app.state.store.close()
        logger.info("Gallery API stopped.")

    app = FastAPI(
        title="Visions Gallery",
        description="CRUD API for a gallery of externally hosted images.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Routes can run before lifespan under some test clients.
    if store is not None:
        app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed bodies and path ids as 400."""
        logger.debug(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Invalid request"})

    # -----------------------------------------------------------------------
    # Routes.
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health() -> dict:
        """Liveness probe."""
        return {"status": "ok", "version": __version__}

    @app.get("/api/images", response_model=list[ImageResponse])
    def list_images(request: Request) -> list[ImageResponse]:
        """Return every image record, newest first.

        Raises:
            HTTPException: 500 if the store cannot be read.
        """
        try:
            records = get_store(request).list()
        except StoreError:
            raise _store_failure("Failed to fetch images")
        return [ImageResponse.model_validate(record) for record in records]

    @app.post("/api/images", response_model=ImageResponse)
    def create_image(payload: ImagePayload, request: Request) -> ImageResponse:
        """Create an image record.

        Args:
            payload: Validated :class:`ImagePayload`.

        Returns:
            The stored record with its assigned ``id`` and ``created_at``.

        Raises:
            HTTPException: 400 if ``url`` is missing or empty, 500 if the
                store fails.
        """
        if not payload.url:
            raise HTTPException(status_code=400, detail="URL is required")

        try:
            record = get_store(request).insert(
                payload.url, payload.title, payload.description
            )
        except StoreError:
            raise _store_failure("Failed to add image")
        return ImageResponse.model_validate(record)

    @app.get("/api/images/{image_id}", response_model=ImageResponse)
    def get_image(image_id: int, request: Request) -> ImageResponse:
        """Return a single image record.

        Raises:
            HTTPException: 404 if no record has this id, 500 on store failure.
        """
        try:
            record = get_store(request).get(image_id)
        except StoreError:
            raise _store_failure("Failed to fetch image")
        if record is None:
            raise HTTPException(status_code=404, detail="Image not found")
        return ImageResponse.model_validate(record)

    @app.put("/api/images/{image_id}", response_model=SuccessResponse)
    def update_image(image_id: int, payload: ImagePayload, request: Request) -> SuccessResponse:
        """Replace the url, title, and description of an image record.

        An unknown id is reported as success unless ``strict_not_found`` is
        enabled.

        Raises:
            HTTPException: 404 (strict mode only) or 500 on store failure.
        """
        try:
            matched = get_store(request).update(
                image_id, payload.url, payload.title, payload.description
            )
        except StoreError:
            raise _store_failure("Failed to update image")
        if not matched and settings.strict_not_found:
            raise HTTPException(status_code=404, detail="Image not found")
        return SuccessResponse()

    @app.delete("/api/images/{image_id}", response_model=SuccessResponse)
    def delete_image(image_id: int, request: Request) -> SuccessResponse:
        """Delete an image record.

        An unknown id is reported as success unless ``strict_not_found`` is
        enabled.

        Raises:
            HTTPException: 404 (strict mode only) or 500 on store failure.
        """
        try:
            removed = get_store(request).delete(image_id)
        except StoreError:
            raise _store_failure("Failed to delete image")
        if not removed and settings.strict_not_found:
            raise HTTPException(status_code=404, detail="Image not found")
        return SuccessResponse()

    return app


# ---------------------------------------------------------------------------
# Module-level application for ``uvicorn visions_gallery.api.main:app``.
# ---------------------------------------------------------------------------
app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~visions_gallery.core.config.config`
    (``VISIONS_SERVER_HOST`` and ``VISIONS_SERVER_PORT``).  Defaults to
    ``0.0.0.0:3000``.

    This function is registered as the ``visions`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting Visions Gallery API on {config.server_host}:{config.server_port}")

    uvicorn.run(
        "visions_gallery.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
