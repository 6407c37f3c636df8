"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, Response

from kindrid.api.photos import router as photos_router
from kindrid.app_logging import configure_logging
from kindrid.containers import AppContainer
from kindrid.domain.errors import (
    InvalidStateError,
    KindridError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

_ERROR_STATUS: dict[type[KindridError], int] = {
    ValidationError: 422,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStateError: status.HTTP_409_CONFLICT,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    settings = container.settings
    static_root = Path(settings.static_dir)
    asset_roots = [Path(settings.public_dir), static_root]

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Server running on port %s (environment=%s), serving %s",
            settings.port,
            settings.environment,
            static_root.resolve(),
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(KindridError)
    async def kindrid_error(request: Request, exc: KindridError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid request",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Server error on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.get("/health")
    async def health() -> dict[str, str | int]:
        """Liveness probe with deployment details."""
        return {
            "status": "healthy",
            "message": "Kindrid app is running successfully",
            "timestamp": _timestamp(),
            "port": settings.port,
            "environment": settings.environment,
            "railway": "true" if settings.railway_environment else "false",
        }

    @app.get("/health.html", response_class=HTMLResponse)
    async def health_html() -> HTMLResponse:
        """Human-readable health page."""
        return HTMLResponse(
            _HEALTH_HTML.format(
                timestamp=_timestamp(),
                port=settings.port,
                environment=settings.environment,
                railway="Yes" if settings.railway_environment else "No",
            )
        )

    @app.get("/test")
    async def test_endpoint() -> dict[str, str | int]:
        """Readiness probe."""
        return {
            "message": "Server is running",
            "time": _timestamp(),
            "port": settings.port,
        }

    app.include_router(photos_router)

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa(full_path: str) -> Response:
        """Serve static assets, falling back to the SPA index document."""
        if full_path == "api" or full_path.startswith("api/"):
            return _not_found(full_path)
        for root in asset_roots:
            asset = _resolve_asset(root, full_path)
            if asset is not None:
                return FileResponse(asset)
        index = static_root / "index.html"
        if index.is_file():
            return FileResponse(index)
        return _not_found(full_path)

    return app


def _timestamp() -> str:
    return datetime.now(tz=UTC).isoformat()


def _resolve_asset(root: Path, relative: str) -> Path | None:
    """Return a file under `root`, refusing paths that escape it."""
    if not relative or not root.is_dir():
        return None
    base = root.resolve()
    candidate = (base / relative).resolve()
    if not candidate.is_relative_to(base) or not candidate.is_file():
        return None
    return candidate


def _not_found(full_path: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Route not found", "path": f"/{full_path}"},
    )


_HEALTH_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Health Check</title>
  </head>
  <body>
    <h1 style="color: green;">Healthy</h1>
    <p>Kindrid app is running successfully</p>
    <p>Timestamp: {timestamp}</p>
    <p>Port: {port}</p>
    <p>Environment: {environment}</p>
    <p>Railway: {railway}</p>
  </body>
</html>
"""
