"""Main application entrypoint for Moment Vault."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from momentvault.api.v1 import routes_health
from momentvault.api.v1.routes_upload import router as upload_router
from momentvault.core.config import settings
from momentvault.core.logging import setup_logging
from momentvault.upload.exceptions import MomentVaultError
from momentvault.upload.service import shutdown_uploader

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await shutdown_uploader()


async def handle_upload_error(request: Request, exc: MomentVaultError) -> JSONResponse:
    """Map pipeline errors raised outside route bodies (e.g. dependencies)."""
    logger.error(f"Request failed: {exc}", extra={"path": request.url.path, "error_type": type(exc).__name__})
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    setup_logging()

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )

    app.add_exception_handler(MomentVaultError, handle_upload_error)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(upload_router)

    return app


# Export app instance for ASGI servers
app = create_app()
