"""
Application factory - builds FastAPI app with all middleware and routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from printhelper import __version__
from printhelper.config import Settings, get_settings, init_settings
from printhelper.modules.devices.router import router as printers_router
from printhelper.modules.health.router import router as health_router
from printhelper.modules.jobs.router import router as jobs_router
from printhelper.modules.jobs.service import get_job_service, reset_job_service
from printhelper.modules.render.router import router as render_router
from printhelper.shared.errors import PrintHelperError
from printhelper.shared.ids import generate_request_id
from printhelper.shared.logging import (
    clear_request_context,
    get_logger,
    get_request_context,
    set_request_context,
    setup_logging,
)
from printhelper.shared.types import RequestContext

logger = get_logger(__name__)

ENDPOINTS = {
    "POST /print": "Render the receipt and print it",
    "POST /download": "Render the receipt and download the PDF",
    "POST /render/pdf": "Render custom HTML to PDF",
    "GET /printers": "List installed printers",
    "GET /status": "Check helper, printers and readiness",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()

    setup_logging(settings.log_level)
    logger.info("Starting PrintHelper...")
    logger.info(f"Scratch dir: {settings.get_scratch_dir()}")
    if not settings.printing_enabled:
        logger.info("Printing disabled: PDFs are generated but not printed")

    yield

    logger.info("Shutting down PrintHelper...")
    await get_job_service().shutdown()
    reset_job_service()
    logger.info("PrintHelper stopped")


def build_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    else:
        init_settings(settings)

    app = FastAPI(
        title="PrintHelper",
        description="Receipt rendering and local printer delivery",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and tracing."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID", generate_request_id()),
            actor=request.headers.get("X-Actor", "system"),
        )
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    @app.exception_handler(PrintHelperError)
    async def printhelper_error_handler(
        request: Request, exc: PrintHelperError
    ) -> JSONResponse:
        """Handle PrintHelperError with consistent JSON response."""
        ctx = get_request_context()
        return JSONResponse(
            status_code=exc.http_status,
            content={
                "success": False,
                "message": exc.message,
                "error": str(exc.details.get("cause", exc.message)),
                "code": exc.code,
                "job_id": exc.job_id,
                "request_id": ctx.request_id if ctx else None,
            },
        )

    app.include_router(health_router, tags=["health"])
    app.include_router(printers_router)
    app.include_router(jobs_router)
    app.include_router(render_router)

    @app.get("/")
    async def root() -> dict[str, Any]:
        return {
            "service": "PrintHelper",
            "version": __version__,
            "printing_enabled": settings.printing_enabled,
            "endpoints": ENDPOINTS,
        }

    return app
