# ============================================================================
# src/prescription_analysis/api/app.py
# ============================================================================
"""
FastAPI application factory.

Routes are mounted under /api and, for older front-end builds, without the
prefix as well.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import chatbot, prescriptions
from ..config.logging_config import LoggingSettings
from ..config.server_config import ServerSettings
from ..core.app_context import ApplicationContext
from ..core.logging import configure_from_settings

logger = logging.getLogger(__name__)


def create_app(
    context: Optional[ApplicationContext] = None,
    server_settings: Optional[ServerSettings] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the API.

    Args:
        context: Pre-built application context; built at startup when omitted
        server_settings: Override server settings (CORS, environment)
        configure_logging: Apply LoggingSettings to the root logger at startup
    """
    server = server_settings or ServerSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logging:
            configure_from_settings(LoggingSettings())
        if app.state.context is None:
            app.state.context = ApplicationContext.create()
        logger.info(f"Prescription analysis API started ({server.ENVIRONMENT})")
        try:
            yield
        finally:
            await app.state.context.close()

    app = FastAPI(
        title="Prescription Analysis API",
        description="Medication extraction, safety analysis and health assistant",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=server.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
        max_age=86400,
    )

    for prefix in ("/api", ""):
        app.include_router(prescriptions.router, prefix=prefix)
        app.include_router(chatbot.router, prefix=prefix)

    @app.get("/health")
    async def health():
        return {"message": "Server is running"}

    @app.get("/api/health")
    async def api_health():
        """Health check for monitoring."""
        return {
            "status": "healthy",
            "message": "API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        message = "Something went wrong on the server" if server.is_production else str(exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Server error", "message": message},
        )

    return app
