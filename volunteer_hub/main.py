"""
Volunteer Hub API Server

Entry point for the FastAPI application.
"""

import structlog
import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from volunteer_hub import __version__
from volunteer_hub.api import router as api_router
from volunteer_hub.core.config import get_settings
from volunteer_hub.core.database import engine, get_session, init_db
from volunteer_hub.core.errors import register_exception_handlers
from volunteer_hub.core.logging import configure_logging
from volunteer_hub.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

settings = get_settings()
log = structlog.get_logger()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Volunteer Hub",
        description="Matches volunteers to companies through an apply / approve workflow.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Middleware (order matters, outermost last)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(api_router)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check(session: AsyncSession = Depends(get_session)):
        """Readiness check endpoint: the database must answer."""
        await session.execute(text("SELECT 1"))
        return {"status": "ready"}

    @app.on_event("startup")
    async def on_startup():
        log.info("volunteer_hub.starting", version=__version__)
        if settings.auto_create_tables:
            await init_db()

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("volunteer_hub.shutting_down")
        await engine.dispose()

    return app


app = create_app()


def run() -> None:
    """CLI entry point: serve the API with uvicorn."""
    uvicorn.run(
        "volunteer_hub.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
