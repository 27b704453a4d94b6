"""Main FastAPI application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from structlog import get_logger

from .. import __version__
from ..infrastructure.config.config import get_settings
from ..infrastructure.logging import configure_logging
from .dependencies import close_database
from .middleware.logging import LoggingMiddleware
from .routes import health, submissions, webinars

logger = get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging(settings)
    logger.info("Application started", environment=settings.environment)

    yield

    await close_database()
    logger.info("Application stopped")


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(
        title="Yadnus Consultant Site API",
        description="Webinars with YouTube Live and Zoom streaming, plus site forms",
        version=__version__,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan,
    )

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Routes
    app.include_router(health.router, tags=["health"])
    app.include_router(webinars.router, prefix="/api/webinars", tags=["webinars"])
    app.include_router(
        webinars.admin_router, prefix="/api/admin/webinars", tags=["webinars"]
    )
    app.include_router(submissions.router, prefix="/api", tags=["submissions"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Yadnus Consultant Site API",
            "version": __version__,
            "docs": "/docs" if settings.environment != "production" else None,
        }

    return app


app = create_app()
