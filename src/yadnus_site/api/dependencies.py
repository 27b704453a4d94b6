"""FastAPI dependency injection."""

import secrets
from typing import Annotated, AsyncGenerator, Optional
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..application.services.streaming_service import StreamingService
from ..application.services.submission_service import SubmissionService
from ..application.services.webinar_streaming import WebinarStreamingService
from ..infrastructure.config.config import Settings, get_settings
from ..infrastructure.database.database import Database
from ..infrastructure.email import EmailClient
from ..infrastructure.storage.repositories import (
    SubmissionRepository,
    WebinarRepository,
)


# Settings dependency
def get_settings_dep() -> Settings:
    """Get application settings."""
    return get_settings()


# Database dependencies
_db_instance: Optional[Database] = None


async def get_database() -> Database:
    """Get database instance (singleton)."""
    global _db_instance
    if _db_instance is None:
        settings = get_settings()
        _db_instance = Database(settings.database_url)
        await _db_instance.create_tables()
    return _db_instance


async def close_database() -> None:
    """Dispose of the database singleton, if one was created."""
    global _db_instance
    if _db_instance is not None:
        await _db_instance.close()
        _db_instance = None


async def get_session(
    db: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with db.session() as session:
        yield session


# Repository dependencies
def get_webinar_repository(
    session: AsyncSession = Depends(get_session),
) -> WebinarRepository:
    """Get webinar repository."""
    return WebinarRepository(session)


def get_submission_repository(
    session: AsyncSession = Depends(get_session),
) -> SubmissionRepository:
    """Get submission repository."""
    return SubmissionRepository(session)


# Service dependencies
def get_streaming_service(
    settings: Settings = Depends(get_settings_dep),
) -> StreamingService:
    """Get streaming orchestrator built from configuration."""
    return StreamingService.from_settings(settings)


def get_webinar_streaming_service(
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
    streaming_service: StreamingService = Depends(get_streaming_service),
) -> WebinarStreamingService:
    """Get webinar streaming workflow service."""
    return WebinarStreamingService(webinar_repository, streaming_service)


def get_email_client(settings: Settings = Depends(get_settings_dep)) -> EmailClient:
    """Get email client."""
    return EmailClient(settings)


def get_submission_service(
    submission_repository: SubmissionRepository = Depends(get_submission_repository),
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
    email_client: EmailClient = Depends(get_email_client),
    settings: Settings = Depends(get_settings_dep),
) -> SubmissionService:
    """Get submission service."""
    return SubmissionService(
        submission_repository, webinar_repository, email_client, settings
    )


# Authentication dependencies
async def require_admin(
    admin_key: Annotated[Optional[str], Header(alias="X-Admin-Key")] = None,
    settings: Settings = Depends(get_settings_dep),
) -> None:
    """Require the shared admin key.

    With no key configured every admin request is refused.
    """
    if (
        not admin_key
        or not settings.admin_api_key
        or not secrets.compare_digest(
            admin_key.encode(), settings.admin_api_key.encode()
        )
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin access required",
        )
