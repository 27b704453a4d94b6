"""Health check endpoints."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_session

router = APIRouter()
logger = structlog.get_logger()


@router.get("/health")
async def health_check():
    """Report that the service is up."""
    return {"status": "healthy", "service": "yadnus-site-api"}


@router.get("/health/db")
async def database_health(session: AsyncSession = Depends(get_session)):
    """Check database connectivity.

    Args:
        session: Database session for testing connectivity.

    Returns:
        Dictionary with database connection status.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", error=str(e))
        return {"status": "unhealthy", "database": "disconnected", "error": str(e)}

    return {"status": "healthy", "database": "connected"}
