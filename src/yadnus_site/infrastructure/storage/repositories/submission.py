"""Submission repository implementation."""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from ....domain.models.submission import Submission, SubmissionType
from ...database.models import SubmissionModel


class SubmissionRepository:
    """SQLAlchemy implementation of submission repository."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def add(self, entity: Submission) -> Submission:
        """Add submission to repository."""
        model = SubmissionModel(
            id=entity.id,
            type=entity.type,
            payload=entity.payload,
            created_at=entity.created_at,
        )

        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def get(self, id: UUID) -> Optional[Submission]:
        """Get submission by ID."""
        model = await self.session.get(SubmissionModel, id)
        return self._to_entity(model) if model else None

    async def list(self, type: Optional[SubmissionType] = None) -> list[Submission]:
        """List submissions, newest first, optionally filtered by type."""
        query = select(SubmissionModel).order_by(SubmissionModel.created_at.desc())
        if type is not None:
            query = query.where(SubmissionModel.type == type)

        result = await self.session.execute(query)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, id: UUID) -> bool:
        """Delete submission by ID."""
        model = await self.session.get(SubmissionModel, id)
        if not model:
            return False

        await self.session.delete(model)
        await self.session.commit()
        return True

    def _to_entity(self, model: SubmissionModel) -> Submission:
        """Convert model to entity."""
        return Submission(
            id=model.id,
            type=SubmissionType(model.type),
            payload=model.payload,
            created_at=model.created_at,
        )
