"""Webinar repository implementation."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from ....domain.models.webinar import Webinar, StreamingPlatform, StreamingStatus
from ...database.models import WebinarModel


class WebinarRepository:
    """SQLAlchemy implementation of webinar repository.

    Besides plain CRUD this is the record updater of the streaming workflow:
    platform identifiers, status and metadata reach the database through
    :meth:`update`, which is last-write-wins.
    """

    def __init__(self, session: AsyncSession):
        """Initialize with database session.

        Args:
            session: Async SQLAlchemy session for database operations.

        """
        self.session = session

    async def add(self, entity: Webinar) -> Webinar:
        """Add a new webinar.

        Args:
            entity: Webinar domain entity to add.

        Returns:
            The stored Webinar entity.

        """
        model = WebinarModel(id=entity.id, created_at=entity.created_at)
        self._apply(model, entity)

        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def get(self, id: UUID) -> Optional[Webinar]:
        """Get webinar by ID."""
        model = await self.session.get(WebinarModel, id)
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[Webinar]:
        """List all webinars, most recent date first."""
        result = await self.session.execute(
            select(WebinarModel).order_by(WebinarModel.date.desc())
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_upcoming(self) -> list[Webinar]:
        """List webinars that have not started yet, soonest first."""
        result = await self.session.execute(
            select(WebinarModel)
            .where(WebinarModel.date >= _utc_now())
            .order_by(WebinarModel.date.asc())
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_past(self) -> list[Webinar]:
        """List webinars whose date has passed, most recent first."""
        result = await self.session.execute(
            select(WebinarModel)
            .where(WebinarModel.date < _utc_now())
            .order_by(WebinarModel.date.desc())
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def update(self, entity: Webinar) -> Webinar:
        """Update an existing webinar.

        Args:
            entity: Webinar carrying the new field values.

        Returns:
            The updated Webinar entity.

        Raises:
            ValueError: If the webinar does not exist.

        """
        model = await self.session.get(WebinarModel, entity.id)
        if not model:
            raise ValueError(f"Webinar {entity.id} not found")

        self._apply(model, entity)
        model.updated_at = datetime.now(timezone.utc)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def increment_registration(self, id: UUID) -> None:
        """Atomically add one to the registration counter."""
        await self.session.execute(
            update(WebinarModel)
            .where(WebinarModel.id == id)
            .values(registration_count=WebinarModel.registration_count + 1)
        )
        await self.session.commit()

    async def delete(self, id: UUID) -> bool:
        """Delete webinar by ID.

        Returns:
            True if a webinar was deleted, False if none existed.

        """
        model = await self.session.get(WebinarModel, id)
        if not model:
            return False

        await self.session.delete(model)
        await self.session.commit()
        return True

    def _apply(self, model: WebinarModel, entity: Webinar) -> None:
        """Copy entity fields onto the model."""
        model.title = entity.title
        model.description = entity.description
        model.date = _to_utc(entity.date)
        model.speakers = entity.speakers
        model.video_url = entity.video_url
        model.thumbnail_url = entity.thumbnail_url
        model.is_live = entity.is_live
        model.registration_count = entity.registration_count
        model.chat_enabled = entity.chat_enabled
        model.recording_enabled = entity.recording_enabled
        model.max_attendees = entity.max_attendees
        model.streaming_platform = entity.streaming_platform
        model.streaming_status = entity.streaming_status
        model.youtube_live_id = entity.youtube_live_id
        model.youtube_stream_key = entity.youtube_stream_key
        model.zoom_meeting_id = entity.zoom_meeting_id
        model.zoom_password = entity.zoom_password
        model.stream_metadata = entity.stream_metadata

    def _to_entity(self, model: WebinarModel) -> Webinar:
        """Convert model to entity."""
        return Webinar(
            id=model.id,
            title=model.title,
            description=model.description,
            date=_to_utc(model.date),
            speakers=model.speakers,
            video_url=model.video_url,
            thumbnail_url=model.thumbnail_url,
            is_live=model.is_live,
            registration_count=model.registration_count,
            chat_enabled=model.chat_enabled,
            recording_enabled=model.recording_enabled,
            max_attendees=model.max_attendees,
            streaming_platform=(
                StreamingPlatform(model.streaming_platform)
                if model.streaming_platform
                else None
            ),
            streaming_status=StreamingStatus(model.streaming_status),
            youtube_live_id=model.youtube_live_id,
            youtube_stream_key=model.youtube_stream_key,
            zoom_meeting_id=model.zoom_meeting_id,
            zoom_password=model.zoom_password,
            stream_metadata=model.stream_metadata,
            created_at=_to_utc(model.created_at),
            updated_at=_to_utc(model.updated_at),
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc(value: datetime) -> datetime:
    """Normalise to an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
