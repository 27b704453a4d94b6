"""SQLAlchemy models for database tables."""

from sqlalchemy import (
    Column,
    String,
    Boolean,
    Integer,
    DateTime,
    Text,
    Index,
    JSON,
    Uuid,
    Enum as SQLEnum,
)
from datetime import datetime, timezone
import uuid

from .database import Base
from ...domain.models.submission import SubmissionType
from ...domain.models.webinar import StreamingPlatform, StreamingStatus


class WebinarModel(Base):
    """Webinar database model."""

    __tablename__ = "webinars"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    speakers = Column(JSON, nullable=True)
    video_url = Column(Text, nullable=True)
    thumbnail_url = Column(Text, nullable=True)
    is_live = Column(Boolean, default=False, nullable=False)
    registration_count = Column(Integer, default=0, nullable=False)
    chat_enabled = Column(Boolean, default=True, nullable=False)
    recording_enabled = Column(Boolean, default=True, nullable=False)
    max_attendees = Column(Integer, default=100, nullable=False)

    # Streaming integration
    streaming_platform = Column(
        SQLEnum(
            StreamingPlatform,
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
            length=20,
        ),
        nullable=True,
    )
    streaming_status = Column(
        SQLEnum(
            StreamingStatus,
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
            length=20,
        ),
        default=StreamingStatus.SCHEDULED,
        nullable=False,
    )
    youtube_live_id = Column(Text, nullable=True)
    youtube_stream_key = Column(Text, nullable=True)
    zoom_meeting_id = Column(Text, nullable=True)
    zoom_password = Column(Text, nullable=True)
    stream_metadata = Column(JSON, nullable=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class SubmissionModel(Base):
    """Form submission database model."""

    __tablename__ = "submissions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    type = Column(
        SQLEnum(
            SubmissionType,
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
            length=20,
        ),
        nullable=False,
    )
    payload = Column(JSON, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (Index("idx_submission_type_created", "type", "created_at"),)
