"""Webinar request/response schemas."""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID
from pydantic import Field, field_validator

from ...domain.models.webinar import StreamingPlatform, StreamingStatus
from .base import CamelModel


class WebinarCreateRequest(CamelModel):
    """Request to create a webinar."""

    title: str = Field(..., min_length=1, description="Webinar title")
    description: str = Field(..., min_length=1, description="Webinar description")
    date: datetime = Field(..., description="Scheduled start")
    speakers: Optional[Any] = Field(None, description="Speaker list or details")
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    chat_enabled: bool = True
    recording_enabled: bool = True
    max_attendees: int = Field(100, ge=1)
    streaming_platform: Optional[StreamingPlatform] = None


class WebinarUpdateRequest(CamelModel):
    """Request to change a webinar's details.

    Only the fields sent are changed. Streaming fields are owned by the
    setup/start/end endpoints and cannot be set here.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    speakers: Optional[Any] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    chat_enabled: Optional[bool] = None
    recording_enabled: Optional[bool] = None
    max_attendees: Optional[int] = Field(None, ge=1)

    @field_validator(
        "title",
        "description",
        "date",
        "chat_enabled",
        "recording_enabled",
        "max_attendees",
    )
    @classmethod
    def not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value


class PublicWebinarResponse(CamelModel):
    """Webinar as shown to site visitors, without stream secrets."""

    id: UUID
    title: str
    description: str
    date: datetime
    speakers: Optional[Any]
    video_url: Optional[str]
    thumbnail_url: Optional[str]
    is_live: bool
    registration_count: int
    chat_enabled: bool
    recording_enabled: bool
    max_attendees: int
    streaming_platform: Optional[StreamingPlatform]
    streaming_status: StreamingStatus
    youtube_live_id: Optional[str]
    zoom_meeting_id: Optional[str]
    created_at: datetime
    updated_at: datetime


class WebinarResponse(PublicWebinarResponse):
    """Webinar with stream key, meeting password and setup metadata."""

    youtube_stream_key: Optional[str]
    zoom_password: Optional[str]
    stream_metadata: Optional[Dict[str, Any]]
