"""Webinar domain model - a scheduled talk that may be streamed live."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from ..exceptions import InvalidStreamTransitionError


class StreamingPlatform(str, Enum):
    """Platform a webinar is streamed on."""

    YOUTUBE = "youtube"
    ZOOM = "zoom"
    NONE = "none"


class StreamingStatus(str, Enum):
    """Live-stream lifecycle of a webinar."""

    SCHEDULED = "scheduled"
    LIVE = "live"
    ENDED = "ended"


# A repeated start is let through so the platform can answer for itself.
ALLOWED_TRANSITIONS: dict[StreamingStatus, frozenset[StreamingStatus]] = {
    StreamingStatus.SCHEDULED: frozenset({StreamingStatus.LIVE}),
    StreamingStatus.LIVE: frozenset({StreamingStatus.LIVE, StreamingStatus.ENDED}),
    StreamingStatus.ENDED: frozenset(),
}


@dataclass
class Webinar:
    """Webinar with its optional live-streaming integration fields."""

    id: UUID = field(default_factory=uuid4)
    title: str = ""
    description: str = ""
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    speakers: Optional[Any] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_live: bool = False
    registration_count: int = 0
    chat_enabled: bool = True
    recording_enabled: bool = True
    max_attendees: int = 100

    # Streaming integration
    streaming_platform: Optional[StreamingPlatform] = None
    streaming_status: StreamingStatus = StreamingStatus.SCHEDULED
    youtube_live_id: Optional[str] = None
    youtube_stream_key: Optional[str] = None
    zoom_meeting_id: Optional[str] = None
    zoom_password: Optional[str] = None
    stream_metadata: Optional[dict] = None

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def stream_id(self) -> Optional[str]:
        """Platform identifier used to drive the stream, if one is configured."""
        if self.streaming_platform == StreamingPlatform.YOUTUBE:
            return self.youtube_live_id
        if self.streaming_platform == StreamingPlatform.ZOOM:
            return self.zoom_meeting_id
        return None

    @property
    def is_stream_configured(self) -> bool:
        """Check if a platform has been set up for this webinar."""
        return self.stream_id is not None

    @property
    def is_upcoming(self) -> bool:
        """Check if the webinar starts in the future."""
        return _as_utc(self.date) >= datetime.now(timezone.utc)

    def can_transition_to(self, status: StreamingStatus) -> bool:
        """Check if the streaming status may move to ``status``."""
        return status in ALLOWED_TRANSITIONS[self.streaming_status]

    def ensure_can_transition_to(self, status: StreamingStatus) -> None:
        """Raise if the streaming status may not move to ``status``."""
        if not self.can_transition_to(status):
            raise InvalidStreamTransitionError(
                self.id, self.streaming_status.value, status.value
            )

    def ensure_can_set_up(self) -> None:
        """Raise if a new stream may not be provisioned right now."""
        if self.streaming_status == StreamingStatus.LIVE:
            raise InvalidStreamTransitionError(
                self.id, self.streaming_status.value, StreamingStatus.SCHEDULED.value
            )

    def attach_youtube_broadcast(
        self, broadcast_id: str, stream_key: str, metadata: dict
    ) -> None:
        """Record a freshly provisioned YouTube broadcast."""
        self.streaming_platform = StreamingPlatform.YOUTUBE
        self.youtube_live_id = broadcast_id
        self.youtube_stream_key = stream_key
        self.zoom_meeting_id = None
        self.zoom_password = None
        self._reset_stream(metadata)

    def attach_zoom_meeting(
        self, meeting_id: str, password: Optional[str], metadata: dict
    ) -> None:
        """Record a freshly provisioned Zoom meeting."""
        self.streaming_platform = StreamingPlatform.ZOOM
        self.zoom_meeting_id = meeting_id
        self.zoom_password = password
        self.youtube_live_id = None
        self.youtube_stream_key = None
        self._reset_stream(metadata)

    def mark_live(self) -> None:
        """Mark the stream as live."""
        self.ensure_can_transition_to(StreamingStatus.LIVE)
        self.streaming_status = StreamingStatus.LIVE
        self.is_live = True
        self.updated_at = datetime.now(timezone.utc)

    def mark_ended(self) -> None:
        """Mark the stream as ended."""
        self.ensure_can_transition_to(StreamingStatus.ENDED)
        self.streaming_status = StreamingStatus.ENDED
        self.is_live = False
        self.updated_at = datetime.now(timezone.utc)

    def _reset_stream(self, metadata: dict) -> None:
        self.stream_metadata = metadata
        self.streaming_status = StreamingStatus.SCHEDULED
        self.is_live = False
        self.updated_at = datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
