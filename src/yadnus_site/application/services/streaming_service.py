"""Streaming orchestrator.

Chooses the platform client for a webinar and sequences the provisioning and
lifecycle calls against it.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union

import structlog

from ...domain.models.webinar import StreamingPlatform
from ...infrastructure.config.config import Settings
from ...infrastructure.streaming.base import (
    StreamingOperationError,
    UnsupportedPlatformError,
    YouTubeLiveSetup,
    ZoomMeetingSetup,
)
from ...infrastructure.streaming.youtube import (
    BroadcastStatus,
    YouTubeCredentials,
    YouTubeLiveClient,
)
from ...infrastructure.streaming.zoom import ZoomClient

logger = structlog.get_logger()

DEFAULT_MEETING_DURATION = 60


class StreamingService:
    """Service for provisioning and driving webinar live streams.

    Holds no per-admin state; YouTube tokens are passed into every call.
    """

    def __init__(
        self,
        youtube_client: YouTubeLiveClient,
        zoom_client: ZoomClient,
        default_duration: int = DEFAULT_MEETING_DURATION,
    ):
        """Initialize with platform clients."""
        self.youtube_client = youtube_client
        self.zoom_client = zoom_client
        self.default_duration = default_duration

    @classmethod
    def from_settings(cls, settings: Settings) -> "StreamingService":
        """Build the service and both clients from configuration."""
        return cls(
            youtube_client=YouTubeLiveClient(
                client_id=settings.youtube_client_id,
                client_secret=settings.youtube_client_secret,
                redirect_uri=settings.youtube_redirect_uri,
                api_base_url=settings.youtube_api_base_url,
            ),
            zoom_client=ZoomClient(
                client_id=settings.zoom_client_id,
                client_secret=settings.zoom_client_secret,
                account_id=settings.zoom_account_id,
                api_base_url=settings.zoom_api_base_url,
                oauth_url=settings.zoom_oauth_url,
            ),
            default_duration=settings.zoom_default_duration_minutes,
        )

    async def setup_youtube_live(
        self,
        title: str,
        description: str,
        scheduled_start: datetime,
        access_token: str,
        refresh_token: Optional[str] = None,
    ) -> YouTubeLiveSetup:
        """Provision a YouTube broadcast bound to a fresh ingest stream.

        Args:
            title: Broadcast and stream title
            description: Broadcast description
            scheduled_start: Scheduled start of the broadcast
            access_token: Admin's YouTube OAuth access token
            refresh_token: Admin's YouTube OAuth refresh token

        Returns:
            Broadcast id, stream id, watch URL and RTMP ingest details

        Raises:
            StreamingOperationError: If any platform call fails
        """
        try:
            result = await self.youtube_client.start_live_stream(
                YouTubeCredentials(access_token, refresh_token),
                title,
                description,
                scheduled_start,
            )
        except Exception as e:
            raise StreamingOperationError(
                StreamingPlatform.YOUTUBE.value,
                "setup",
                f"YouTube Live setup failed: {e}",
            ) from e

        logger.info(
            "YouTube Live setup completed",
            broadcast_id=result.broadcast_id,
            stream_id=result.stream_id,
        )
        return result

    async def setup_zoom_meeting(
        self,
        title: str,
        scheduled_start: datetime,
        password: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
        duration: Optional[int] = None,
    ) -> ZoomMeetingSetup:
        """Provision a scheduled Zoom meeting.

        Raises:
            StreamingOperationError: If authentication or creation fails
        """
        try:
            meeting = await self.zoom_client.create_meeting(
                topic=title,
                duration=duration or self.default_duration,
                start_time=scheduled_start,
                password=password,
                settings=settings,
            )
        except Exception as e:
            raise StreamingOperationError(
                StreamingPlatform.ZOOM.value,
                "setup",
                f"Zoom meeting setup failed: {e}",
            ) from e

        logger.info("Zoom meeting setup completed", meeting_id=meeting.id)
        return ZoomMeetingSetup(
            meeting_id=str(meeting.id),
            join_url=meeting.join_url,
            start_url=meeting.start_url,
            password=meeting.password,
            meeting_number=meeting.id,
        )

    async def start_live_stream(
        self,
        platform: Union[StreamingPlatform, str],
        stream_id: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Take a provisioned stream live.

        YouTube broadcasts are transitioned to ``live``. Zoom meetings start
        when the host joins, so only the meeting's status is read back.
        """
        platform = self._resolve_platform(platform)

        try:
            if platform == StreamingPlatform.YOUTUBE:
                result = await self.youtube_client.transition(
                    YouTubeCredentials(access_token, refresh_token),
                    stream_id,
                    BroadcastStatus.LIVE,
                )
            else:
                result = await self.zoom_client.get_meeting(stream_id)
        except Exception as e:
            raise StreamingOperationError(
                platform.value,
                "start",
                f"Failed to start {_display_name(platform)} stream: {e}",
            ) from e

        logger.info("Live stream started", platform=platform.value, stream_id=stream_id)
        return result

    async def end_live_stream(
        self,
        platform: Union[StreamingPlatform, str],
        stream_id: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """End a live stream.

        YouTube broadcasts are transitioned to ``complete``. Zoom meetings are
        deleted, which cannot be undone.
        """
        platform = self._resolve_platform(platform)

        try:
            if platform == StreamingPlatform.YOUTUBE:
                result = await self.youtube_client.transition(
                    YouTubeCredentials(access_token, refresh_token),
                    stream_id,
                    BroadcastStatus.COMPLETE,
                )
            else:
                result = await self.zoom_client.delete_meeting(stream_id)
        except Exception as e:
            raise StreamingOperationError(
                platform.value,
                "end",
                f"Failed to end {_display_name(platform)} stream: {e}",
            ) from e

        logger.info("Live stream ended", platform=platform.value, stream_id=stream_id)
        return result

    @staticmethod
    def _resolve_platform(platform: Union[StreamingPlatform, str]) -> StreamingPlatform:
        try:
            resolved = StreamingPlatform(platform)
        except ValueError:
            raise UnsupportedPlatformError(platform)
        if resolved == StreamingPlatform.NONE:
            raise UnsupportedPlatformError(platform)
        return resolved


def _display_name(platform: StreamingPlatform) -> str:
    return "YouTube" if platform == StreamingPlatform.YOUTUBE else "Zoom"
