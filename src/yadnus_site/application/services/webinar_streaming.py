"""Live-stream workflow for webinar records."""

from typing import Any, Dict, Optional
from uuid import UUID

import structlog

from ...domain.exceptions import (
    StreamCredentialsRequiredError,
    StreamNotConfiguredError,
    WebinarNotFoundError,
)
from ...domain.models.webinar import StreamingPlatform, StreamingStatus, Webinar
from ...infrastructure.storage.repositories import WebinarRepository
from .streaming_service import StreamingService

logger = structlog.get_logger()


class WebinarStreamingService:
    """Ties platform provisioning to the webinar record.

    Platform calls always come first and the record is written only after
    they succeed, so a failed call leaves the webinar as it was.
    """

    def __init__(
        self,
        webinar_repository: WebinarRepository,
        streaming_service: StreamingService,
    ):
        """Initialize with dependencies."""
        self.webinar_repository = webinar_repository
        self.streaming_service = streaming_service

    async def setup_youtube(
        self,
        webinar_id: UUID,
        access_token: str,
        refresh_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Provision a YouTube broadcast for a webinar and record it.

        Args:
            webinar_id: Webinar to provision
            access_token: Admin's YouTube OAuth access token
            refresh_token: Admin's YouTube OAuth refresh token

        Returns:
            The setup result as stored in ``stream_metadata``

        Raises:
            WebinarNotFoundError: If the webinar does not exist
            InvalidStreamTransitionError: If the webinar is live
            StreamingOperationError: If provisioning fails
        """
        webinar = await self._load(webinar_id)
        webinar.ensure_can_set_up()

        result = await self.streaming_service.setup_youtube_live(
            title=webinar.title,
            description=webinar.description,
            scheduled_start=webinar.date,
            access_token=access_token,
            refresh_token=refresh_token,
        )

        metadata = result.to_dict()
        webinar.attach_youtube_broadcast(result.broadcast_id, result.stream_key, metadata)
        await self.webinar_repository.update(webinar)

        logger.info(
            "YouTube Live attached to webinar",
            webinar_id=str(webinar.id),
            broadcast_id=result.broadcast_id,
        )
        return metadata

    async def setup_zoom(
        self,
        webinar_id: UUID,
        password: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Provision a Zoom meeting for a webinar and record it."""
        webinar = await self._load(webinar_id)
        webinar.ensure_can_set_up()

        result = await self.streaming_service.setup_zoom_meeting(
            title=webinar.title,
            scheduled_start=webinar.date,
            password=password,
            settings=settings,
        )

        metadata = result.to_dict()
        webinar.attach_zoom_meeting(result.meeting_id, result.password, metadata)
        await self.webinar_repository.update(webinar)

        logger.info(
            "Zoom meeting attached to webinar",
            webinar_id=str(webinar.id),
            meeting_id=result.meeting_id,
        )
        return metadata

    async def start_stream(
        self,
        webinar_id: UUID,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Take the webinar's configured stream live.

        Raises:
            WebinarNotFoundError: If the webinar does not exist
            StreamNotConfiguredError: If no platform was set up
            InvalidStreamTransitionError: If the stream has already ended
            StreamCredentialsRequiredError: If a YouTube stream comes without a token
            StreamingOperationError: If the platform call fails
        """
        webinar = await self._load_configured(webinar_id)
        webinar.ensure_can_transition_to(StreamingStatus.LIVE)
        _require_youtube_token(webinar, access_token)

        result = await self.streaming_service.start_live_stream(
            webinar.streaming_platform,
            webinar.stream_id,
            access_token=access_token,
            refresh_token=refresh_token,
        )

        webinar.mark_live()
        await self.webinar_repository.update(webinar)

        logger.info("Webinar stream is live", webinar_id=str(webinar.id))
        return result

    async def end_stream(
        self,
        webinar_id: UUID,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """End the webinar's live stream.

        For Zoom this deletes the meeting. YouTube needs the admin's access
        token, as for :meth:`start_stream`.
        """
        webinar = await self._load_configured(webinar_id)
        webinar.ensure_can_transition_to(StreamingStatus.ENDED)
        _require_youtube_token(webinar, access_token)

        result = await self.streaming_service.end_live_stream(
            webinar.streaming_platform,
            webinar.stream_id,
            access_token=access_token,
            refresh_token=refresh_token,
        )

        webinar.mark_ended()
        await self.webinar_repository.update(webinar)

        logger.info("Webinar stream ended", webinar_id=str(webinar.id))
        return result

    async def _load(self, webinar_id: UUID) -> Webinar:
        webinar = await self.webinar_repository.get(webinar_id)
        if not webinar:
            raise WebinarNotFoundError(webinar_id)
        return webinar

    async def _load_configured(self, webinar_id: UUID) -> Webinar:
        webinar = await self._load(webinar_id)
        if not webinar.is_stream_configured:
            raise StreamNotConfiguredError(webinar_id)
        return webinar


def _require_youtube_token(webinar: Webinar, access_token: Optional[str]) -> None:
    if webinar.streaming_platform == StreamingPlatform.YOUTUBE and not access_token:
        raise StreamCredentialsRequiredError(webinar.id)
