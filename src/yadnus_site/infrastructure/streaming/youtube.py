"""YouTube Live client.

Provisions and drives live broadcasts through the YouTube Data API v3 on
behalf of an admin whose OAuth tokens are handed in with each request.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

import httpx
import structlog

from .base import (
    MissingCredentialsError,
    YouTubeLiveSetup,
    decode_response,
    to_rfc3339,
)

logger = structlog.get_logger()

YOUTUBE_API_BASE_URL = "https://www.googleapis.com/youtube/v3"
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={broadcast_id}"


class BroadcastStatus(str, Enum):
    """Target states accepted by ``liveBroadcasts.transition``."""

    TESTING = "testing"
    LIVE = "live"
    COMPLETE = "complete"


@dataclass(frozen=True)
class YouTubeCredentials:
    """An admin's OAuth tokens for one request.

    The refresh token travels with the access token but is never exchanged.
    """

    access_token: Optional[str]
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class LiveBroadcast:
    """A scheduled YouTube broadcast."""

    id: str
    watch_url: str


@dataclass(frozen=True)
class IngestStream:
    """An RTMP ingest endpoint that feeds a broadcast."""

    id: str
    ingest_url: str
    stream_key: str


class YouTubeLiveClient:
    """Client for YouTube live broadcasts and streams.

    The client holds no per-admin state: every call takes the caller's
    ``YouTubeCredentials``, so one instance can serve concurrent requests.
    ``client_id``, ``client_secret`` and ``redirect_uri`` identify the OAuth
    application only; no token refresh is attempted, and an expired access
    token comes back as the platform's own error. ``transport`` lets tests
    swap the network for an ``httpx.MockTransport``.
    """

    platform = "youtube"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        api_base_url: str = YOUTUBE_API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.api_base_url = api_base_url.rstrip("/")
        self.transport = transport

    async def create_broadcast(
        self,
        credentials: YouTubeCredentials,
        title: str,
        description: str,
        start_time: datetime,
    ) -> LiveBroadcast:
        """Create a public, not-made-for-kids broadcast scheduled at ``start_time``."""
        data = await self._request(
            credentials,
            "POST",
            "liveBroadcasts",
            params={"part": "snippet,status"},
            json={
                "snippet": {
                    "title": title,
                    "description": description,
                    "scheduledStartTime": to_rfc3339(start_time),
                },
                "status": {
                    "privacyStatus": "public",
                    "selfDeclaredMadeForKids": False,
                },
            },
        )

        broadcast_id = data["id"]
        logger.info("YouTube broadcast created", broadcast_id=broadcast_id)
        return LiveBroadcast(
            id=broadcast_id,
            watch_url=WATCH_URL_TEMPLATE.format(broadcast_id=broadcast_id),
        )

    async def create_stream(
        self, credentials: YouTubeCredentials, title: str
    ) -> IngestStream:
        """Create a 1080p RTMP ingest stream."""
        data = await self._request(
            credentials,
            "POST",
            "liveStreams",
            params={"part": "snippet,cdn"},
            json={
                "snippet": {"title": title},
                "cdn": {
                    "resolution": "1080p",
                    "frameRate": "variable",
                    "ingestionType": "rtmp",
                },
            },
        )

        ingestion = data["cdn"]["ingestionInfo"]
        logger.info("YouTube stream created", stream_id=data["id"])
        return IngestStream(
            id=data["id"],
            ingest_url=ingestion["ingestionAddress"],
            stream_key=ingestion["streamName"],
        )

    async def bind(
        self, credentials: YouTubeCredentials, broadcast_id: str, stream_id: str
    ) -> None:
        """Bind an existing stream to an existing broadcast."""
        await self._request(
            credentials,
            "POST",
            "liveBroadcasts/bind",
            params={
                "id": broadcast_id,
                "streamId": stream_id,
                "part": "id,contentDetails",
            },
        )
        logger.info(
            "YouTube stream bound to broadcast",
            broadcast_id=broadcast_id,
            stream_id=stream_id,
        )

    async def transition(
        self,
        credentials: YouTubeCredentials,
        broadcast_id: str,
        status: BroadcastStatus,
    ) -> Dict[str, Any]:
        """Move a broadcast to ``status``.

        Invalid transitions are left for YouTube to reject.
        """
        status = BroadcastStatus(status)
        data = await self._request(
            credentials,
            "POST",
            "liveBroadcasts/transition",
            params={
                "broadcastStatus": status.value,
                "id": broadcast_id,
                "part": "status",
            },
        )
        logger.info(
            "YouTube broadcast transitioned",
            broadcast_id=broadcast_id,
            status=status.value,
        )
        return data

    async def start_live_stream(
        self,
        credentials: YouTubeCredentials,
        title: str,
        description: str,
        start_time: datetime,
    ) -> YouTubeLiveSetup:
        """Create a broadcast and an ingest stream, then bind them.

        The three calls run strictly in order and the first failure is
        re-raised. Nothing already created is rolled back; the ids of such
        resources are logged so they can be cleaned up by hand.
        """
        broadcast = await self.create_broadcast(
            credentials, title, description, start_time
        )

        stream: Optional[IngestStream] = None
        try:
            stream = await self.create_stream(credentials, title)
            await self.bind(credentials, broadcast.id, stream.id)
        except Exception:
            logger.warning(
                "YouTube setup failed, orphaned resources left on the platform",
                broadcast_id=broadcast.id,
                stream_id=stream.id if stream else None,
            )
            raise

        return YouTubeLiveSetup(
            broadcast_id=broadcast.id,
            stream_id=stream.id,
            watch_url=broadcast.watch_url,
            stream_key=stream.stream_key,
            rtmp_url=stream.ingest_url,
        )

    async def _request(
        self,
        credentials: YouTubeCredentials,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make an authenticated request to the YouTube Data API.

        Raises:
            MissingCredentialsError: If the credentials carry no access token
            PlatformRequestError: On any non-2xx response

        """
        if not credentials.access_token:
            raise MissingCredentialsError("YouTube access token is required")

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.request(
                method,
                f"{self.api_base_url}/{path}",
                params=params,
                json=json,
                headers={"Authorization": f"Bearer {credentials.access_token}"},
            )

        return decode_response(self.platform, response).data
