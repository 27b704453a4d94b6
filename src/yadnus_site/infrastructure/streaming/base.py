"""Common types for live-streaming platform clients.

Holds the error taxonomy shared by the YouTube and Zoom clients, the setup
results they produce, and the helpers both use to shape HTTP calls.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

import httpx


class StreamingError(Exception):
    """Base exception for streaming platform errors."""
    pass


class PlatformRequestError(StreamingError):
    """Raised when a platform API answers with a non-2xx status.

    ``message`` is the platform's own error text, passed through unchanged.
    """

    def __init__(self, platform: str, status_code: int, message: str):
        self.platform = platform
        self.status_code = status_code
        self.message = message
        super().__init__(f"{platform} API request failed ({status_code}): {message}")


class MissingCredentialsError(StreamingError):
    """Raised when a per-user OAuth call is attempted without an access token."""
    pass


class UnsupportedPlatformError(StreamingError):
    """Raised when a stream operation names a platform with no client."""

    def __init__(self, platform: Any):
        self.platform = platform
        super().__init__(f"Unsupported streaming platform: {platform}")


class StreamingOperationError(StreamingError):
    """Raised by the orchestrator around any failure of a platform operation.

    The original error is kept as ``__cause__``.
    """

    def __init__(self, platform: str, operation: str, message: str):
        self.platform = platform
        self.operation = operation
        super().__init__(message)


@dataclass(frozen=True)
class YouTubeLiveSetup:
    """Result of provisioning a YouTube broadcast bound to an ingest stream."""

    broadcast_id: str
    stream_id: str
    watch_url: str
    stream_key: str
    rtmp_url: str
    platform: str = "youtube"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the field names the admin UI expects."""
        return {
            "platform": self.platform,
            "broadcastId": self.broadcast_id,
            "streamId": self.stream_id,
            "watchUrl": self.watch_url,
            "streamKey": self.stream_key,
            "rtmpUrl": self.rtmp_url,
        }


@dataclass(frozen=True)
class ZoomMeetingSetup:
    """Result of provisioning a scheduled Zoom meeting."""

    meeting_id: str
    join_url: str
    start_url: Optional[str] = None
    password: Optional[str] = None
    meeting_number: Optional[Union[int, str]] = None
    platform: str = "zoom"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the field names the admin UI expects."""
        return {
            "platform": self.platform,
            "meetingId": self.meeting_id,
            "joinUrl": self.join_url,
            "startUrl": self.start_url,
            "password": self.password,
            "meetingNumber": self.meeting_number,
        }


@dataclass(frozen=True)
class PlatformResponse:
    """Decoded platform response body plus its status code."""

    status_code: int
    data: Dict[str, Any] = field(default_factory=dict)


def extract_error_message(response: httpx.Response) -> str:
    """Pull the human-readable error out of a platform error response.

    Understands Google's ``{"error": {"message": ...}}``, Zoom's
    ``{"code": ..., "message": ...}`` and OAuth's ``error_description``.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])
        if body.get("error_description"):
            return str(body["error_description"])
        if isinstance(error, str):
            return error

    return response.text or response.reason_phrase


def decode_response(platform: str, response: httpx.Response) -> PlatformResponse:
    """Turn an httpx response into a PlatformResponse or raise on non-2xx."""
    if not response.is_success:
        raise PlatformRequestError(
            platform, response.status_code, extract_error_message(response)
        )

    if not response.content:
        return PlatformResponse(status_code=response.status_code)

    return PlatformResponse(status_code=response.status_code, data=response.json())


def to_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC 3339 UTC with a trailing ``Z``.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
