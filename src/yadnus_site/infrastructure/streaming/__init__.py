"""Live-streaming platform clients."""

from .base import (
    MissingCredentialsError,
    PlatformRequestError,
    StreamingError,
    StreamingOperationError,
    UnsupportedPlatformError,
    YouTubeLiveSetup,
    ZoomMeetingSetup,
)
from .youtube import BroadcastStatus, YouTubeCredentials, YouTubeLiveClient
from .zoom import ZoomClient

__all__ = [
    "BroadcastStatus",
    "MissingCredentialsError",
    "PlatformRequestError",
    "StreamingError",
    "StreamingOperationError",
    "UnsupportedPlatformError",
    "YouTubeCredentials",
    "YouTubeLiveClient",
    "YouTubeLiveSetup",
    "ZoomClient",
    "ZoomMeetingSetup",
]
