"""Live-stream provisioning request schemas.

Responses are the platform setup results and platform replies, returned
as-is.
"""

from typing import Any, Dict, Optional
from pydantic import Field

from .base import CamelModel


class YouTubeSetupRequest(CamelModel):
    """Request to provision a YouTube Live broadcast."""

    youtube_access_token: str = Field(
        ..., min_length=1, description="Admin's YouTube OAuth access token"
    )
    youtube_refresh_token: Optional[str] = Field(
        None, description="Admin's YouTube OAuth refresh token"
    )


class ZoomSetupRequest(CamelModel):
    """Request to provision a Zoom meeting."""

    password: Optional[str] = Field(None, description="Meeting join password")
    settings: Optional[Dict[str, Any]] = Field(
        None, description="Overrides for the default meeting settings"
    )


class StreamControlRequest(CamelModel):
    """Body for starting or ending a stream.

    YouTube streams need the admin's access token; Zoom ignores both fields.
    """

    youtube_access_token: Optional[str] = None
    youtube_refresh_token: Optional[str] = None
