"""Zoom meetings client.

Uses a server-to-server OAuth app (account credentials grant). Every public
call fetches a fresh bearer token; there is no token cache.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

import httpx
import structlog

from .base import decode_response, to_rfc3339

logger = structlog.get_logger()

ZOOM_API_BASE_URL = "https://api.zoom.us/v2"
ZOOM_OAUTH_URL = "https://zoom.us/oauth/token"

SCHEDULED_MEETING = 2

DEFAULT_MEETING_SETTINGS: Dict[str, Any] = {
    "join_before_host": True,
    "waiting_room": False,
    "participant_video": True,
    "host_video": True,
    "mute_upon_entry": False,
    "email_notification": True,
}


@dataclass(frozen=True)
class ZoomMeeting:
    """A scheduled Zoom meeting as returned on creation."""

    id: Union[int, str]
    join_url: str
    start_url: Optional[str] = None
    password: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


class ZoomClient:
    """Client for the Zoom REST API v2 meeting endpoints."""

    platform = "zoom"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        account_id: str,
        api_base_url: str = ZOOM_API_BASE_URL,
        oauth_url: str = ZOOM_OAUTH_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.account_id = account_id
        self.api_base_url = api_base_url.rstrip("/")
        self.oauth_url = oauth_url
        self.transport = transport

    async def get_access_token(self) -> str:
        """Exchange the app credentials for a short-lived bearer token."""
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(
                self.oauth_url,
                params={
                    "grant_type": "account_credentials",
                    "account_id": self.account_id,
                },
                auth=(self.client_id, self.client_secret),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

        return decode_response(self.platform, response).data["access_token"]

    async def create_meeting(
        self,
        topic: str,
        duration: int,
        start_time: datetime,
        password: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> ZoomMeeting:
        """Create a scheduled meeting.

        Args:
            topic: Meeting topic
            duration: Length in minutes
            start_time: Scheduled start
            password: Optional join password
            settings: Overrides merged key by key over the default settings

        Returns:
            The created meeting

        """
        body: Dict[str, Any] = {
            "topic": topic,
            "type": SCHEDULED_MEETING,
            "start_time": to_rfc3339(start_time),
            "duration": duration,
            "timezone": "UTC",
            "settings": {**DEFAULT_MEETING_SETTINGS, **(settings or {})},
        }
        if password:
            body["password"] = password

        data = await self._request("POST", "users/me/meetings", json=body)

        logger.info("Zoom meeting created", meeting_id=data.get("id"))
        return ZoomMeeting(
            id=data["id"],
            join_url=data["join_url"],
            start_url=data.get("start_url"),
            password=data.get("password"),
            raw=data,
        )

    async def update_meeting(self, meeting_id: str, patch: Dict[str, Any]) -> None:
        """Apply a partial update to a meeting."""
        await self._request("PATCH", f"meetings/{meeting_id}", json=patch)
        logger.info("Zoom meeting updated", meeting_id=meeting_id)

    async def delete_meeting(self, meeting_id: str) -> Dict[str, bool]:
        """Delete a meeting. This cannot be undone."""
        await self._request("DELETE", f"meetings/{meeting_id}")
        logger.info("Zoom meeting deleted", meeting_id=meeting_id)
        return {"success": True}

    async def get_meeting(self, meeting_id: str) -> Dict[str, Any]:
        """Fetch a meeting's current details."""
        return await self._request("GET", f"meetings/{meeting_id}")

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make an authenticated request to the Zoom API.

        Raises:
            PlatformRequestError: On any non-2xx response, token call included

        """
        token = await self.get_access_token()

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.request(
                method,
                f"{self.api_base_url}/{path}",
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )

        return decode_response(self.platform, response).data
