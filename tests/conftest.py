"""Pytest configuration and fixtures."""

import json
from typing import AsyncGenerator, Callable, Dict, List, Tuple, Union

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from yadnus_site.api.dependencies import (
    get_session,
    get_settings_dep,
    get_streaming_service,
)
from yadnus_site.api.main import app
from yadnus_site.application.services.streaming_service import StreamingService
from yadnus_site.infrastructure.config.config import Settings
from yadnus_site.infrastructure.database.database import Database
from yadnus_site.infrastructure.storage.repositories import (
    SubmissionRepository,
    WebinarRepository,
)
from yadnus_site.infrastructure.streaming.youtube import YouTubeLiveClient
from yadnus_site.infrastructure.streaming.zoom import ZoomClient

ADMIN_KEY = "test-admin-key"

PlatformReply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class PlatformStub:
    """Answers YouTube and Zoom API calls made through ``httpx.MockTransport``.

    Replies are registered per ``(method, path)``; anything unregistered gets
    a 404 with a platform-style error body. Every request is recorded.
    """

    def __init__(self):
        self.replies: Dict[Tuple[str, str], PlatformReply] = {}
        self.requests: List[httpx.Request] = []

    def reply(self, method: str, path: str, response: PlatformReply) -> None:
        self.replies[(method, path)] = response

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.replies.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(response):
            return response(request)
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.method == method and request.url.path == path
        ]

    def json_body(self, request: httpx.Request) -> dict:
        return json.loads(request.content)

    # Canned happy-path replies

    def youtube_setup_succeeds(self) -> None:
        self.reply(
            "POST",
            "/youtube/v3/liveBroadcasts",
            httpx.Response(200, json={"id": "bcast-123", "kind": "youtube#liveBroadcast"}),
        )
        self.reply(
            "POST",
            "/youtube/v3/liveStreams",
            httpx.Response(
                200,
                json={
                    "id": "stream-456",
                    "cdn": {
                        "ingestionInfo": {
                            "ingestionAddress": "rtmp://a.rtmp.youtube.com/live2",
                            "streamName": "abcd-efgh-ijkl",
                        }
                    },
                },
            ),
        )
        self.reply(
            "POST",
            "/youtube/v3/liveBroadcasts/bind",
            httpx.Response(200, json={"id": "bcast-123"}),
        )

    def youtube_transition_succeeds(self) -> None:
        self.reply(
            "POST",
            "/youtube/v3/liveBroadcasts/transition",
            lambda request: httpx.Response(
                200,
                json={
                    "id": request.url.params["id"],
                    "status": {"lifeCycleStatus": request.url.params["broadcastStatus"]},
                },
            ),
        )

    def zoom_auth_succeeds(self) -> None:
        self.reply(
            "POST",
            "/oauth/token",
            httpx.Response(200, json={"access_token": "zoom-token", "expires_in": 3600}),
        )

    def zoom_setup_succeeds(self) -> None:
        self.zoom_auth_succeeds()
        self.reply(
            "POST",
            "/v2/users/me/meetings",
            httpx.Response(
                201,
                json={
                    "id": 85746352412,
                    "join_url": "https://zoom.us/j/85746352412",
                    "start_url": "https://zoom.us/s/85746352412?zak=secret",
                    "password": "s3cret",
                },
            ),
        )


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with overrides."""
    return Settings(
        environment="test",
        database_url="sqlite+aiosqlite:///:memory:",
        admin_api_key=ADMIN_KEY,
        cors_origins=["http://testserver"],
        youtube_client_id="yt-client",
        youtube_client_secret="yt-secret",
        youtube_redirect_uri="http://testserver/oauth/youtube/callback",
        zoom_client_id="zoom-client",
        zoom_client_secret="zoom-secret",
        zoom_account_id="zoom-account",
        email_enabled=False,
    )


@pytest.fixture
async def test_database(test_settings) -> AsyncGenerator[Database, None]:
    """Create in-memory SQLite database with all tables."""
    database = Database(test_settings.database_url)
    await database.create_tables()

    yield database

    await database.close()


@pytest.fixture
async def test_session(test_database) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with test_database.session() as session:
        yield session


@pytest.fixture
def webinar_repository(test_session) -> WebinarRepository:
    return WebinarRepository(test_session)


@pytest.fixture
def submission_repository(test_session) -> SubmissionRepository:
    return SubmissionRepository(test_session)


@pytest.fixture
def platform() -> PlatformStub:
    """Stubbed YouTube and Zoom APIs."""
    return PlatformStub()


@pytest.fixture
def streaming_service(platform, test_settings) -> StreamingService:
    """Streaming orchestrator whose clients talk to the platform stub."""
    transport = platform.transport
    return StreamingService(
        youtube_client=YouTubeLiveClient(
            client_id=test_settings.youtube_client_id,
            client_secret=test_settings.youtube_client_secret,
            redirect_uri=test_settings.youtube_redirect_uri,
            transport=transport,
        ),
        zoom_client=ZoomClient(
            client_id=test_settings.zoom_client_id,
            client_secret=test_settings.zoom_client_secret,
            account_id=test_settings.zoom_account_id,
            transport=transport,
        ),
    )


@pytest.fixture
async def client(
    test_session, test_settings, streaming_service
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database, settings and platform overrides."""

    async def get_test_session():
        yield test_session

    app.dependency_overrides[get_session] = get_test_session
    app.dependency_overrides[get_settings_dep] = lambda: test_settings
    app.dependency_overrides[get_streaming_service] = lambda: streaming_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    """Headers carrying the admin key."""
    return {"X-Admin-Key": ADMIN_KEY}
