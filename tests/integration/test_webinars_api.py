"""Integration tests for webinar and live-stream endpoints."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import httpx
import pytest

from yadnus_site.domain.models.webinar import StreamingPlatform, StreamingStatus
from tests.factories import WebinarFactory

TRANSITION = "/youtube/v3/liveBroadcasts/transition"


@pytest.fixture
async def webinar(webinar_repository):
    return await webinar_repository.add(WebinarFactory())


@pytest.fixture
async def youtube_webinar(webinar_repository):
    webinar = WebinarFactory()
    webinar.attach_youtube_broadcast("bcast-123", "abcd-efgh-ijkl", {"platform": "youtube"})
    return await webinar_repository.add(webinar)


@pytest.fixture
async def zoom_webinar(webinar_repository):
    webinar = WebinarFactory()
    webinar.attach_zoom_meeting("85746352412", "s3cret", {"platform": "zoom"})
    return await webinar_repository.add(webinar)


async def mark_live(webinar_repository, webinar):
    webinar.mark_live()
    return await webinar_repository.update(webinar)


class TestWebinarCrud:
    """Webinar create, read and delete."""

    async def test_create_requires_admin(self, client):
        response = await client.post(
            "/api/webinars",
            json={"title": "T", "description": "D", "date": "2026-12-01T10:00:00Z"},
        )
        assert response.status_code == 401

    async def test_wrong_admin_key(self, client):
        response = await client.delete(
            f"/api/webinars/{uuid4()}", headers={"X-Admin-Key": "wrong"}
        )
        assert response.status_code == 401

    async def test_create_webinar(self, client, admin_headers):
        response = await client.post(
            "/api/webinars",
            headers=admin_headers,
            json={
                "title": "Sustainable Construction",
                "description": "Green building practices",
                "date": "2026-12-01T10:00:00Z",
                "speakers": ["A. Kulkarni"],
                "maxAttendees": 250,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Sustainable Construction"
        assert data["maxAttendees"] == 250
        assert data["streamingStatus"] == "scheduled"
        assert data["streamingPlatform"] is None
        assert data["isLive"] is False

    async def test_create_webinar_validation(self, client, admin_headers):
        response = await client.post(
            "/api/webinars", headers=admin_headers, json={"title": ""}
        )
        assert response.status_code == 422

    async def test_get_webinar(self, client, webinar):
        response = await client.get(f"/api/webinars/{webinar.id}")

        assert response.status_code == 200
        assert response.json()["id"] == str(webinar.id)

    async def test_get_unknown_webinar(self, client):
        response = await client.get(f"/api/webinars/{uuid4()}")
        assert response.status_code == 404

    async def test_upcoming_and_past(self, client, webinar_repository):
        now = datetime.now(timezone.utc)
        soon = await webinar_repository.add(WebinarFactory(date=now + timedelta(days=1)))
        later = await webinar_repository.add(WebinarFactory(date=now + timedelta(days=9)))
        past = await webinar_repository.add(WebinarFactory(date=now - timedelta(days=3)))

        upcoming = (await client.get("/api/webinars/upcoming")).json()
        previous = (await client.get("/api/webinars/past")).json()
        everything = (await client.get("/api/webinars")).json()

        assert [w["id"] for w in upcoming] == [str(soon.id), str(later.id)]
        assert [w["id"] for w in previous] == [str(past.id)]
        assert [w["id"] for w in everything] == [
            str(later.id),
            str(soon.id),
            str(past.id),
        ]

    async def test_delete_webinar(self, client, admin_headers, webinar):
        response = await client.delete(f"/api/webinars/{webinar.id}", headers=admin_headers)
        assert response.status_code == 204

        response = await client.delete(f"/api/webinars/{webinar.id}", headers=admin_headers)
        assert response.status_code == 404

    async def test_public_reads_hide_stream_secrets(
        self, client, youtube_webinar, zoom_webinar
    ):
        listed = (await client.get("/api/webinars")).json()
        single = (await client.get(f"/api/webinars/{zoom_webinar.id}")).json()

        assert len(listed) == 2
        for data in [*listed, single]:
            assert "youtubeStreamKey" not in data
            assert "zoomPassword" not in data
            assert "streamMetadata" not in data
        assert single["streamingPlatform"] == "zoom"

    async def test_admin_read_shows_stream_secrets(
        self, client, admin_headers, youtube_webinar
    ):
        response = await client.get(
            f"/api/admin/webinars/{youtube_webinar.id}", headers=admin_headers
        )
        listed = await client.get("/api/admin/webinars", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["youtubeStreamKey"] == "abcd-efgh-ijkl"
        assert response.json()["streamMetadata"] == {"platform": "youtube"}
        assert listed.json()[0]["youtubeStreamKey"] == "abcd-efgh-ijkl"

    async def test_admin_read_requires_admin(self, client, youtube_webinar):
        single = await client.get(f"/api/admin/webinars/{youtube_webinar.id}")
        listed = await client.get("/api/admin/webinars")

        assert single.status_code == 401
        assert listed.status_code == 401

    async def test_admin_read_unknown_webinar(self, client, admin_headers):
        response = await client.get(
            f"/api/admin/webinars/{uuid4()}", headers=admin_headers
        )
        assert response.status_code == 404

    async def test_update_webinar(
        self, client, admin_headers, youtube_webinar, webinar_repository
    ):
        response = await client.put(
            f"/api/webinars/{youtube_webinar.id}",
            headers=admin_headers,
            json={
                "title": "Rescheduled Talk",
                "date": "2026-12-15T09:30:00Z",
                "maxAttendees": 500,
                "streamingStatus": "live",
                "youtubeLiveId": "other",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Rescheduled Talk"
        assert data["maxAttendees"] == 500

        saved = await webinar_repository.get(youtube_webinar.id)
        assert saved.title == "Rescheduled Talk"
        assert saved.date == datetime(2026, 12, 15, 9, 30, tzinfo=timezone.utc)
        assert saved.description == youtube_webinar.description
        assert saved.streaming_status == StreamingStatus.SCHEDULED
        assert saved.youtube_live_id == "bcast-123"
        assert saved.stream_metadata == {"platform": "youtube"}

    async def test_update_can_clear_optional_fields(
        self, client, admin_headers, webinar_repository
    ):
        webinar = await webinar_repository.add(
            WebinarFactory(video_url="https://example.com/recording")
        )

        response = await client.put(
            f"/api/webinars/{webinar.id}", headers=admin_headers, json={"videoUrl": None}
        )

        assert response.status_code == 200
        assert (await webinar_repository.get(webinar.id)).video_url is None

    async def test_update_rejects_null_title(self, client, admin_headers, webinar):
        response = await client.put(
            f"/api/webinars/{webinar.id}", headers=admin_headers, json={"title": None}
        )
        assert response.status_code == 422

    async def test_update_unknown_webinar(self, client, admin_headers):
        response = await client.put(
            f"/api/webinars/{uuid4()}", headers=admin_headers, json={"title": "New"}
        )
        assert response.status_code == 404

    async def test_update_requires_admin(self, client, webinar):
        response = await client.put(
            f"/api/webinars/{webinar.id}", json={"title": "New"}
        )
        assert response.status_code == 401


class TestStreamSetup:
    """YouTube and Zoom provisioning."""

    async def test_setup_youtube(
        self, client, admin_headers, platform, webinar, webinar_repository
    ):
        platform.youtube_setup_succeeds()

        response = await client.post(
            f"/api/webinars/{webinar.id}/setup-youtube",
            headers=admin_headers,
            json={"youtubeAccessToken": "ya29.token", "youtubeRefreshToken": "1//refresh"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["platform"] == "youtube"
        for key in ("broadcastId", "streamId", "watchUrl", "streamKey", "rtmpUrl"):
            assert data[key]

        saved = await webinar_repository.get(webinar.id)
        assert saved.streaming_platform == StreamingPlatform.YOUTUBE
        assert saved.streaming_status == StreamingStatus.SCHEDULED
        assert saved.youtube_live_id == "bcast-123"
        assert saved.youtube_stream_key == "abcd-efgh-ijkl"
        assert all(
            request.headers["Authorization"] == "Bearer ya29.token"
            for request in platform.requests
        )

    async def test_setup_youtube_requires_token(self, client, admin_headers, platform, webinar):
        response = await client.post(
            f"/api/webinars/{webinar.id}/setup-youtube", headers=admin_headers, json={}
        )

        assert response.status_code == 422
        assert platform.requests == []

    async def test_setup_zoom(self, client, admin_headers, platform, webinar, webinar_repository):
        platform.zoom_setup_succeeds()

        response = await client.post(
            f"/api/webinars/{webinar.id}/setup-zoom",
            headers=admin_headers,
            json={"password": "s3cret", "settings": {"waiting_room": True}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["platform"] == "zoom"
        assert data["meetingId"] == "85746352412"
        assert data["joinUrl"] == "https://zoom.us/j/85746352412"

        saved = await webinar_repository.get(webinar.id)
        assert saved.streaming_platform == StreamingPlatform.ZOOM
        assert saved.zoom_meeting_id == "85746352412"
        assert saved.zoom_password == "s3cret"

        (request,) = platform.calls("POST", "/v2/users/me/meetings")
        body = platform.json_body(request)
        assert body["topic"] == webinar.title
        assert body["settings"]["waiting_room"] is True

    async def test_setup_zoom_without_body(self, client, admin_headers, platform, webinar):
        platform.zoom_setup_succeeds()

        response = await client.post(
            f"/api/webinars/{webinar.id}/setup-zoom", headers=admin_headers
        )

        assert response.status_code == 200

    async def test_setup_unknown_webinar(self, client, admin_headers, platform):
        platform.zoom_setup_succeeds()

        response = await client.post(
            f"/api/webinars/{uuid4()}/setup-zoom", headers=admin_headers, json={}
        )

        assert response.status_code == 404
        assert platform.requests == []

    async def test_bind_failure_persists_nothing(
        self, client, admin_headers, platform, webinar, webinar_repository
    ):
        platform.youtube_setup_succeeds()
        platform.reply(
            "POST",
            "/youtube/v3/liveBroadcasts/bind",
            httpx.Response(403, json={"error": {"message": "Stream is already bound"}}),
        )

        response = await client.post(
            f"/api/webinars/{webinar.id}/setup-youtube",
            headers=admin_headers,
            json={"youtubeAccessToken": "ya29.token"},
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to setup YouTube Live stream"}

        saved = await webinar_repository.get(webinar.id)
        assert saved.youtube_live_id is None
        assert saved.youtube_stream_key is None
        assert saved.streaming_platform is None
        assert saved.stream_metadata is None

    async def test_setup_refused_while_live(
        self, client, admin_headers, platform, zoom_webinar, webinar_repository
    ):
        await mark_live(webinar_repository, zoom_webinar)

        response = await client.post(
            f"/api/webinars/{zoom_webinar.id}/setup-zoom", headers=admin_headers, json={}
        )

        assert response.status_code == 409
        assert platform.requests == []

    async def test_stream_metadata_round_trips(
        self, client, admin_headers, platform, webinar
    ):
        platform.youtube_setup_succeeds()

        setup = await client.post(
            f"/api/webinars/{webinar.id}/setup-youtube",
            headers=admin_headers,
            json={"youtubeAccessToken": "ya29.token"},
        )
        fetched = await client.get(
            f"/api/admin/webinars/{webinar.id}", headers=admin_headers
        )

        assert fetched.json()["streamMetadata"] == setup.json()


class TestStreamControl:
    """Starting and ending streams."""

    async def test_start_before_setup(self, client, admin_headers, platform, webinar):
        response = await client.post(
            f"/api/webinars/{webinar.id}/start-stream", headers=admin_headers, json={}
        )

        assert response.status_code == 400
        assert platform.requests == []

    async def test_end_before_setup(self, client, admin_headers, platform, webinar):
        response = await client.post(
            f"/api/webinars/{webinar.id}/end-stream", headers=admin_headers
        )

        assert response.status_code == 400
        assert platform.requests == []

    async def test_start_unknown_webinar(self, client, admin_headers):
        response = await client.post(
            f"/api/webinars/{uuid4()}/start-stream", headers=admin_headers, json={}
        )
        assert response.status_code == 404

    async def test_start_youtube(
        self, client, admin_headers, platform, youtube_webinar, webinar_repository
    ):
        platform.youtube_transition_succeeds()

        response = await client.post(
            f"/api/webinars/{youtube_webinar.id}/start-stream",
            headers=admin_headers,
            json={"youtubeAccessToken": "ya29.token"},
        )

        assert response.status_code == 200
        (request,) = platform.calls("POST", TRANSITION)
        assert request.url.params["broadcastStatus"] == "live"
        assert request.url.params["id"] == "bcast-123"

        saved = await webinar_repository.get(youtube_webinar.id)
        assert saved.streaming_status == StreamingStatus.LIVE
        assert saved.is_live is True
        assert saved.stream_metadata == {"platform": "youtube"}

    async def test_start_zoom_reads_meeting(
        self, client, admin_headers, platform, zoom_webinar
    ):
        platform.zoom_auth_succeeds()
        platform.reply(
            "GET",
            "/v2/meetings/85746352412",
            httpx.Response(200, json={"id": 85746352412, "status": "waiting"}),
        )

        response = await client.post(
            f"/api/webinars/{zoom_webinar.id}/start-stream", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "waiting"

    async def test_end_youtube_completes_broadcast(
        self, client, admin_headers, platform, youtube_webinar, webinar_repository
    ):
        await mark_live(webinar_repository, youtube_webinar)
        platform.youtube_transition_succeeds()

        response = await client.post(
            f"/api/webinars/{youtube_webinar.id}/end-stream",
            headers=admin_headers,
            json={"youtubeAccessToken": "ya29.token"},
        )

        assert response.status_code == 200
        (request,) = platform.calls("POST", TRANSITION)
        assert request.url.params["broadcastStatus"] == "complete"
        assert [r for r in platform.requests if r.method == "DELETE"] == []

        saved = await webinar_repository.get(youtube_webinar.id)
        assert saved.streaming_status == StreamingStatus.ENDED
        assert saved.is_live is False

    async def test_end_zoom_deletes_meeting(
        self, client, admin_headers, platform, zoom_webinar, webinar_repository
    ):
        await mark_live(webinar_repository, zoom_webinar)
        platform.zoom_auth_succeeds()
        platform.reply("DELETE", "/v2/meetings/85746352412", httpx.Response(204))

        response = await client.post(
            f"/api/webinars/{zoom_webinar.id}/end-stream", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert len(platform.calls("DELETE", "/v2/meetings/85746352412")) == 1
        assert platform.calls("POST", TRANSITION) == []

    async def test_end_before_start_is_conflict(
        self, client, admin_headers, platform, youtube_webinar
    ):
        response = await client.post(
            f"/api/webinars/{youtube_webinar.id}/end-stream",
            headers=admin_headers,
            json={"youtubeAccessToken": "ya29.token"},
        )

        assert response.status_code == 409
        assert platform.requests == []

    async def test_repeated_start_reaches_platform(
        self, client, admin_headers, platform, youtube_webinar
    ):
        attempts = []

        def transition(request):
            attempts.append(request)
            if len(attempts) == 1:
                return httpx.Response(200, json={"id": "bcast-123"})
            return httpx.Response(
                403,
                json={
                    "error": {
                        "code": 403,
                        "message": "Invalid transition",
                        "errors": [{"reason": "redundantTransition"}],
                    }
                },
            )

        platform.reply("POST", TRANSITION, transition)
        url = f"/api/webinars/{youtube_webinar.id}/start-stream"
        body = {"youtubeAccessToken": "ya29.token"}

        first = await client.post(url, headers=admin_headers, json=body)
        second = await client.post(url, headers=admin_headers, json=body)

        assert first.status_code == 200
        assert second.status_code == 500
        assert second.json() == {"detail": "Failed to start live stream"}
        assert len(attempts) == 2

    @pytest.mark.parametrize("action", ["start-stream", "end-stream"])
    async def test_youtube_stream_control_needs_token(
        self,
        client,
        admin_headers,
        platform,
        youtube_webinar,
        webinar_repository,
        action,
    ):
        await mark_live(webinar_repository, youtube_webinar)

        response = await client.post(
            f"/api/webinars/{youtube_webinar.id}/{action}", headers=admin_headers
        )

        assert response.status_code == 400
        assert "access token" in response.json()["detail"]
        assert platform.requests == []

    async def test_setup_token_is_not_reused_for_start(
        self, client, admin_headers, platform, webinar
    ):
        platform.youtube_setup_succeeds()
        platform.youtube_transition_succeeds()
        await client.post(
            f"/api/webinars/{webinar.id}/setup-youtube",
            headers=admin_headers,
            json={"youtubeAccessToken": "ya29.token"},
        )

        response = await client.post(
            f"/api/webinars/{webinar.id}/start-stream", headers=admin_headers
        )

        assert response.status_code == 400
        assert platform.calls("POST", TRANSITION) == []
