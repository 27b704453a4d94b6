"""Webinar endpoints, including live-stream provisioning."""

import dataclasses
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...application.services.webinar_streaming import WebinarStreamingService
from ...domain.exceptions import (
    InvalidStreamTransitionError,
    StreamCredentialsRequiredError,
    StreamNotConfiguredError,
    WebinarError,
    WebinarNotFoundError,
)
from ...domain.models.webinar import Webinar
from ...infrastructure.storage.repositories import WebinarRepository
from ...infrastructure.streaming.base import StreamingError
from ..dependencies import (
    get_webinar_repository,
    get_webinar_streaming_service,
    require_admin,
)
from ..schemas.streaming import (
    StreamControlRequest,
    YouTubeSetupRequest,
    ZoomSetupRequest,
)
from ..schemas.webinars import (
    PublicWebinarResponse,
    WebinarCreateRequest,
    WebinarResponse,
    WebinarUpdateRequest,
)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])
logger = structlog.get_logger()


@router.get("", response_model=List[PublicWebinarResponse])
async def list_webinars(
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """List all webinars, most recent first."""
    return await webinar_repository.list_all()


@router.get("/upcoming", response_model=List[PublicWebinarResponse])
async def list_upcoming_webinars(
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """List webinars that have not started yet, soonest first."""
    return await webinar_repository.list_upcoming()


@router.get("/past", response_model=List[PublicWebinarResponse])
async def list_past_webinars(
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """List webinars whose date has passed, most recent first."""
    return await webinar_repository.list_past()


@router.get("/{webinar_id}", response_model=PublicWebinarResponse)
async def get_webinar(
    webinar_id: UUID,
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """Get a webinar by ID.

    Args:
        webinar_id: Webinar to fetch.
        webinar_repository: Webinar data repository.

    Returns:
        The webinar without its stream key, meeting password or metadata.

    """
    webinar = await webinar_repository.get(webinar_id)
    if not webinar:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Webinar not found"
        )
    return webinar


@router.post(
    "",
    response_model=WebinarResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_webinar(
    request: WebinarCreateRequest,
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """Create a webinar."""
    webinar = await webinar_repository.add(Webinar(**request.model_dump()))

    logger.info("Webinar created", webinar_id=str(webinar.id), title=webinar.title)
    return webinar


@router.put(
    "/{webinar_id}",
    response_model=WebinarResponse,
    dependencies=[Depends(require_admin)],
)
async def update_webinar(
    webinar_id: UUID,
    request: WebinarUpdateRequest,
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """Reschedule, retitle or otherwise edit a webinar.

    Already provisioned broadcasts and meetings keep the title and start
    time they were created with.
    """
    webinar = await webinar_repository.get(webinar_id)
    if not webinar:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Webinar not found"
        )

    changes = request.model_dump(exclude_unset=True)
    webinar = await webinar_repository.update(dataclasses.replace(webinar, **changes))

    logger.info("Webinar updated", webinar_id=str(webinar_id), fields=sorted(changes))
    return webinar


@router.delete(
    "/{webinar_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_webinar(
    webinar_id: UUID,
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """Delete a webinar together with its streaming fields.

    Provisioned platform resources are left as they are.
    """
    if not await webinar_repository.delete(webinar_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Webinar not found"
        )

    logger.info("Webinar deleted", webinar_id=str(webinar_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{webinar_id}/setup-youtube", dependencies=[Depends(require_admin)])
async def setup_youtube_stream(
    webinar_id: UUID,
    request: YouTubeSetupRequest,
    streaming: WebinarStreamingService = Depends(get_webinar_streaming_service),
) -> Dict[str, Any]:
    """Provision a YouTube Live broadcast and ingest stream for a webinar.

    Args:
        webinar_id: Webinar to provision.
        request: The admin's YouTube OAuth tokens.
        streaming: Webinar streaming workflow service.

    Returns:
        Broadcast id, stream id, watch URL, stream key and RTMP URL.

    """
    try:
        return await streaming.setup_youtube(
            webinar_id,
            access_token=request.youtube_access_token,
            refresh_token=request.youtube_refresh_token,
        )
    except (WebinarError, StreamingError) as e:
        raise _to_http_error(
            e, webinar_id, "Failed to setup YouTube Live stream"
        ) from e


@router.post("/{webinar_id}/setup-zoom", dependencies=[Depends(require_admin)])
async def setup_zoom_meeting(
    webinar_id: UUID,
    request: Optional[ZoomSetupRequest] = None,
    streaming: WebinarStreamingService = Depends(get_webinar_streaming_service),
) -> Dict[str, Any]:
    """Provision a Zoom meeting for a webinar.

    Returns:
        Meeting id, join URL, start URL, password and meeting number.

    """
    request = request or ZoomSetupRequest()
    try:
        return await streaming.setup_zoom(
            webinar_id, password=request.password, settings=request.settings
        )
    except (WebinarError, StreamingError) as e:
        raise _to_http_error(e, webinar_id, "Failed to setup Zoom meeting") from e


@router.post("/{webinar_id}/start-stream", dependencies=[Depends(require_admin)])
async def start_stream(
    webinar_id: UUID,
    request: Optional[StreamControlRequest] = None,
    streaming: WebinarStreamingService = Depends(get_webinar_streaming_service),
) -> Dict[str, Any]:
    """Take the webinar's configured stream live.

    YouTube streams need ``youtubeAccessToken`` in the body; without it the
    request is refused with 400.

    Returns:
        The platform's reply.

    """
    request = request or StreamControlRequest()
    try:
        return await streaming.start_stream(
            webinar_id,
            access_token=request.youtube_access_token,
            refresh_token=request.youtube_refresh_token,
        )
    except (WebinarError, StreamingError) as e:
        raise _to_http_error(e, webinar_id, "Failed to start live stream") from e


@router.post("/{webinar_id}/end-stream", dependencies=[Depends(require_admin)])
async def end_stream(
    webinar_id: UUID,
    request: Optional[StreamControlRequest] = None,
    streaming: WebinarStreamingService = Depends(get_webinar_streaming_service),
) -> Dict[str, Any]:
    """End the webinar's live stream. For Zoom this deletes the meeting."""
    request = request or StreamControlRequest()
    try:
        return await streaming.end_stream(
            webinar_id,
            access_token=request.youtube_access_token,
            refresh_token=request.youtube_refresh_token,
        )
    except (WebinarError, StreamingError) as e:
        raise _to_http_error(e, webinar_id, "Failed to end live stream") from e


@admin_router.get("", response_model=List[WebinarResponse])
async def list_webinars_for_admin(
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """List all webinars with their stream secrets and setup metadata."""
    return await webinar_repository.list_all()


@admin_router.get("/{webinar_id}", response_model=WebinarResponse)
async def get_webinar_for_admin(
    webinar_id: UUID,
    webinar_repository: WebinarRepository = Depends(get_webinar_repository),
):
    """Get a webinar with its stream key, meeting password and setup metadata."""
    webinar = await webinar_repository.get(webinar_id)
    if not webinar:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Webinar not found"
        )
    return webinar


def _to_http_error(error: Exception, webinar_id: UUID, failure: str) -> HTTPException:
    """Map a workflow or platform error onto an HTTP error.

    Platform details stay in the server log; the client gets ``failure``.
    """
    if isinstance(error, WebinarNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, StreamCredentialsRequiredError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, StreamNotConfiguredError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Stream not configured"
        )
    if isinstance(error, InvalidStreamTransitionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))

    logger.error(failure, webinar_id=str(webinar_id), error=str(error), exc_info=error)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure
    )
