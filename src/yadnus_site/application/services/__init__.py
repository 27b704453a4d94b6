"""Application services."""

from .streaming_service import StreamingService
from .submission_service import SubmissionService
from .webinar_streaming import WebinarStreamingService

__all__ = [
    "StreamingService",
    "SubmissionService",
    "WebinarStreamingService",
]
