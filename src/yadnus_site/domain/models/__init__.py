"""Domain models."""

from .submission import Submission, SubmissionType
from .webinar import StreamingPlatform, StreamingStatus, Webinar

__all__ = [
    "StreamingPlatform",
    "StreamingStatus",
    "Submission",
    "SubmissionType",
    "Webinar",
]
