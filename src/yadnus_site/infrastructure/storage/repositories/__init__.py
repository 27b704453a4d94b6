"""Repository implementations."""

from .submission import SubmissionRepository
from .webinar import WebinarRepository

__all__ = [
    "SubmissionRepository",
    "WebinarRepository",
]
