"""Submission domain model - a captured public form."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class SubmissionType(str, Enum):
    """Kind of form that produced the submission."""

    CONTACT = "contact"
    PROJECT = "project"
    WEBINAR = "webinar"


@dataclass
class Submission:
    """Form submission stored for the admin inbox."""

    id: UUID = field(default_factory=uuid4)
    type: SubmissionType = SubmissionType.CONTACT
    payload: dict = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
