"""Public form and submission schemas."""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from ...domain.models.submission import SubmissionType
from .base import CamelModel


class ContactForm(CamelModel):
    """Contact form."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    project_type: Optional[str] = None
    message: str = Field(..., min_length=1)


class WebinarSignupForm(CamelModel):
    """Webinar registration form."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    company: Optional[str] = None
    job_title: Optional[str] = None
    how_hear_about_us: Optional[str] = None
    webinar_id: UUID


class ProjectInquiryForm(CamelModel):
    """Project inquiry form."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    budget_range: Optional[str] = None
    description: str = Field(..., min_length=1)


class SubmissionResponse(CamelModel):
    """Stored form submission."""

    id: UUID
    type: SubmissionType
    payload: Dict[str, Any]
    created_at: datetime


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
