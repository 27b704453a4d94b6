"""Public form endpoints and the admin submission inbox."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...application.services.submission_service import SubmissionService
from ...domain.exceptions import WebinarNotFoundError
from ...domain.models.submission import SubmissionType
from ..dependencies import get_submission_service, require_admin
from ..schemas.submissions import (
    ContactForm,
    MessageResponse,
    ProjectInquiryForm,
    SubmissionResponse,
    WebinarSignupForm,
)

router = APIRouter()


@router.post(
    "/webinar-signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def webinar_signup(
    form: WebinarSignupForm,
    submission_service: SubmissionService = Depends(get_submission_service),
):
    """Register for a webinar.

    Args:
        form: Registrant details and the webinar ID.
        submission_service: Form capture service.

    Returns:
        MessageResponse acknowledging the registration.

    """
    try:
        await submission_service.register_for_webinar(
            form.webinar_id, form.model_dump(mode="json", by_alias=True)
        )
    except WebinarNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Webinar not found"
        )

    return MessageResponse(message="Webinar registration successful")


@router.post(
    "/contact",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact(
    form: ContactForm,
    submission_service: SubmissionService = Depends(get_submission_service),
):
    """Submit the contact form."""
    await submission_service.submit_contact(form.model_dump(mode="json", by_alias=True))
    return MessageResponse(message="Contact form submitted successfully")


@router.post(
    "/project-inquiry",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_project_inquiry(
    form: ProjectInquiryForm,
    submission_service: SubmissionService = Depends(get_submission_service),
):
    """Submit a project inquiry."""
    await submission_service.submit_project_inquiry(
        form.model_dump(mode="json", by_alias=True)
    )
    return MessageResponse(message="Project inquiry submitted successfully")


@router.get(
    "/admin/submissions",
    response_model=List[SubmissionResponse],
    dependencies=[Depends(require_admin)],
)
async def list_submissions(
    type: Optional[SubmissionType] = None,
    submission_service: SubmissionService = Depends(get_submission_service),
):
    """List form submissions, newest first, optionally of one type."""
    return await submission_service.list_submissions(type)


@router.delete(
    "/admin/submissions/{submission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_submission(
    submission_id: UUID,
    submission_service: SubmissionService = Depends(get_submission_service),
):
    """Delete a form submission."""
    if not await submission_service.delete_submission(submission_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
