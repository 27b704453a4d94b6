"""Public form capture: contact, webinar sign-up and project inquiry."""

from typing import Any, Dict, Optional
from uuid import UUID

import structlog

from ...domain.exceptions import WebinarNotFoundError
from ...domain.models.submission import Submission, SubmissionType
from ...infrastructure.config.config import Settings
from ...infrastructure.email import EmailClient, EmailTemplates
from ...infrastructure.storage.repositories import (
    SubmissionRepository,
    WebinarRepository,
)

logger = structlog.get_logger()


class SubmissionService:
    """Stores form submissions and sends the matching notification.

    Payloads are stored exactly as the form sent them. A failed notification
    is logged by the email client and never fails the submission.
    """

    def __init__(
        self,
        submission_repository: SubmissionRepository,
        webinar_repository: WebinarRepository,
        email_client: EmailClient,
        settings: Settings,
    ):
        """Initialize with dependencies."""
        self.submission_repository = submission_repository
        self.webinar_repository = webinar_repository
        self.email_client = email_client
        self.settings = settings

    async def submit_contact(self, payload: Dict[str, Any]) -> Submission:
        """Store a contact form and notify the site admin."""
        submission = await self.submission_repository.add(
            Submission(type=SubmissionType.CONTACT, payload=payload)
        )

        html, text = EmailTemplates.render_contact_notification(
            {
                "name": payload["name"],
                "email": payload["email"],
                "phone": payload.get("phone"),
                "project_type": payload.get("projectType"),
                "message": payload["message"],
            }
        )
        self.email_client.send_email(
            to_email=self.settings.admin_email,
            subject="New Contact Form Submission - Yadnus Consultant",
            html_content=html,
            text_content=text,
        )

        logger.info("Contact form submitted", submission_id=str(submission.id))
        return submission

    async def register_for_webinar(
        self, webinar_id: UUID, payload: Dict[str, Any]
    ) -> Submission:
        """Register someone for a webinar.

        Stores the sign-up, bumps the webinar's registration count and sends
        the registrant a confirmation.

        Raises:
            WebinarNotFoundError: If the webinar does not exist
        """
        webinar = await self.webinar_repository.get(webinar_id)
        if not webinar:
            raise WebinarNotFoundError(webinar_id)

        submission = await self.submission_repository.add(
            Submission(type=SubmissionType.WEBINAR, payload=payload)
        )
        await self.webinar_repository.increment_registration(webinar.id)

        html, text = EmailTemplates.render_webinar_confirmation(
            {"name": payload["name"], "webinar_title": webinar.title}
        )
        self.email_client.send_email(
            to_email=payload["email"],
            to_name=payload["name"],
            subject=f"Webinar Registration Confirmed - {webinar.title}",
            html_content=html,
            text_content=text,
        )

        logger.info(
            "Webinar registration submitted",
            submission_id=str(submission.id),
            webinar_id=str(webinar.id),
        )
        return submission

    async def submit_project_inquiry(self, payload: Dict[str, Any]) -> Submission:
        """Store a project inquiry and notify the site admin."""
        submission = await self.submission_repository.add(
            Submission(type=SubmissionType.PROJECT, payload=payload)
        )

        html, text = EmailTemplates.render_project_inquiry(
            {
                "name": payload["name"],
                "email": payload["email"],
                "budget_range": payload.get("budgetRange"),
                "description": payload["description"],
            }
        )
        self.email_client.send_email(
            to_email=self.settings.admin_email,
            subject="New Project Inquiry - Yadnus Consultant",
            html_content=html,
            text_content=text,
        )

        logger.info("Project inquiry submitted", submission_id=str(submission.id))
        return submission

    async def list_submissions(
        self, type: Optional[SubmissionType] = None
    ) -> list[Submission]:
        """List submissions for the admin inbox, newest first."""
        return await self.submission_repository.list(type)

    async def delete_submission(self, submission_id: UUID) -> bool:
        """Delete a submission; False if it did not exist."""
        deleted = await self.submission_repository.delete(submission_id)
        if deleted:
            logger.info("Submission deleted", submission_id=str(submission_id))
        return deleted
