"""Notification email templates."""

from html import escape
from string import Template
from typing import Any, Dict

_HTML_LAYOUT = Template("""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>${title}</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background-color: #1f3a5f; color: white; padding: 20px; text-align: center; }
        .content { padding: 20px; background-color: #f9f9f9; }
        .footer { padding: 20px; text-align: center; font-size: 12px; color: #666; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Yadnus Consultant</h1>
        </div>
        <div class="content">
${body}
        </div>
        <div class="footer">
            <p>Yadnus Consultant - Town Planning &amp; Construction Management</p>
        </div>
    </div>
</body>
</html>
""")


class EmailTemplates:
    """Email template definitions."""

    CONTACT_NOTIFICATION_HTML = Template("""
            <h2>New Contact Form Submission</h2>
            <p><strong>Name:</strong> ${name}</p>
            <p><strong>Email:</strong> ${email}</p>
            <p><strong>Phone:</strong> ${phone}</p>
            <p><strong>Project Type:</strong> ${project_type}</p>
            <p><strong>Message:</strong></p>
            <p>${message}</p>
""")

    CONTACT_NOTIFICATION_TEXT = Template("""
New Contact Form Submission

Name: ${name}
Email: ${email}
Phone: ${phone}
Project Type: ${project_type}

Message:
${message}
""")

    WEBINAR_CONFIRMATION_HTML = Template("""
            <h2>Webinar Registration Confirmation</h2>
            <p>Dear ${name},</p>
            <p>Thank you for registering for our webinar: <strong>${webinar_title}</strong></p>
            <p>You will receive joining instructions closer to the event date.</p>
            <p>Best regards,<br>Yadnus Consultant Team</p>
""")

    WEBINAR_CONFIRMATION_TEXT = Template("""
Dear ${name},

Thank you for registering for our webinar: ${webinar_title}

You will receive joining instructions closer to the event date.

Best regards,
Yadnus Consultant Team
""")

    PROJECT_INQUIRY_HTML = Template("""
            <h2>New Project Inquiry</h2>
            <p><strong>Name:</strong> ${name}</p>
            <p><strong>Email:</strong> ${email}</p>
            <p><strong>Budget Range:</strong> ${budget_range}</p>
            <p><strong>Description:</strong></p>
            <p>${description}</p>
""")

    PROJECT_INQUIRY_TEXT = Template("""
New Project Inquiry

Name: ${name}
Email: ${email}
Budget Range: ${budget_range}

Description:
${description}
""")

    @staticmethod
    def render_contact_notification(data: Dict[str, Any]) -> tuple[str, str]:
        """Render the admin notification for a contact form.

        Args:
            data: Template data containing name, email, phone, project_type, message

        Returns:
            Tuple of (html_content, text_content)
        """
        data = {
            **data,
            "phone": data.get("phone") or "Not provided",
            "project_type": data.get("project_type") or "Not specified",
        }
        return EmailTemplates._render(
            "New Contact Form Submission",
            EmailTemplates.CONTACT_NOTIFICATION_HTML,
            EmailTemplates.CONTACT_NOTIFICATION_TEXT,
            data,
        )

    @staticmethod
    def render_webinar_confirmation(data: Dict[str, Any]) -> tuple[str, str]:
        """Render the registrant's webinar confirmation.

        Args:
            data: Template data containing name, webinar_title

        Returns:
            Tuple of (html_content, text_content)
        """
        return EmailTemplates._render(
            "Webinar Registration Confirmation",
            EmailTemplates.WEBINAR_CONFIRMATION_HTML,
            EmailTemplates.WEBINAR_CONFIRMATION_TEXT,
            data,
        )

    @staticmethod
    def render_project_inquiry(data: Dict[str, Any]) -> tuple[str, str]:
        """Render the admin notification for a project inquiry."""
        data = {**data, "budget_range": data.get("budget_range") or "Not specified"}
        return EmailTemplates._render(
            "New Project Inquiry",
            EmailTemplates.PROJECT_INQUIRY_HTML,
            EmailTemplates.PROJECT_INQUIRY_TEXT,
            data,
        )

    @staticmethod
    def _render(
        title: str, html: Template, text: Template, data: Dict[str, Any]
    ) -> tuple[str, str]:
        # Form input ends up in HTML
        escaped = {key: escape(str(value)) for key, value in data.items()}
        body = html.safe_substitute(**escaped)
        return (
            _HTML_LAYOUT.safe_substitute(title=title, body=body),
            text.safe_substitute(**data),
        )
