"""SMTP email client."""

import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
import structlog

from ..config.config import Settings

logger = structlog.get_logger()


class EmailClient:
    """Low-level SMTP email client.

    Sending is a no-op unless ``email_enabled`` is set. Failures are logged
    and reported as ``False``; they are never raised.
    """

    def __init__(self, settings: Settings):
        """Initialize email client with settings."""
        self.settings = settings
        self.enabled = settings.email_enabled

    @property
    def sender(self) -> str:
        return f"{self.settings.email_from_name} <{self.settings.email_from_address}>"

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: str,
        to_name: Optional[str] = None,
    ) -> bool:
        """Send a multipart text/HTML email.

        Args:
            to_email: Recipient email address
            subject: Email subject
            html_content: HTML body
            text_content: Plain text body
            to_name: Recipient display name

        Returns:
            True if the email was handed to the SMTP server, False otherwise
        """
        if not self.enabled:
            logger.warning(
                "Email sending disabled, skipping email",
                to_email=to_email,
                subject=subject,
            )
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = f"{to_name} <{to_email}>" if to_name else to_email
        msg.attach(MIMEText(text_content, "plain"))
        msg.attach(MIMEText(html_content, "html"))

        try:
            self._send_smtp_email(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Failed to send email",
                to_email=to_email,
                subject=subject,
                error=str(e),
            )
            return False

        logger.info("Email sent", to_email=to_email, subject=subject)
        return True

    def _send_smtp_email(self, message: MIMEMultipart) -> None:
        smtp_class = smtplib.SMTP_SSL if self.settings.email_use_ssl else smtplib.SMTP

        with smtp_class(self.settings.email_host, self.settings.email_port) as server:
            if self.settings.email_use_tls and not self.settings.email_use_ssl:
                server.starttls()

            if self.settings.email_username and self.settings.email_password:
                server.login(self.settings.email_username, self.settings.email_password)

            server.send_message(message)
