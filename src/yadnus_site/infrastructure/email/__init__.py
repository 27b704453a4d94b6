"""Email infrastructure."""

from .email_client import EmailClient
from .email_templates import EmailTemplates

__all__ = ["EmailClient", "EmailTemplates"]
