"""Domain-specific exceptions.

These represent webinar business-rule violations. They carry enough context
for the API layer to pick a status code and for logs to identify the record.
"""

from typing import Any


class WebinarError(Exception):
    """Base exception for webinar rule violations."""


class WebinarNotFoundError(WebinarError):
    """Raised when a webinar does not exist."""

    def __init__(self, webinar_id: Any):
        self.webinar_id = webinar_id
        super().__init__(f"Webinar with ID '{webinar_id}' not found")


class StreamNotConfiguredError(WebinarError):
    """Raised when start/end is requested before any platform was set up."""

    def __init__(self, webinar_id: Any):
        self.webinar_id = webinar_id
        super().__init__(f"Stream not configured for webinar '{webinar_id}'")


class InvalidStreamTransitionError(WebinarError):
    """Raised when a streaming status change would skip or reverse a state."""

    def __init__(self, webinar_id: Any, current: str, target: str):
        self.webinar_id = webinar_id
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move webinar '{webinar_id}' stream from '{current}' to '{target}'"
        )


class StreamCredentialsRequiredError(WebinarError):
    """Raised when a YouTube stream is driven without the admin's access token."""

    def __init__(self, webinar_id: Any):
        self.webinar_id = webinar_id
        super().__init__(f"YouTube access token required for webinar '{webinar_id}'")
