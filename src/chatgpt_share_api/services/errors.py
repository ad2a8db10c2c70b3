"""
Share API errors module.

Holds the exceptions raised while fetching a shared conversation. Each error carries the
HTTP status the request handler maps it to.
"""

from typing import Any


class ShareAPIError(Exception):
    """Base class for errors surfaced to the HTTP caller."""

    status_code = 500
    error = "Failed to fetch the page"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ValidationError(ShareAPIError):
    """Raised when shareUrl is missing or is not a recognised share link."""

    status_code = 400
    error = "Please provide a valid ChatGPT share link"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error}


class ResourceError(ShareAPIError):
    """Raised when the browser process cannot be launched or crashes."""


class NavigationError(ShareAPIError):
    """Raised when the share page cannot be loaded (network, DNS or navigation timeout)."""


class ExtractionDegradation(ShareAPIError):
    """Raised when no messages could be extracted and empty results are configured as errors."""

    status_code = 422
    error = "No conversation messages found"

    def __init__(self, message: str, debug: dict[str, int] | None = None) -> None:
        super().__init__(message)
        self.debug = debug or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message, "debug": self.debug}
