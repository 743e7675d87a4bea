"""
Error types for Webseiten-Check.

Every failure the visitor can see is a CheckError carrying the HTTP status,
a short German error title and optional details.
"""

from typing import Optional


class CheckError(Exception):
    """Base error surfaced to the visitor as ``{error, details}``."""

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(details or error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    @property
    def message(self) -> str:
        """Most specific human-readable message"""
        return self.details or self.error

    def to_dict(self) -> dict:
        payload = {"error": self.error}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(CheckError):
    """Missing or invalid server configuration (e.g. API credential)."""

    status_code = 500


class InputValidationError(CheckError):
    """The visitor's input cannot be analyzed."""

    status_code = 400


class UpstreamError(CheckError):
    """Browser, target site or language model failed."""

    status_code = 500


class BrowserLaunchError(UpstreamError):
    pass


class NavigationTimeoutError(UpstreamError):
    pass


class ScoringCallError(UpstreamError):
    pass


class ScoringParseError(UpstreamError):
    pass


class InvalidTransitionError(RuntimeError):
    """Report flow action called from the wrong step."""
