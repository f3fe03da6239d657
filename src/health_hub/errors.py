"""Exceptions raised by the Health Hub core."""
from typing import Optional


class HealthHubError(Exception):
    """Base class for Health Hub errors."""


class InputValidationError(HealthHubError):
    """Local validation failed; no request was sent."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class RemoteError(HealthHubError):
    """The remote backend rejected or failed a request."""

    def __init__(self, message: str, status_code: Optional[int] = None, path: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.path = path


class RemoteUnavailableError(RemoteError):
    """The remote backend could not be reached or timed out."""

    def __init__(self, message: str, path: str = "", timed_out: bool = False):
        super().__init__(message, status_code=None, path=path)
        self.timed_out = timed_out


class SessionExpiredError(HealthHubError):
    """The backend answered 401; the session has been cleared."""

    def __init__(self, message: str = "Session expired. Please sign in again."):
        super().__init__(message)
        self.message = message
