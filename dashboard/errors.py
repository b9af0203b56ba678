"""Exceptions raised by the dashboard API layer."""
from typing import Optional


class DashboardError(Exception):
    """Base class for dashboard client errors."""


class SessionExpiredError(DashboardError):
    """The backend rejected the stored credential; the session was torn down."""

    def __init__(self, message: str = "Session expired. Please login again."):
        super().__init__(message)


class ApiError(DashboardError):
    """Non-2xx response surfaced by a caller that wanted decoded JSON."""

    def __init__(self, status_code: int, message: str, payload: Optional[object] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload


class InvalidCredentialsError(ApiError):
    pass
