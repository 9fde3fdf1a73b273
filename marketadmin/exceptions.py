"""Domain errors raised by the service layer.

Routers translate them to HTTP responses with ``raise_http``.
"""

from fastapi import HTTPException, status


class ModerationError(Exception):
    """Base class for service-layer failures."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ModerationError, LookupError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailed(ModerationError, ValueError):
    status_code = status.HTTP_400_BAD_REQUEST


class ReportAlreadyClosed(ModerationError):
    status_code = status.HTTP_409_CONFLICT


class InvalidTransition(ModerationError):
    status_code = status.HTTP_409_CONFLICT


class ConcurrentUpdateError(ModerationError):
    status_code = status.HTTP_409_CONFLICT


def raise_http(exc: ModerationError):
    raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
