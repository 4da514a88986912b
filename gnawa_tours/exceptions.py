"""Error taxonomy shared by the service layer and the HTTP boundary."""
from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
    """Base error rendered as ``{"error": message}`` at the HTTP boundary."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendUnavailableError(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Persistence backend is not configured"):
        super().__init__(message)


class BackendError(ServiceError):
    """The configured backend rejected an operation; message is passed through."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class UploadRejectedError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
