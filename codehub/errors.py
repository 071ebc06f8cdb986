"""
Domain errors raised by the service layer.

Each error carries the HTTP status it is reported with; the API layer turns
any `ServiceError` into a `{"error": message}` JSON body.
"""
from fastapi import status


class ServiceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ServiceError):
    # Existing clients expect 400 for duplicate/already/not-yet states
    status_code = status.HTTP_400_BAD_REQUEST


class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
