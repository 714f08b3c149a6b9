# dialogue_api/shared/exceptions.py
from fastapi import HTTPException, status


class BaseHTTPException(HTTPException):
    """HTTP exception whose status and message are declared on the class."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            status_code=type(self).status_code, detail=message or type(self).message
        )


# Authentication & Authorization Exceptions
class InvalidTokenError(BaseHTTPException):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Missing or invalid token"


class NotAuthorizedError(BaseHTTPException):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not authorized"


class RoleStoreUnavailableError(BaseHTTPException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Could not determine authorization"


class AuthNotConfiguredError(BaseHTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Identity provider not configured"


# Resource Not Found Exceptions
class RoleNotFoundError(BaseHTTPException):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Role not found"


# Validation / Request Exceptions
class InvalidDataError(BaseHTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request data"
