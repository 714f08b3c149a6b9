"""
Domain-specific exceptions for dialogues.
"""

from dialogue_api.shared.exceptions import BaseHTTPException


class DialogueException(BaseHTTPException):
    """Base exception for dialogue-related errors."""

    status_code = 400


class DialogueNotFoundError(DialogueException):
    """Raised when a dialogue is not found."""

    status_code = 404
    message = "Dialogue not found"


class DialogueAlreadyPublishedError(DialogueException):
    """Raised when publishing a dialogue that is already public."""

    status_code = 409
    message = "Dialogue is already published"


class DialogueNotPublishedError(DialogueException):
    """Raised when unpublishing a dialogue that is not public."""

    status_code = 409
    message = "Dialogue is not published"
