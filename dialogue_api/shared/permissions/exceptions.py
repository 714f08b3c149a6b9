"""
Authorization exceptions raised by the permission core.

These are framework-free; the HTTP layer maps them onto status codes in
``dependencies.py``.
"""


class AuthorizationError(Exception):
    """Base exception for authorization errors."""

    pass


class RoleLookupError(AuthorizationError, LookupError):
    """Raised when role assignments cannot be read from the role store.

    Means the decision is undetermined, never that access was denied.
    """

    def __init__(self, user_id: str, reason: str = "role store unavailable") -> None:
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Could not load roles for user {user_id}: {reason}")


class Unauthenticated(AuthorizationError):
    """Raised when no user identity accompanies the request."""

    def __init__(self) -> None:
        super().__init__("No authenticated identity")


class Forbidden(AuthorizationError):
    """Raised when an identity lacks the permissions a policy requires."""

    def __init__(self, user_id: str, resource: str, action: str) -> None:
        self.user_id = user_id
        self.resource = resource
        self.action = action
        super().__init__(f"User {user_id} may not {action} {resource}")
