# dialogue_api/domains/auth/dependencies.py
import logging
from typing import Any, Optional

import jwt
from fastapi import Header
from jwt import PyJWKClient

from dialogue_api.core.settings import settings
from dialogue_api.shared.exceptions import AuthNotConfiguredError, InvalidTokenError

from .types import ClerkJwtPayload

logger = logging.getLogger(__name__)

_jwks_client = PyJWKClient(settings.CLERK_JWKS_URL) if settings.CLERK_JWKS_URL else None


def _decode_options() -> dict[str, Any]:
    options: dict[str, Any] = {"verify_aud": False}
    if settings.CLERK_ISSUER:
        options["require"] = ["exp", "iss", "sub"]
    return options


def decode_clerk_jwt(token: str) -> ClerkJwtPayload:
    """
    Verifies JWT token. Uses JWT_SECRET for development mode if available,
    otherwise falls back to the Clerk JWKS for production.
    """
    # Development mode: prefer JWT_SECRET if available
    if settings.JWT_SECRET:
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256"],
                options={"verify_aud": False},
            )
            return ClerkJwtPayload(**dict(payload))
        except jwt.PyJWTError:
            raise InvalidTokenError("Invalid or expired token")

    # Production mode: use Clerk JWKS
    if not _jwks_client:
        raise AuthNotConfiguredError()
    try:
        signing_key = _jwks_client.get_signing_key_from_jwt(token).key
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=["RS256"],
            issuer=settings.CLERK_ISSUER,
            options=_decode_options(),
        )
        return ClerkJwtPayload(**dict(payload))
    except jwt.PyJWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise InvalidTokenError("Invalid or expired token")


def get_optional_auth_id(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    Returns the user id from a bearer token, or None when no Authorization
    header was sent. A header that is present but invalid still raises 401.
    """
    if not authorization:
        return None

    if not authorization.startswith("Bearer "):
        raise InvalidTokenError("Missing token")

    token = authorization.split(" ")[1]
    payload = decode_clerk_jwt(token)
    return payload.sub or None


def get_auth_id(authorization: Optional[str] = Header(None)) -> str:
    """
    Extracts and validates the Clerk JWT from the Authorization header.
    Returns the user's id (from the `sub` claim).
    """
    auth_id = get_optional_auth_id(authorization)
    if not auth_id:
        raise InvalidTokenError("Missing token")
    return auth_id
