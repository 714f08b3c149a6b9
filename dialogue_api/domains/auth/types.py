"""Auth domain type definitions for type safety."""

from typing import Optional

from pydantic import BaseModel, Field


class ClerkJwtPayload(BaseModel):
    """Clerk session token payload structure."""

    # Standard JWT claims
    sub: Optional[str] = Field(None, description="Subject (user ID)")
    iss: Optional[str] = Field(None, description="Token issuer")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    nbf: Optional[int] = Field(None, description="Not before timestamp")
    jti: Optional[str] = Field(None, description="JWT ID")

    # Clerk-specific claims
    azp: Optional[str] = Field(None, description="Authorized party (origin)")
    sid: Optional[str] = Field(None, description="Session identifier")

    model_config = {"extra": "allow"}
