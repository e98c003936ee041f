# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for the authenticated caller.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: UUID
    email: Optional[str] = None
    username: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def identity(self) -> str:
        """Stable key that activity records are stored under."""
        return str(self.id)


class TokenPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    Supabase tokens include standard JWT claims plus custom claims.
    """
    sub: str  # User ID
    email: Optional[str] = None
    aud: str  # Audience (should be "authenticated")
    exp: int  # Expiration timestamp
    iat: Optional[int] = None
    role: Optional[str] = None
    user_metadata: dict = {}
