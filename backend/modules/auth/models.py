"""
Authentication module data models.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs. Application roles are
    kept in ``app_metadata`` because only the service role can write it.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")

    # Supabase-specific claims
    app_metadata: dict[str, Any] = Field(default_factory=dict)
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def app_role(self) -> Optional[str]:
        role = self.app_metadata.get("role")
        return str(role) if role else None

    @property
    def display_name(self) -> Optional[str]:
        """Best-effort display name from the profile metadata."""
        meta = self.user_metadata
        if meta.get("full_name") or meta.get("name"):
            return meta.get("full_name") or meta.get("name")
        parts = [meta.get("first_name"), meta.get("last_name")]
        name = " ".join(p for p in parts if p)
        return name or None
