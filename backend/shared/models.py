"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from identity-provider JWT claims and made
    available to route handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")
    name: Optional[str] = Field(None, description="Display name from user metadata")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")
    role: str = Field(default="viewer", description="Role from app_metadata")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }

    @property
    def is_admin(self) -> bool:
        return self.role.lower() == "admin"


class RequestContext(BaseModel):
    """
    Transport-level facts about an inbound request.

    Built by the API layer from the HTTP request so that services can apply
    admission policy without depending on FastAPI.
    """

    method: str
    path: str
    client_ip: str = "unknown"
    user_agent: str = "unknown"
    content_type: Optional[str] = None
    origin: Optional[str] = None

    model_config = {"frozen": True}
