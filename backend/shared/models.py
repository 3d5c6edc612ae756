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
    Identity of the caller as supplied by the identity provider.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection. The core treats it
    as opaque, read-only input: roles live on the stored user record,
    never in the token.
    """

    id: str = Field(..., description="Stable subject identifier from the identity provider")
    email: Optional[str] = Field(None, description="User's email address")
    name: Optional[str] = Field(None, description="Display name")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }


class UserSummary(BaseModel):
    """Minimal view of a referenced user, used to enrich other records."""

    id: str
    name: str
    email: Optional[str] = None
    role: Optional[str] = None


class TemplateSummary(BaseModel):
    """Minimal view of a referenced shift template."""

    id: str
    name: str
    type: str
