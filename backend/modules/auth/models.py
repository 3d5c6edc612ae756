"""
Authentication module data models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from the identity provider.

    Only the subject is required; name and email fall back to
    ``user_metadata`` when the provider nests them there.
    """

    sub: str = Field(..., description="Subject (stable identity key)")
    email: Optional[str] = Field(None, description="User's email")
    name: Optional[str] = Field(None, description="Display name")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")

    user_metadata: dict = Field(default_factory=dict)

    @property
    def display_name(self) -> Optional[str]:
        return (
            self.name
            or self.user_metadata.get("full_name")
            or self.user_metadata.get("name")
        )
