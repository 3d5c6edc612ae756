"""
Authentication service implementation.

Validates identity-provider JWT tokens and returns the caller's identity.
"""

from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are HS256 JWTs signed with the shared Supabase JWT secret.
    """

    def __init__(self):
        self._settings = get_settings()

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated identity.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience=self._settings.jwt_audience,
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        jwt_payload = JWTPayload(**payload)

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email,
            name=jwt_payload.display_name,
            email_verified=jwt_payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
        )


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
