"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping the identity provider.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer.
    """

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a JWT token and return the caller's identity.

        Args:
            token: JWT access token from the identity provider

        Returns:
            AuthenticatedUser with the stable subject, name and email

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...
