"""
Authentication module.

Validates identity-provider JWTs and turns them into an opaque identity.

Public API:
- IAuthService: Interface for auth operations
- JWTPayload: Decoded token claims
- Auth exceptions: InvalidTokenError, ExpiredTokenError, MissingTokenError
"""

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "JWTPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
]
