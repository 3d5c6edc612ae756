"""
JWT Authentication middleware.

Extracts the bearer token and turns it into the caller's identity via
the auth service. Failures raise AuthenticationError subclasses, which
the API error handler turns into 401 responses.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError("Missing authorization header")

    return await auth.validate_token(credentials.credentials)
