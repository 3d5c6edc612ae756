"""
Shared infrastructure for the Kastel Ops backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Storage backends for the module repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    KastelError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    InvalidTransitionError,
    ConflictError,
)
from .models import AuthenticatedUser, UserSummary, TemplateSummary

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "KastelError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "InvalidTransitionError",
    "ConflictError",
    "AuthenticatedUser",
    "UserSummary",
    "TemplateSummary",
]
