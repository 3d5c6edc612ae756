"""
Users module.

Stored users, the role model (effective role, tester emulation) and the
static permission table.

Public API:
- IUserService: Interface for user and role operations
- Role, Capability, User: Core models
- Action, has_permission: Permission table lookup
- resolve_effective_role: The role every permission check uses
"""

from .interfaces import IUserRepository, IUserService
from .models import (
    Capability,
    CurrentUserResponse,
    Role,
    User,
)
from .permissions import (
    Action,
    ROLE_PERMISSIONS,
    has_permission,
    require_permission,
    user_has_permission,
    user_permissions,
)
from .roles import has_reviewer_access, is_superuser, resolve_effective_role
from .exceptions import (
    EmulationNotAllowedError,
    InvalidEmulationTargetError,
    PermissionDeniedError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IUserRepository",
    "IUserService",
    # Models
    "Capability",
    "CurrentUserResponse",
    "Role",
    "User",
    # Permissions
    "Action",
    "ROLE_PERMISSIONS",
    "has_permission",
    "require_permission",
    "user_has_permission",
    "user_permissions",
    # Roles
    "has_reviewer_access",
    "is_superuser",
    "resolve_effective_role",
    # Exceptions
    "EmulationNotAllowedError",
    "InvalidEmulationTargetError",
    "PermissionDeniedError",
    "UserNotFoundError",
]
