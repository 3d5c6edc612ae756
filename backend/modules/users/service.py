"""
User service implementation.

Resolves identities to stored users and applies the role model and
permission table to role-management operations.
"""

import logging
from typing import Iterable, Optional

from shared.models import AuthenticatedUser
from modules.auth.exceptions import MissingTokenError

from .interfaces import IUserRepository, IUserService
from .models import Capability, CurrentUserResponse, Role, User
from .permissions import Action, user_has_permission, user_permissions
from .roles import has_reviewer_access, is_superuser, resolve_effective_role
from .exceptions import (
    EmulationNotAllowedError,
    InvalidEmulationTargetError,
    PermissionDeniedError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """
    User, role and permission operations.

    The service is storage agnostic; pass any IUserRepository.
    """

    def __init__(self, repository: IUserRepository):
        self._repo = repository

    async def ensure_user(self, identity: AuthenticatedUser) -> User:
        """Upsert the stored user for an identity on first contact."""
        name = identity.name or "Anonymous"
        existing = self._repo.get_by_external_id(identity.id)

        if existing is None:
            user = self._repo.create(identity.id, name, identity.email)
            logger.info(f"Created user {user.id} for identity {identity.id}")
            return user

        if existing.name != name or existing.email != identity.email:
            return self._repo.update_profile(existing.id, name, identity.email)
        return existing

    async def require_user(self, identity: Optional[AuthenticatedUser]) -> User:
        if identity is None:
            raise MissingTokenError()
        user = self._repo.get_by_external_id(identity.id)
        if user is None:
            raise UserNotFoundError(identity.id)
        return user

    async def get_user(self, user_id: str) -> Optional[User]:
        return self._repo.get_by_id(user_id)

    async def get_users(self, user_ids: Iterable[str]) -> dict[str, User]:
        return self._repo.get_many(user_ids)

    async def get_current_user(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> Optional[CurrentUserResponse]:
        """Return the caller with effective role and permissions, or None."""
        if identity is None:
            return None
        user = self._repo.get_by_external_id(identity.id)
        if user is None:
            return None

        return CurrentUserResponse(
            user=user,
            effective_role=resolve_effective_role(user),
            permissions=sorted(action.value for action in user_permissions(user)),
            is_superuser=is_superuser(user),
            has_reviewer_access=has_reviewer_access(user),
        )

    async def switch_emulating_role(
        self,
        identity: AuthenticatedUser,
        emulating_role: Optional[Role],
    ) -> None:
        """
        Set or clear the caller's emulated role.

        Only the caller's own record is ever touched.
        """
        user = await self.require_user(identity)
        if not is_superuser(user):
            raise EmulationNotAllowedError(user.id)
        if emulating_role == Role.TESTER:
            raise InvalidEmulationTargetError(emulating_role.value)

        self._repo.update_emulating_role(user.id, emulating_role)
        logger.debug(
            f"User {user.id} now emulating "
            f"{emulating_role.value if emulating_role else 'nothing'}"
        )

    async def update_user_role(
        self,
        identity: AuthenticatedUser,
        target_user_id: str,
        new_role: Role,
    ) -> None:
        """Overwrite a user's legacy base role. Capability tags are untouched."""
        actor = await self._require_role_manager(identity)
        target = self._repo.get_by_id(target_user_id)
        if target is None:
            raise UserNotFoundError(target_user_id)

        self._repo.update_role(target.id, new_role)
        logger.info(
            f"User {actor.id} changed role of {target.id}: "
            f"{target.role.value} -> {new_role.value}"
        )

    async def update_user_capabilities(
        self,
        identity: AuthenticatedUser,
        target_user_id: str,
        capabilities: set[Capability],
    ) -> None:
        """Replace a user's capability tags. The base role is untouched."""
        actor = await self._require_role_manager(identity)
        target = self._repo.get_by_id(target_user_id)
        if target is None:
            raise UserNotFoundError(target_user_id)

        self._repo.update_capabilities(target.id, set(capabilities))
        logger.info(
            f"User {actor.id} set capabilities of {target.id}: "
            f"{sorted(c.value for c in capabilities)}"
        )

    async def list_users(self, identity: AuthenticatedUser) -> list[User]:
        """All users for role managers; an empty list for everyone else."""
        user = await self.require_user(identity)
        if not (is_superuser(user) or user_has_permission(user, Action.MANAGE_USER_ROLES)):
            return []
        return self._repo.list_all()

    async def check_permission(
        self,
        identity: Optional[AuthenticatedUser],
        action: str,
    ) -> bool:
        """Check one action for the caller. Unknown callers get False."""
        if identity is None:
            return False
        user = self._repo.get_by_external_id(identity.id)
        if user is None:
            return False
        return user_has_permission(user, action)

    async def _require_role_manager(self, identity: AuthenticatedUser) -> User:
        user = await self.require_user(identity)
        if is_superuser(user):
            return user
        if not user_has_permission(user, Action.MANAGE_USER_ROLES):
            raise PermissionDeniedError(
                Action.MANAGE_USER_ROLES.value,
                resolve_effective_role(user).value,
            )
        return user
