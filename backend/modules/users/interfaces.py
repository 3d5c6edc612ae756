"""
Users module interfaces.

Other modules depend on IUserService to turn an identity into a stored
user and to look up referenced users.
"""

from typing import Iterable, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import Capability, CurrentUserResponse, Role, User


@runtime_checkable
class IUserRepository(Protocol):
    """Storage contract for user records."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        ...

    def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Return the users that exist among ``user_ids``, keyed by ID."""
        ...

    def create(self, external_id: str, name: str, email: Optional[str]) -> User:
        ...

    def update_profile(self, user_id: str, name: str, email: Optional[str]) -> User:
        ...

    def update_role(self, user_id: str, role: Role) -> None:
        ...

    def update_emulating_role(self, user_id: str, role: Optional[Role]) -> None:
        ...

    def update_capabilities(self, user_id: str, capabilities: set[Capability]) -> None:
        ...

    def list_all(self) -> list[User]:
        ...


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for user, role and permission operations.
    """

    async def ensure_user(self, identity: AuthenticatedUser) -> User:
        """
        Get or create the stored user for an identity.

        Name and email are refreshed from the identity on every call.
        """
        ...

    async def require_user(self, identity: Optional[AuthenticatedUser]) -> User:
        """
        Resolve the stored user for an identity.

        Raises:
            MissingTokenError: If there is no identity
            UserNotFoundError: If the identity has no stored user
        """
        ...

    async def get_user(self, user_id: str) -> Optional[User]:
        ...

    async def get_users(self, user_ids: Iterable[str]) -> dict[str, User]:
        ...

    async def get_current_user(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> Optional[CurrentUserResponse]:
        ...

    async def switch_emulating_role(
        self,
        identity: AuthenticatedUser,
        emulating_role: Optional[Role],
    ) -> None:
        ...

    async def update_user_role(
        self,
        identity: AuthenticatedUser,
        target_user_id: str,
        new_role: Role,
    ) -> None:
        ...

    async def update_user_capabilities(
        self,
        identity: AuthenticatedUser,
        target_user_id: str,
        capabilities: set[Capability],
    ) -> None:
        ...

    async def list_users(self, identity: AuthenticatedUser) -> list[User]:
        ...

    async def check_permission(
        self,
        identity: Optional[AuthenticatedUser],
        action: str,
    ) -> bool:
        ...
