"""
User repositories.

UserRepository stores users in the Supabase ``users`` table, one boolean
column per capability tag. InMemoryUserRepository keeps the same records
in process memory.
"""

from typing import Any, Iterable, Optional

from shared.repository import BaseRepository, InMemoryTable

from .models import CAPABILITY_COLUMNS, Capability, Role, User


class UserRepository(BaseRepository[User]):
    """Supabase-backed user storage."""

    table_name = "users"

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._first(self._table().select("*").eq("id", user_id).execute())
        return self._map_to_user(row) if row else None

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        row = self._first(
            self._table().select("*").eq("external_id", external_id).execute()
        )
        return self._map_to_user(row) if row else None

    def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        result = self._table().select("*").in_("id", ids).execute()
        users = [self._map_to_user(row) for row in result.data]
        return {u.id: u for u in users}

    def create(self, external_id: str, name: str, email: Optional[str]) -> User:
        data = {
            "external_id": external_id,
            "name": name,
            "email": email,
            "role": Role.GUEST.value,
        }
        result = self._table().insert(data).execute()
        return self._map_to_user(result.data[0])

    def update_profile(self, user_id: str, name: str, email: Optional[str]) -> User:
        result = self._table().update({"name": name, "email": email}).eq("id", user_id).execute()
        return self._map_to_user(result.data[0])

    def update_role(self, user_id: str, role: Role) -> None:
        self._table().update({"role": role.value}).eq("id", user_id).execute()

    def update_emulating_role(self, user_id: str, role: Optional[Role]) -> None:
        self._table().update(
            {"emulating_role": role.value if role else None}
        ).eq("id", user_id).execute()

    def update_capabilities(self, user_id: str, capabilities: set[Capability]) -> None:
        data = {
            column: capability in capabilities
            for capability, column in CAPABILITY_COLUMNS.items()
        }
        self._table().update(data).eq("id", user_id).execute()

    def list_all(self) -> list[User]:
        result = self._table().select("*").order("created_at").execute()
        return [self._map_to_user(row) for row in result.data]

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        capabilities = {
            capability
            for capability, column in CAPABILITY_COLUMNS.items()
            if data.get(column)
        }
        return User(
            id=str(data["id"]),
            external_id=data["external_id"],
            name=data.get("name") or "Anonymous",
            email=data.get("email"),
            role=Role(data.get("role") or Role.GUEST.value),
            emulating_role=Role(data["emulating_role"]) if data.get("emulating_role") else None,
            capabilities=capabilities,
            created_at=data["created_at"],
        )


class InMemoryUserRepository:
    """User storage held in process memory."""

    def __init__(self, table: Optional[InMemoryTable] = None) -> None:
        self._rows = table or InMemoryTable()

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._rows.get(user_id)
        return User(**row) if row else None

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        row = self._rows.find_one(external_id=external_id)
        return User(**row) if row else None

    def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        users = {}
        for user_id in set(user_ids):
            user = self.get_by_id(user_id)
            if user is not None:
                users[user_id] = user
        return users

    def create(self, external_id: str, name: str, email: Optional[str]) -> User:
        row = self._rows.insert({
            "external_id": external_id,
            "name": name,
            "email": email,
            "role": Role.GUEST,
            "emulating_role": None,
            "capabilities": set(),
        })
        return User(**row)

    def update_profile(self, user_id: str, name: str, email: Optional[str]) -> User:
        return User(**self._rows.update(user_id, {"name": name, "email": email}))

    def update_role(self, user_id: str, role: Role) -> None:
        self._rows.update(user_id, {"role": role})

    def update_emulating_role(self, user_id: str, role: Optional[Role]) -> None:
        self._rows.update(user_id, {"emulating_role": role})

    def update_capabilities(self, user_id: str, capabilities: set[Capability]) -> None:
        self._rows.update(user_id, {"capabilities": set(capabilities)})

    def list_all(self) -> list[User]:
        return [User(**row) for row in self._rows.find()]

    def add(self, user: User) -> User:
        """Store a fully built user record as-is (seeding and tests)."""
        self._rows.insert(user.model_dump())
        return user
