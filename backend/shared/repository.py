"""
Base repository classes for data access.

Two storage backends share the same repository interfaces:

- BaseRepository: Supabase-backed, one table per entity collection
- InMemoryTable: a single collection kept in process memory, used by the
  in-memory repositories for development and tests

Repositories never perform authorization checks. The service layer is
responsible for gating every operation.
"""

import itertools
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel
from supabase import Client


T = TypeVar("T")


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_column(value: Any) -> Any:
    """Convert a model-level value to its JSON column representation."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple, set)):
        return [to_column(v) for v in value]
    return value


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class SuggestionRepository(BaseRepository[Suggestion]):
            def get_by_id(self, suggestion_id: str) -> Optional[Suggestion]:
                result = self._db.table("suggestions").select("*").eq("id", suggestion_id).execute()
                if not result.data:
                    return None
                return self._map_to_suggestion(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _table(self):
        return self._db.table(self.table_name)

    def _first(self, result: Any) -> Optional[dict[str, Any]]:
        """Return the first row of a query result, or None."""
        if not result.data:
            return None
        return result.data[0]


class InMemoryTable:
    """
    A single collection of rows held in memory.

    Rows are plain dicts keyed by a generated ``id``. Every insert gets a
    ``created_at`` timestamp and a monotonically increasing ``sequence`` so
    "newest first" ordering is stable even within the same clock tick.
    Returned rows are copies; mutating them never touches the stored row.
    """

    def __init__(self) -> None:
        self._rows: dict[str, dict[str, Any]] = {}
        self._sequence = itertools.count(1)

    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        row = dict(data)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", utc_now())
        row["sequence"] = next(self._sequence)
        self._rows[row["id"]] = row
        return dict(row)

    def get(self, row_id: str) -> Optional[dict[str, Any]]:
        row = self._rows.get(row_id)
        return dict(row) if row is not None else None

    def update(self, row_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        row = self._rows.get(row_id)
        if row is None:
            return None
        row.update(changes)
        return dict(row)

    def delete(self, row_id: str) -> bool:
        return self._rows.pop(row_id, None) is not None

    def find(
        self,
        predicate: Optional[Callable[[dict[str, Any]], bool]] = None,
        newest_first: bool = False,
        limit: Optional[int] = None,
        **equals: Any,
    ) -> list[dict[str, Any]]:
        """
        Query rows by field equality and an optional predicate.

        Args:
            predicate: Extra filter applied after the equality filters.
            newest_first: Order by descending insertion sequence.
            limit: Maximum number of rows to return.
            **equals: Field/value pairs every returned row must match.
        """
        rows: Iterable[dict[str, Any]] = self._rows.values()
        rows = [
            r for r in rows
            if all(r.get(field) == value for field, value in equals.items())
            and (predicate is None or predicate(r))
        ]
        rows.sort(key=lambda r: r["sequence"], reverse=newest_first)
        if limit is not None:
            rows = rows[:limit]
        return [dict(r) for r in rows]

    def find_one(self, **equals: Any) -> Optional[dict[str, Any]]:
        rows = self.find(**equals)
        return rows[0] if rows else None

    def clear(self) -> None:
        self._rows.clear()
