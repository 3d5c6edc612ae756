"""
Suggestion repositories.

SuggestionRepository talks to the Supabase ``suggestions`` table.
InMemorySuggestionRepository keeps the same records in process memory.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, InMemoryTable

from .models import Suggestion, SuggestionStatus


class SuggestionRepository(BaseRepository[Suggestion]):
    """Supabase-backed suggestion storage."""

    table_name = "suggestions"

    def create(
        self,
        created_by: str,
        location: str,
        page_context: str,
        problem: str,
        solution: str,
        similarity_hash: str,
    ) -> Suggestion:
        data = {
            "created_by": created_by,
            "location": location,
            "page_context": page_context,
            "problem": problem,
            "solution": solution,
            "status": SuggestionStatus.PENDING.value,
            "similarity_hash": similarity_hash,
            "related_suggestions": [],
        }
        result = self._table().insert(data).execute()
        return self._map_to_suggestion(result.data[0])

    def get_by_id(self, suggestion_id: str) -> Optional[Suggestion]:
        row = self._first(self._table().select("*").eq("id", suggestion_id).execute())
        return self._map_to_suggestion(row) if row else None

    def list_recent(
        self,
        status: Optional[SuggestionStatus] = None,
        created_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Suggestion]:
        query = self._table().select("*")
        if status is not None:
            query = query.eq("status", status.value)
        if created_by is not None:
            query = query.eq("created_by", created_by)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        result = query.execute()
        return [self._map_to_suggestion(row) for row in result.data]

    def list_by_hash(self, similarity_hash: str) -> list[Suggestion]:
        result = (
            self._table()
            .select("*")
            .eq("similarity_hash", similarity_hash)
            .order("created_at")
            .execute()
        )
        return [self._map_to_suggestion(row) for row in result.data]

    def list_all(self) -> list[Suggestion]:
        result = self._table().select("*").order("created_at").execute()
        return [self._map_to_suggestion(row) for row in result.data]

    def set_related(self, suggestion_id: str, related: list[str]) -> None:
        self._table().update({"related_suggestions": related}).eq("id", suggestion_id).execute()

    def update_review(
        self,
        suggestion_id: str,
        status: SuggestionStatus,
        reviewed_by: str,
        review_notes: Optional[str],
        implementation_date: Optional[str],
    ) -> Suggestion:
        data = {
            "status": status.value,
            "reviewed_by": reviewed_by,
            "review_notes": review_notes,
            "implementation_date": implementation_date,
        }
        result = self._table().update(data).eq("id", suggestion_id).execute()
        return self._map_to_suggestion(result.data[0])

    def _map_to_suggestion(self, data: dict[str, Any]) -> Suggestion:
        """Map database row to Suggestion model."""
        return Suggestion(
            id=str(data["id"]),
            created_by=str(data["created_by"]),
            location=data["location"],
            page_context=data.get("page_context") or "",
            problem=data["problem"],
            solution=data["solution"],
            status=SuggestionStatus(data.get("status") or SuggestionStatus.PENDING.value),
            similarity_hash=data.get("similarity_hash") or "",
            related_suggestions=[str(i) for i in data.get("related_suggestions") or []],
            reviewed_by=str(data["reviewed_by"]) if data.get("reviewed_by") else None,
            review_notes=data.get("review_notes"),
            implementation_date=data.get("implementation_date"),
            created_at=data["created_at"],
            sequence=data.get("sequence") or 0,
        )


class InMemorySuggestionRepository:
    """Suggestion storage held in process memory."""

    def __init__(self, table: Optional[InMemoryTable] = None) -> None:
        self._rows = table or InMemoryTable()

    def create(
        self,
        created_by: str,
        location: str,
        page_context: str,
        problem: str,
        solution: str,
        similarity_hash: str,
    ) -> Suggestion:
        row = self._rows.insert({
            "created_by": created_by,
            "location": location,
            "page_context": page_context,
            "problem": problem,
            "solution": solution,
            "status": SuggestionStatus.PENDING,
            "similarity_hash": similarity_hash,
            "related_suggestions": [],
        })
        return Suggestion(**row)

    def get_by_id(self, suggestion_id: str) -> Optional[Suggestion]:
        row = self._rows.get(suggestion_id)
        return Suggestion(**row) if row else None

    def list_recent(
        self,
        status: Optional[SuggestionStatus] = None,
        created_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Suggestion]:
        filters: dict[str, Any] = {}
        if status is not None:
            filters["status"] = status
        if created_by is not None:
            filters["created_by"] = created_by
        rows = self._rows.find(newest_first=True, limit=limit, **filters)
        return [Suggestion(**row) for row in rows]

    def list_by_hash(self, similarity_hash: str) -> list[Suggestion]:
        return [Suggestion(**row) for row in self._rows.find(similarity_hash=similarity_hash)]

    def list_all(self) -> list[Suggestion]:
        return [Suggestion(**row) for row in self._rows.find()]

    def set_related(self, suggestion_id: str, related: list[str]) -> None:
        self._rows.update(suggestion_id, {"related_suggestions": list(related)})

    def update_review(
        self,
        suggestion_id: str,
        status: SuggestionStatus,
        reviewed_by: str,
        review_notes: Optional[str],
        implementation_date: Optional[str],
    ) -> Suggestion:
        row = self._rows.update(suggestion_id, {
            "status": status,
            "reviewed_by": reviewed_by,
            "review_notes": review_notes,
            "implementation_date": implementation_date,
        })
        return Suggestion(**row)
