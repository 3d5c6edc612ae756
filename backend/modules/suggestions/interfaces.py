"""
Suggestions module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    EnrichedSuggestion,
    Suggestion,
    SuggestionGroup,
    SuggestionStatus,
)


@runtime_checkable
class ISuggestionRepository(Protocol):
    """Storage contract for suggestions."""

    def create(
        self,
        created_by: str,
        location: str,
        page_context: str,
        problem: str,
        solution: str,
        similarity_hash: str,
    ) -> Suggestion:
        """Insert a pending suggestion with an empty related list."""
        ...

    def get_by_id(self, suggestion_id: str) -> Optional[Suggestion]:
        ...

    def list_recent(
        self,
        status: Optional[SuggestionStatus] = None,
        created_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Suggestion]:
        """List suggestions newest first."""
        ...

    def list_by_hash(self, similarity_hash: str) -> list[Suggestion]:
        ...

    def list_all(self) -> list[Suggestion]:
        ...

    def set_related(self, suggestion_id: str, related: list[str]) -> None:
        ...

    def update_review(
        self,
        suggestion_id: str,
        status: SuggestionStatus,
        reviewed_by: str,
        review_notes: Optional[str],
        implementation_date: Optional[str],
    ) -> Suggestion:
        ...


@runtime_checkable
class ISuggestionService(Protocol):
    """
    Interface for feedback suggestions.

    Every call takes the caller's identity; reviewer access is derived
    from the stored user.
    """

    async def create_suggestion(
        self,
        identity: Optional[AuthenticatedUser],
        location: str,
        page_context: str,
        problem: str,
        solution: str,
    ) -> Suggestion:
        """
        Store a suggestion and link it to every suggestion with the same fingerprint.
        """
        ...

    async def regroup_by_similarity(self, similarity_hash: str) -> list[str]:
        """
        Rewrite the related lists of one fingerprint group as a full mesh.

        Returns:
            IDs of the group members
        """
        ...

    async def list_suggestions(
        self,
        identity: Optional[AuthenticatedUser],
        status: Optional[SuggestionStatus] = None,
        limit: Optional[int] = None,
    ) -> list[EnrichedSuggestion]:
        ...

    async def list_suggestions_grouped(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[SuggestionGroup]:
        ...

    async def review_suggestion(
        self,
        identity: Optional[AuthenticatedUser],
        suggestion_id: str,
        status: SuggestionStatus,
        review_notes: Optional[str] = None,
        implementation_date: Optional[str] = None,
    ) -> Suggestion:
        ...
