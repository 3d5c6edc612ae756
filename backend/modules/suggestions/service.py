"""
Suggestion service implementation.

Feedback suggestions are fingerprinted on creation and every suggestion
sharing a fingerprint lists all the others in ``related_suggestions``.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from shared.models import AuthenticatedUser
from modules.users.interfaces import IUserService
from modules.users.models import summarize_user
from modules.users.roles import has_reviewer_access

from .exceptions import ReviewerAccessRequiredError, SuggestionNotFoundError
from .fingerprint import fingerprint
from .interfaces import ISuggestionRepository, ISuggestionService
from .models import (
    EnrichedSuggestion,
    Suggestion,
    SuggestionGroup,
    SuggestionStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100

# Group key for suggestions stored without a fingerprint
UNGROUPED_KEY = "unique"


class SuggestionService(ISuggestionService):
    """
    Suggestion operations.

    Regrouping one fingerprint is a read-modify-write over the whole group,
    so it runs under a per-fingerprint lock. The lock only covers this
    process; two API processes can still interleave and leave a group
    without some of its links until the next insert into that group.
    """

    def __init__(
        self,
        repository: ISuggestionRepository,
        users: IUserService,
        default_limit: int = DEFAULT_LIMIT,
    ):
        self._repo = repository
        self._users = users
        self._default_limit = default_limit
        self._group_locks: dict[str, asyncio.Lock] = {}
        self._lock_holders: dict[str, int] = {}

    async def create_suggestion(
        self,
        identity: Optional[AuthenticatedUser],
        location: str,
        page_context: str,
        problem: str,
        solution: str,
    ) -> Suggestion:
        author = await self._users.require_user(identity)
        similarity_hash = fingerprint(problem, solution)

        suggestion = self._repo.create(
            created_by=author.id,
            location=location,
            page_context=page_context,
            problem=problem,
            solution=solution,
            similarity_hash=similarity_hash,
        )
        logger.info(f"Suggestion {suggestion.id} created with fingerprint {similarity_hash}")

        await self.regroup_by_similarity(similarity_hash)
        return self._repo.get_by_id(suggestion.id) or suggestion

    async def regroup_by_similarity(self, similarity_hash: str) -> list[str]:
        async with self._group_lock(similarity_hash):
            members = [s.id for s in self._repo.list_by_hash(similarity_hash)]
            if len(members) < 2:
                return members

            for member_id in members:
                self._repo.set_related(
                    member_id,
                    [other for other in members if other != member_id],
                )

        logger.debug(f"Regrouped {len(members)} suggestions for fingerprint {similarity_hash}")
        return members

    @asynccontextmanager
    async def _group_lock(self, similarity_hash: str):
        """Hold the fingerprint's lock; it is dropped once nobody holds or awaits it."""
        lock = self._group_locks.setdefault(similarity_hash, asyncio.Lock())
        self._lock_holders[similarity_hash] = self._lock_holders.get(similarity_hash, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_holders[similarity_hash] -= 1
            if self._lock_holders[similarity_hash] == 0:
                del self._lock_holders[similarity_hash]
                del self._group_locks[similarity_hash]

    async def list_suggestions(
        self,
        identity: Optional[AuthenticatedUser],
        status: Optional[SuggestionStatus] = None,
        limit: Optional[int] = None,
    ) -> list[EnrichedSuggestion]:
        """
        List suggestions newest first.

        Reviewers see every suggestion; everyone else only their own.
        """
        user = await self._users.require_user(identity)
        created_by = None if has_reviewer_access(user) else user.id

        suggestions = self._repo.list_recent(
            status=status,
            created_by=created_by,
            limit=limit or self._default_limit,
        )
        return await self._enrich(suggestions)

    async def list_suggestions_grouped(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[SuggestionGroup]:
        """Group all suggestions by fingerprint, largest group first."""
        user = await self._users.require_user(identity)
        if not has_reviewer_access(user):
            raise ReviewerAccessRequiredError(user.id)

        enriched = await self._enrich(self._repo.list_all())
        grouped: dict[str, list[EnrichedSuggestion]] = {}
        for suggestion in enriched:
            grouped.setdefault(suggestion.similarity_hash or UNGROUPED_KEY, []).append(suggestion)

        groups = [
            SuggestionGroup(hash=key, count=len(members), suggestions=members)
            for key, members in grouped.items()
        ]
        groups.sort(key=lambda g: g.count, reverse=True)
        return groups

    async def review_suggestion(
        self,
        identity: Optional[AuthenticatedUser],
        suggestion_id: str,
        status: SuggestionStatus,
        review_notes: Optional[str] = None,
        implementation_date: Optional[str] = None,
    ) -> Suggestion:
        reviewer = await self._users.require_user(identity)
        if not has_reviewer_access(reviewer):
            raise ReviewerAccessRequiredError(reviewer.id)

        if self._repo.get_by_id(suggestion_id) is None:
            raise SuggestionNotFoundError(suggestion_id)

        updated = self._repo.update_review(
            suggestion_id,
            status=status,
            reviewed_by=reviewer.id,
            review_notes=review_notes,
            implementation_date=implementation_date,
        )
        logger.info(f"Suggestion {suggestion_id} reviewed by {reviewer.id}: {status.value}")
        return updated

    async def _enrich(self, suggestions: list[Suggestion]) -> list[EnrichedSuggestion]:
        user_ids = {s.created_by for s in suggestions}
        user_ids |= {s.reviewed_by for s in suggestions if s.reviewed_by}
        users = await self._users.get_users(user_ids)

        enriched = []
        for suggestion in suggestions:
            author = users.get(suggestion.created_by)
            if author is None:
                logger.warning(
                    f"Suggestion {suggestion.id} references missing author {suggestion.created_by}"
                )
            reviewer = users.get(suggestion.reviewed_by) if suggestion.reviewed_by else None
            enriched.append(EnrichedSuggestion(
                **suggestion.model_dump(),
                created_by_user=summarize_user(author),
                reviewed_by_user=summarize_user(reviewer),
            ))
        return enriched
