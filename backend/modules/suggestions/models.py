"""
Suggestions module data models.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import UserSummary


class SuggestionStatus(str, Enum):
    """Review status of a suggestion."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    IMPLEMENTED = "implemented"
    REJECTED = "rejected"


class Suggestion(BaseModel):
    """A piece of user feedback: where, what's wrong, and a proposed fix."""

    id: str
    created_by: str = Field(..., description="Author user ID")
    location: str = Field(..., description="Where in the app the problem was seen")
    page_context: str = Field(default="", description="Page context captured with the feedback")
    problem: str
    solution: str
    status: SuggestionStatus = SuggestionStatus.PENDING
    similarity_hash: str = Field(..., description="Fingerprint computed at creation")
    related_suggestions: list[str] = Field(
        default_factory=list,
        description="IDs of every other suggestion sharing the fingerprint",
    )
    reviewed_by: Optional[str] = None
    review_notes: Optional[str] = None
    implementation_date: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sequence: int = Field(default=0, description="Monotonic creation order")


class EnrichedSuggestion(Suggestion):
    """Suggestion with its author and reviewer resolved."""

    created_by_user: Optional[UserSummary] = None
    reviewed_by_user: Optional[UserSummary] = None


class SuggestionGroup(BaseModel):
    """All suggestions sharing one fingerprint."""

    hash: str
    count: int
    suggestions: list[EnrichedSuggestion] = Field(default_factory=list)


# Request models


class CreateSuggestionRequest(BaseModel):
    """Request to submit feedback."""

    location: str = Field(..., min_length=1)
    page_context: str = ""
    problem: str = Field(..., min_length=1)
    solution: str = Field(..., min_length=1)


class ReviewSuggestionRequest(BaseModel):
    """Request to review a suggestion."""

    status: SuggestionStatus
    review_notes: Optional[str] = None
    implementation_date: Optional[str] = None


class CreateSuggestionResponse(BaseModel):
    """ID of the created suggestion and its fingerprint."""

    id: str
    similarity_hash: str
