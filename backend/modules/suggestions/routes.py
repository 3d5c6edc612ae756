"""
Suggestion API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.middleware.auth import get_current_user
from api.dependencies import get_suggestion_service
from shared.models import AuthenticatedUser

from .interfaces import ISuggestionService
from .models import (
    CreateSuggestionRequest,
    CreateSuggestionResponse,
    EnrichedSuggestion,
    ReviewSuggestionRequest,
    Suggestion,
    SuggestionGroup,
    SuggestionStatus,
)

router = APIRouter()


@router.post("", response_model=CreateSuggestionResponse, status_code=201)
async def create_suggestion(
    request: CreateSuggestionRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: ISuggestionService = Depends(get_suggestion_service),
) -> CreateSuggestionResponse:
    """
    Submit feedback.

    The suggestion is linked to every existing suggestion with the same
    fingerprint.
    """
    suggestion = await service.create_suggestion(
        identity,
        location=request.location,
        page_context=request.page_context,
        problem=request.problem,
        solution=request.solution,
    )
    return CreateSuggestionResponse(id=suggestion.id, similarity_hash=suggestion.similarity_hash)


@router.get("", response_model=list[EnrichedSuggestion])
async def list_suggestions(
    status: Optional[SuggestionStatus] = Query(default=None, description="Filter by status"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000, description="Maximum results"),
    identity: AuthenticatedUser = Depends(get_current_user),
    service: ISuggestionService = Depends(get_suggestion_service),
) -> list[EnrichedSuggestion]:
    """
    List suggestions, most recent first.

    Reviewers see all suggestions, everyone else only their own.
    """
    return await service.list_suggestions(identity, status=status, limit=limit)


@router.get("/grouped", response_model=list[SuggestionGroup])
async def list_suggestions_grouped(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: ISuggestionService = Depends(get_suggestion_service),
) -> list[SuggestionGroup]:
    """Suggestions grouped by fingerprint, largest group first. Reviewers only."""
    return await service.list_suggestions_grouped(identity)


@router.patch("/{suggestion_id}", response_model=Suggestion)
async def review_suggestion(
    suggestion_id: str,
    request: ReviewSuggestionRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: ISuggestionService = Depends(get_suggestion_service),
) -> Suggestion:
    return await service.review_suggestion(
        identity,
        suggestion_id,
        status=request.status,
        review_notes=request.review_notes,
        implementation_date=request.implementation_date,
    )
