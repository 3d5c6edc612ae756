"""
Suggestions module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError


class SuggestionNotFoundError(NotFoundError):
    """Raised when a suggestion doesn't exist."""

    def __init__(self, suggestion_id: str):
        super().__init__(
            f"Suggestion not found: {suggestion_id}",
            code="SUGGESTION_NOT_FOUND",
            details={"suggestion_id": suggestion_id},
        )


class ReviewerAccessRequiredError(AuthorizationError):
    """Raised when a caller without reviewer access reviews or groups suggestions."""

    def __init__(self, user_id: str):
        super().__init__(
            "Access denied: reviewer access required",
            code="REVIEWER_ACCESS_REQUIRED",
            details={"user_id": user_id},
        )
