"""
Suggestions module.

User feedback with coarse similarity grouping: each suggestion gets a
fingerprint at creation and is linked to every other suggestion sharing it.

Public API:
- ISuggestionService: Interface for suggestion operations
- fingerprint: The similarity fingerprint function
- Suggestion, SuggestionStatus, SuggestionGroup: Core models
"""

from .interfaces import ISuggestionRepository, ISuggestionService
from .fingerprint import fingerprint
from .models import (
    EnrichedSuggestion,
    Suggestion,
    SuggestionGroup,
    SuggestionStatus,
)
from .exceptions import ReviewerAccessRequiredError, SuggestionNotFoundError

__all__ = [
    "ISuggestionRepository",
    "ISuggestionService",
    "fingerprint",
    "EnrichedSuggestion",
    "Suggestion",
    "SuggestionGroup",
    "SuggestionStatus",
    "ReviewerAccessRequiredError",
    "SuggestionNotFoundError",
]
