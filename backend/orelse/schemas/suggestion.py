"""Suggestion ("or else") schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from orelse.schemas.base import CamelModel, bounded_text
from orelse.schemas.user import UserSummary

SUGGESTION_MAX_LENGTH = 500

SuggestionText = bounded_text(SUGGESTION_MAX_LENGTH)


class SuggestionCreate(CamelModel):
    goal_id: UUID
    suggestion: SuggestionText


class SuggestionResponse(CamelModel):
    id: UUID
    goal_id: UUID
    suggester_id: str
    suggestion: str
    vote_count: int
    created_at: datetime
    suggester: Optional[UserSummary] = None
