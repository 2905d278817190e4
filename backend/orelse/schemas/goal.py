"""Goal schemas."""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import AwareDatetime

from orelse.models.goal import GoalStatus
from orelse.schemas.base import CamelModel, bounded_text
from orelse.schemas.suggestion import SuggestionResponse
from orelse.schemas.user import UserSummary

DESCRIPTION_MAX_LENGTH = 1000

DescriptionText = bounded_text(DESCRIPTION_MAX_LENGTH)


class GoalCreate(CamelModel):
    description: DescriptionText
    # ISO 8601 with an explicit offset, e.g. 2026-01-31T18:00:00Z
    deadline: AwareDatetime
    is_public: bool = True


class GoalStatusUpdate(CamelModel):
    """Only completion can be requested; expiry is derived."""

    status: Literal["COMPLETED"]


class GoalResponse(CamelModel):
    id: UUID
    description: str
    deadline: datetime
    is_public: bool
    author_id: str
    status: GoalStatus
    effective_status: GoalStatus
    created_at: datetime


class GoalSummaryResponse(GoalResponse):
    """Goal as shown in feeds, with its author and consequence."""

    author: Optional[UserSummary] = None
    consequence_state: str
    chosen_suggestion: Optional[SuggestionResponse] = None


class GoalDetailResponse(GoalSummaryResponse):
    suggestions: List[SuggestionResponse]
    is_author: bool
    can_suggest: bool
    can_mark_complete: bool
