"""Pydantic schemas."""

from orelse.schemas.base import ErrorResponse, ValidationIssue
from orelse.schemas.goal import (
    GoalCreate,
    GoalDetailResponse,
    GoalResponse,
    GoalStatusUpdate,
    GoalSummaryResponse,
)
from orelse.schemas.suggestion import SuggestionCreate, SuggestionResponse
from orelse.schemas.user import UserResponse, UserSummary
from orelse.schemas.vote import VoteCastResponse, VoteCreate, VoteResponse

__all__ = [
    "ErrorResponse",
    "ValidationIssue",
    "GoalCreate",
    "GoalDetailResponse",
    "GoalResponse",
    "GoalStatusUpdate",
    "GoalSummaryResponse",
    "SuggestionCreate",
    "SuggestionResponse",
    "UserResponse",
    "UserSummary",
    "VoteCastResponse",
    "VoteCreate",
    "VoteResponse",
]
