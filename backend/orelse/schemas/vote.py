"""Vote schemas."""

from datetime import datetime
from uuid import UUID

from orelse.schemas.base import CamelModel


class VoteCreate(CamelModel):
    else_action_id: UUID


class VoteResponse(CamelModel):
    id: UUID
    user_id: str
    else_action_id: UUID
    created_at: datetime


class VoteCastResponse(CamelModel):
    message: str
    vote_count: int
    vote: VoteResponse
