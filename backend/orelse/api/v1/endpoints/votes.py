"""Vote endpoints."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from orelse.api.deps import get_current_principal
from orelse.api.v1.presenters import build_vote_response
from orelse.core.database import get_db
from orelse.core.rate_limit import RATE_LIMITS, limiter
from orelse.core.security import Principal
from orelse.schemas.base import ErrorResponse
from orelse.schemas.vote import VoteCastResponse, VoteCreate
from orelse.services.vote_service import vote_service

router = APIRouter()


@router.post(
    "",
    response_model=VoteCastResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
@limiter.limit(RATE_LIMITS["vote"])
async def cast_vote(
    request: Request,
    data: VoteCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Vote for a suggestion; one vote per user per suggestion."""
    vote, vote_count = await vote_service.cast_vote(db, principal, data.else_action_id)
    return {
        "message": "Vote cast successfully!",
        "vote_count": vote_count,
        "vote": build_vote_response(vote),
    }
