"""Suggestion ("or else") endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from orelse.api.deps import get_current_principal, get_optional_principal
from orelse.api.v1.presenters import build_suggestion_response
from orelse.core.database import get_db
from orelse.core.rate_limit import RATE_LIMITS, limiter
from orelse.core.security import Principal
from orelse.schemas.base import ErrorResponse
from orelse.schemas.suggestion import SuggestionCreate, SuggestionResponse
from orelse.services.goal_service import goal_service
from orelse.services.suggestion_service import suggestion_service

router = APIRouter()


@router.get("", response_model=List[SuggestionResponse])
@limiter.limit(RATE_LIMITS["api_read"])
async def list_suggestions(
    request: Request,
    goal_id: UUID = Query(..., alias="goalId"),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Suggestions for a goal, highest voted first."""
    await goal_service.get_visible_goal(db, goal_id, principal.id if principal else None)
    suggestions = await suggestion_service.list_for_goal(db, goal_id)
    return [build_suggestion_response(s) for s in suggestions]


@router.post(
    "",
    response_model=SuggestionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
@limiter.limit(RATE_LIMITS["api_write"])
async def create_suggestion(
    request: Request,
    data: SuggestionCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Suggest a consequence for someone else's active goal."""
    else_action = await suggestion_service.create_suggestion(
        db, principal, goal_id=data.goal_id, text=data.suggestion
    )
    return build_suggestion_response(else_action)
