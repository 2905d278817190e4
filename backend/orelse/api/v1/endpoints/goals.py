"""Goal endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from orelse.api.deps import get_current_principal, get_optional_principal
from orelse.api.v1.presenters import build_goal_detail, build_goal_response, build_goal_summary
from orelse.core.config import settings
from orelse.core.database import get_db
from orelse.core.rate_limit import RATE_LIMITS, limiter
from orelse.core.security import Principal
from orelse.schemas.base import ErrorResponse
from orelse.schemas.goal import (
    GoalCreate,
    GoalDetailResponse,
    GoalResponse,
    GoalStatusUpdate,
    GoalSummaryResponse,
)
from orelse.services.goal_service import goal_service

router = APIRouter()


@router.get("", response_model=List[GoalSummaryResponse])
@limiter.limit(RATE_LIMITS["api_read"])
async def list_public_goals(
    request: Request,
    limit: int = Query(default=settings.GOAL_FEED_LIMIT, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Public goal feed, latest deadline first."""
    goals = await goal_service.list_public_goals(db, limit)
    return [build_goal_summary(g) for g in goals]


@router.post(
    "",
    response_model=GoalResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMITS["api_write"])
async def create_goal(
    request: Request,
    data: GoalCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Create a new goal."""
    goal = await goal_service.create_goal(
        db,
        principal,
        description=data.description,
        deadline=data.deadline,
        is_public=data.is_public,
    )
    return build_goal_response(goal)


@router.get("/mine", response_model=List[GoalSummaryResponse])
@limiter.limit(RATE_LIMITS["api_read"])
async def list_my_goals(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """The caller's own goals, public and private."""
    goals = await goal_service.list_author_goals(db, principal.id)
    return [build_goal_summary(g) for g in goals]


@router.get(
    "/{goal_id}",
    response_model=GoalDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMITS["api_read"])
async def get_goal(
    request: Request,
    goal_id: UUID,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Goal with ranked suggestions and, once failed, its consequence."""
    viewer_id = principal.id if principal else None
    goal = await goal_service.get_visible_goal(db, goal_id, viewer_id)
    return build_goal_detail(goal, viewer_id)


@router.patch(
    "/{goal_id}",
    response_model=GoalResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
@limiter.limit(RATE_LIMITS["api_write"])
async def mark_goal_complete(
    request: Request,
    goal_id: UUID,
    data: GoalStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Mark a goal completed (author only, goal must still be ACTIVE)."""
    goal = await goal_service.mark_complete(db, principal, goal_id)
    return build_goal_response(goal)
