"""User endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from orelse.api.deps import get_current_principal
from orelse.core.database import get_db
from orelse.core.rate_limit import RATE_LIMITS, limiter
from orelse.core.security import Principal
from orelse.schemas.base import ErrorResponse
from orelse.schemas.user import UserResponse
from orelse.services.user_service import user_service

router = APIRouter()


@router.get("/me", response_model=UserResponse, responses={401: {"model": ErrorResponse}})
@limiter.limit(RATE_LIMITS["api_read"])
async def get_me(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Current user, including subscription status."""
    user = await user_service.sync_user(db, principal)
    await db.commit()
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "image": user.image,
        "subscription_status": user.subscription_status,
        "is_pro": user.is_pro,
        "created_at": user.created_at,
    }
