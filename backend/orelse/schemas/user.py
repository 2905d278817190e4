"""User schemas."""

from datetime import datetime
from typing import Optional

from orelse.schemas.base import CamelModel


class UserSummary(CamelModel):
    """Public profile fields shown next to goals and suggestions."""

    name: Optional[str] = None
    image: Optional[str] = None


class UserResponse(CamelModel):
    """Schema for the current user."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    subscription_status: Optional[str] = None
    is_pro: bool
    created_at: datetime
