"""Goal model."""

import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from orelse.models import Base
from orelse.models.user import _utcnow


class GoalStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    author_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    deadline = Column(DateTime(timezone=True), nullable=False, index=True)
    is_public = Column(Boolean, default=True, nullable=False)
    # Stored status; may be stale, see services.lifecycle.effective_status
    status = Column(Enum(GoalStatus), default=GoalStatus.ACTIVE, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    author = relationship("User", back_populates="goals")
    else_actions = relationship("ElseAction", back_populates="goal", cascade="all, delete-orphan")
