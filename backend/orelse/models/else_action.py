"""Suggested consequence ("or else") model."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from orelse.models import Base
from orelse.models.user import _utcnow


class ElseAction(Base):
    __tablename__ = "else_actions"
    __table_args__ = (
        CheckConstraint("vote_count >= 0", name="ck_else_actions_vote_count_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    goal_id = Column(Uuid, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    suggester_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    suggestion = Column(String(500), nullable=False)
    vote_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    goal = relationship("Goal", back_populates="else_actions")
    suggester = relationship("User", back_populates="else_actions")
    votes = relationship("ElseActionVote", back_populates="else_action", cascade="all, delete-orphan")
