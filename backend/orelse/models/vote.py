"""Vote model: one row per (user, suggestion)."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from orelse.models import Base
from orelse.models.user import _utcnow

VOTE_UNIQUE_CONSTRAINT = "uq_else_action_votes_user_else_action"


class ElseActionVote(Base):
    __tablename__ = "else_action_votes"
    __table_args__ = (
        UniqueConstraint("user_id", "else_action_id", name=VOTE_UNIQUE_CONSTRAINT),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    else_action_id = Column(Uuid, ForeignKey("else_actions.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    else_action = relationship("ElseAction", back_populates="votes")
