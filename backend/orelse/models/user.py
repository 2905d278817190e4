"""User model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from orelse.models import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    # Same value as the identity provider's subject id
    id = Column(String(255), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=True, index=True)
    name = Column(String(255), nullable=True)
    image = Column(String(1024), nullable=True)
    stripe_customer_id = Column(String(255), unique=True, nullable=True)
    subscription_status = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
        nullable=False,
    )

    goals = relationship("Goal", back_populates="author")
    else_actions = relationship("ElseAction", back_populates="suggester")

    @property
    def is_pro(self) -> bool:
        return self.subscription_status == "active"
