"""SQLAlchemy models."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models so Base.metadata.create_all() picks them up
from orelse.models.user import User  # noqa: E402, F401
from orelse.models.goal import Goal  # noqa: E402, F401
from orelse.models.else_action import ElseAction  # noqa: E402, F401
from orelse.models.vote import ElseActionVote  # noqa: E402, F401
