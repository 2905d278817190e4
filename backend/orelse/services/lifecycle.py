"""Goal lifecycle evaluation.

A goal's stored status is only ever written by its author (ACTIVE ->
COMPLETED). Expiry is never persisted: an ACTIVE goal whose deadline has
passed is *effectively* FAILED, and that is derived here on every read.
"""

from datetime import datetime, timezone
from typing import Optional

from orelse.models.goal import Goal, GoalStatus

TERMINAL_STATUSES = frozenset({GoalStatus.COMPLETED, GoalStatus.FAILED})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values and convert aware ones to UTC."""
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def effective_status(
    status: GoalStatus,
    deadline: datetime,
    now: Optional[datetime] = None,
) -> GoalStatus:
    """Compute the status a goal has at ``now``.

    COMPLETED and FAILED are terminal and returned unchanged, even when the
    deadline is still ahead. ACTIVE becomes FAILED once ``now`` is strictly
    past the deadline.
    """
    status = GoalStatus(status)
    if status in TERMINAL_STATUSES:
        return status

    now = as_utc(now or utcnow())
    if now > as_utc(deadline):
        return GoalStatus.FAILED
    return GoalStatus.ACTIVE


def goal_effective_status(goal: Goal, now: Optional[datetime] = None) -> GoalStatus:
    return effective_status(goal.status, goal.deadline, now)
