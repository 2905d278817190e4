"""Vote casting.

A vote row and the suggestion's counter change together in one
transaction. The unique constraint on (user, suggestion) is what rejects a
second vote; the counter is incremented in SQL so concurrent voters never
overwrite each other.
"""

import logging
from typing import Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orelse.core.exceptions import DuplicateVoteError, GoalNotActiveError, NotFoundError
from orelse.core.security import Principal
from orelse.models.else_action import ElseAction
from orelse.models.goal import GoalStatus
from orelse.models.vote import VOTE_UNIQUE_CONSTRAINT, ElseActionVote
from orelse.services.user_service import user_service

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_duplicate_vote(exc: IntegrityError) -> bool:
    """Tell a (user, suggestion) uniqueness violation apart from other integrity failures."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    # asyncpg keeps the constraint name on the driver error chained to the DBAPI one
    constraint = getattr(orig, "constraint_name", None) or getattr(
        getattr(orig, "__cause__", None), "constraint_name", None
    )
    message = str(orig)
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        if constraint:
            return constraint == VOTE_UNIQUE_CONSTRAINT
        return VOTE_UNIQUE_CONSTRAINT in message
    if VOTE_UNIQUE_CONSTRAINT in message:
        return True
    # SQLite: "UNIQUE constraint failed: else_action_votes.user_id, else_action_votes.else_action_id"
    return (
        "UNIQUE constraint failed" in message
        and "else_action_votes.user_id" in message
        and "else_action_votes.else_action_id" in message
    )


class VoteService:
    """Casts votes on suggestions."""

    async def cast_vote(
        self,
        db: AsyncSession,
        principal: Principal,
        else_action_id,
    ) -> Tuple[ElseActionVote, int]:
        """Record a vote and return it with the suggestion's new vote count."""
        result = await db.execute(
            select(ElseAction)
            .options(selectinload(ElseAction.goal))
            .where(ElseAction.id == else_action_id)
        )
        else_action = result.scalar_one_or_none()
        if else_action is None:
            raise NotFoundError("Suggestion")

        if else_action.goal.status != GoalStatus.ACTIVE:
            raise GoalNotActiveError("Voting is only allowed on suggestions for active goals.")

        # Goal authors may vote on suggestions for their own goals.

        await user_service.sync_user(db, principal)

        vote = ElseActionVote(user_id=principal.id, else_action_id=else_action.id)
        try:
            db.add(vote)
            await db.flush()
            await db.execute(
                update(ElseAction)
                .where(ElseAction.id == else_action.id)
                .values(vote_count=ElseAction.vote_count + 1)
            )
            vote_count = (
                await db.execute(
                    select(ElseAction.vote_count).where(ElseAction.id == else_action.id)
                )
            ).scalar_one()
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            if is_duplicate_vote(exc):
                logger.info(
                    "Duplicate vote rejected",
                    extra={"else_action_id": str(else_action_id), "user_id": str(principal.id)},
                )
                raise DuplicateVoteError() from exc
            raise
        except Exception:
            await db.rollback()
            raise

        await db.refresh(vote)
        logger.info(
            "Vote cast",
            extra={"else_action_id": str(else_action_id), "vote_count": vote_count},
        )
        return vote, vote_count


vote_service = VoteService()
