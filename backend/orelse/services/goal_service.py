"""Goal creation, completion and read models."""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orelse.core.exceptions import ForbiddenError, GoalNotActiveError, NotFoundError
from orelse.core.security import Principal
from orelse.models.else_action import ElseAction
from orelse.models.goal import Goal, GoalStatus
from orelse.services.lifecycle import as_utc
from orelse.services.user_service import user_service

logger = logging.getLogger(__name__)


def _with_relations(query):
    return query.options(
        selectinload(Goal.author),
        selectinload(Goal.else_actions).selectinload(ElseAction.suggester),
    )


class GoalService:
    """Goal mutations and queries."""

    async def create_goal(
        self,
        db: AsyncSession,
        principal: Principal,
        description: str,
        deadline: datetime,
        is_public: bool = True,
    ) -> Goal:
        await user_service.sync_user(db, principal)

        goal = Goal(
            author_id=principal.id,
            description=description,
            deadline=as_utc(deadline),
            is_public=is_public,
            status=GoalStatus.ACTIVE,
        )
        db.add(goal)
        await db.commit()
        await db.refresh(goal)

        logger.info(
            "Goal created",
            extra={"goal_id": str(goal.id), "author_id": str(principal.id), "is_public": is_public},
        )
        return goal

    async def get_goal(self, db: AsyncSession, goal_id: UUID) -> Optional[Goal]:
        result = await db.execute(select(Goal).where(Goal.id == goal_id))
        return result.scalar_one_or_none()

    async def mark_complete(self, db: AsyncSession, principal: Principal, goal_id: UUID) -> Goal:
        """Move a goal from ACTIVE to COMPLETED.

        Checks run in order: existence, authorship, stored status. The stored
        status is checked rather than the effective one, so an author may
        still complete a goal whose deadline passed unnoticed.
        """
        goal = await self.get_goal(db, goal_id)
        if goal is None:
            raise NotFoundError("Goal")

        if goal.author_id != principal.id:
            raise ForbiddenError("You are not authorized to update this goal.")

        if goal.status != GoalStatus.ACTIVE:
            raise GoalNotActiveError(f"Goal is not active. Current status: {goal.status.value}")

        goal.status = GoalStatus.COMPLETED
        await db.commit()
        await db.refresh(goal)

        logger.info("Goal marked complete", extra={"goal_id": str(goal.id)})
        return goal

    async def get_visible_goal(
        self,
        db: AsyncSession,
        goal_id: UUID,
        viewer_id: Optional[str],
    ) -> Goal:
        """Load a goal with author and suggestions if the viewer may see it."""
        result = await db.execute(_with_relations(select(Goal).where(Goal.id == goal_id)))
        goal = result.scalar_one_or_none()
        if goal is None or not (goal.is_public or goal.author_id == viewer_id):
            raise NotFoundError("Goal")
        return goal

    async def list_public_goals(self, db: AsyncSession, limit: int) -> List[Goal]:
        result = await db.execute(
            _with_relations(
                select(Goal)
                .where(Goal.is_public.is_(True))
                .order_by(Goal.deadline.desc())
                .limit(limit)
            )
        )
        return list(result.scalars().all())

    async def list_author_goals(self, db: AsyncSession, author_id: str) -> List[Goal]:
        result = await db.execute(
            _with_relations(
                select(Goal)
                .where(Goal.author_id == author_id)
                .order_by(Goal.status.asc(), Goal.deadline.asc())
            )
        )
        return list(result.scalars().all())


goal_service = GoalService()
