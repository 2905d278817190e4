"""Suggestion ("or else") creation and listing."""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orelse.core.exceptions import ForbiddenError, GoalNotActiveError, NotFoundError
from orelse.core.security import Principal
from orelse.models.else_action import ElseAction
from orelse.models.goal import GoalStatus
from orelse.services.goal_service import goal_service
from orelse.services.ranking import ranking_order
from orelse.services.user_service import user_service

logger = logging.getLogger(__name__)


class SuggestionService:
    """Suggestions are proposed by anyone but the goal's author."""

    async def create_suggestion(
        self,
        db: AsyncSession,
        principal: Principal,
        goal_id: UUID,
        text: str,
    ) -> ElseAction:
        goal = await goal_service.get_goal(db, goal_id)
        if goal is None:
            raise NotFoundError("Goal")

        # Rejected whatever the goal's status
        if goal.author_id == principal.id:
            raise ForbiddenError("You cannot make 'Or Else' suggestions for your own goal.")

        if goal.status != GoalStatus.ACTIVE:
            raise GoalNotActiveError("Suggestions can only be made for active goals.")

        await user_service.sync_user(db, principal)

        else_action = ElseAction(
            goal_id=goal.id,
            suggester_id=principal.id,
            suggestion=text,
            vote_count=0,
        )
        db.add(else_action)
        await db.commit()

        result = await db.execute(
            select(ElseAction)
            .options(selectinload(ElseAction.suggester))
            .where(ElseAction.id == else_action.id)
            .execution_options(populate_existing=True)
        )
        else_action = result.scalar_one()

        logger.info(
            "Suggestion created",
            extra={"else_action_id": str(else_action.id), "goal_id": str(goal.id)},
        )
        return else_action

    async def list_for_goal(self, db: AsyncSession, goal_id: UUID) -> List[ElseAction]:
        """Suggestions for a goal in ranking order."""
        result = await db.execute(
            select(ElseAction)
            .options(selectinload(ElseAction.suggester))
            .where(ElseAction.goal_id == goal_id)
            .order_by(*ranking_order())
        )
        return list(result.scalars().all())


suggestion_service = SuggestionService()
