"""Response builders shared by the endpoints.

Every status a client sees goes through ``goal_effective_status`` and every
suggestion list through ``rank_suggestions``.
"""

from datetime import datetime
from typing import Optional

from orelse.models.else_action import ElseAction
from orelse.models.goal import Goal, GoalStatus
from orelse.models.user import User
from orelse.models.vote import ElseActionVote
from orelse.services.lifecycle import as_utc, goal_effective_status, utcnow
from orelse.services.ranking import choose_winner, consequence_state, rank_suggestions


def build_user_summary(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return {"name": user.name, "image": user.image}


def build_suggestion_response(else_action: ElseAction) -> dict:
    return {
        "id": else_action.id,
        "goal_id": else_action.goal_id,
        "suggester_id": else_action.suggester_id,
        "suggestion": else_action.suggestion,
        "vote_count": else_action.vote_count,
        "created_at": as_utc(else_action.created_at),
        "suggester": build_user_summary(else_action.suggester),
    }


def build_goal_response(goal: Goal, now: Optional[datetime] = None) -> dict:
    """Goal fields plus its effective status."""
    return {
        "id": goal.id,
        "description": goal.description,
        "deadline": as_utc(goal.deadline),
        "is_public": goal.is_public,
        "author_id": goal.author_id,
        "status": goal.status,
        "effective_status": goal_effective_status(goal, now),
        "created_at": as_utc(goal.created_at),
    }


def build_goal_summary(goal: Goal, now: Optional[datetime] = None) -> dict:
    """Goal with author and chosen consequence; relations must be loaded."""
    now = now or utcnow()
    data = build_goal_response(goal, now)
    status = data["effective_status"]
    winner = choose_winner(status, rank_suggestions(goal.else_actions))

    data["author"] = build_user_summary(goal.author)
    data["consequence_state"] = consequence_state(status, winner).value
    data["chosen_suggestion"] = build_suggestion_response(winner) if winner else None
    return data


def build_goal_detail(goal: Goal, viewer_id: Optional[str], now: Optional[datetime] = None) -> dict:
    now = now or utcnow()
    data = build_goal_summary(goal, now)
    status = data["effective_status"]
    is_author = viewer_id is not None and viewer_id == goal.author_id

    data["suggestions"] = [build_suggestion_response(s) for s in rank_suggestions(goal.else_actions)]
    data["is_author"] = is_author
    data["can_suggest"] = viewer_id is not None and not is_author and status == GoalStatus.ACTIVE
    data["can_mark_complete"] = is_author and status == GoalStatus.ACTIVE
    return data


def build_vote_response(vote: ElseActionVote) -> dict:
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "else_action_id": vote.else_action_id,
        "created_at": as_utc(vote.created_at),
    }
