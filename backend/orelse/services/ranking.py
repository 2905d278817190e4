"""Suggestion ranking and winner selection.

Suggestions are ordered by vote count, highest first; ties go to the
earliest submission. The same rule is available as a SQL ``ORDER BY`` and
as an in-memory sort so listings and winner selection never disagree.
"""

import enum
from typing import Iterable, List, Optional, Sequence, Tuple

from orelse.models.else_action import ElseAction
from orelse.models.goal import GoalStatus
from orelse.services.lifecycle import as_utc


class ConsequenceState(str, enum.Enum):
    PENDING = "pending"  # goal not (effectively) failed
    NONE_SUGGESTED = "none_suggested"
    CHOSEN = "chosen"


def ranking_order() -> Tuple:
    """ORDER BY clauses for ranked suggestion queries."""
    return (ElseAction.vote_count.desc(), ElseAction.created_at.asc())


def rank_suggestions(suggestions: Iterable[ElseAction]) -> List[ElseAction]:
    """Return suggestions in ranking order (stable for full ties)."""
    return sorted(
        suggestions,
        key=lambda s: (-(s.vote_count or 0), as_utc(s.created_at)),
    )


def choose_winner(
    status: GoalStatus,
    ranked: Sequence[ElseAction],
) -> Optional[ElseAction]:
    """Pick the binding consequence for a goal with the given effective status.

    Only a FAILED goal has a winner. ``ranked`` must already be in ranking
    order.
    """
    if status != GoalStatus.FAILED or not ranked:
        return None
    return ranked[0]


def consequence_state(status: GoalStatus, winner: Optional[ElseAction]) -> ConsequenceState:
    if status != GoalStatus.FAILED:
        return ConsequenceState.PENDING
    if winner is None:
        return ConsequenceState.NONE_SUGGESTED
    return ConsequenceState.CHOSEN
