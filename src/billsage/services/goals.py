"""Goal tracking: add, toggle, delete and the active/completed board."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Optional, Union

from ..errors import PreconditionError, RecordNotFoundError
from ..logging_config import get_logger
from ..models.goal import Goal, GoalPriority, GoalStatus
from .day_detail import AmountInput, parse_amount

if TYPE_CHECKING:
    from ..context import UserSession
    from ..domain.repositories import GoalRepository

logger = get_logger("services.goals")


@dataclass(slots=True)
class GoalBoard:
    """Goals split for display; each side is ordered priority-desc then newest-first."""

    active: list[Goal] = field(default_factory=list)
    completed: list[Goal] = field(default_factory=list)


def parse_priority(raw: Union[int, str, GoalPriority]) -> GoalPriority:
    """Accept an int or a digit string; bools, floats and anything else are rejected."""

    message = "Priority must be 1 (low), 2 (medium) or 3 (high)"
    if isinstance(raw, str) and raw.strip().isdigit():
        raw = int(raw.strip())
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise PreconditionError(message)
    try:
        return GoalPriority(raw)
    except ValueError as exc:
        raise PreconditionError(message) from exc


class GoalTracker:
    """CRUD and status toggling over goal records."""

    def __init__(self, goal_repo: "GoalRepository"):
        self.goal_repo = goal_repo

    def list_goals(self, session: "UserSession") -> GoalBoard:
        """Partition goals into active and completed; paused goals appear in neither."""

        board = GoalBoard()
        for goal in self.goal_repo.list_all(user_id=session.user_id):
            if goal.status == GoalStatus.ACTIVE:
                board.active.append(goal)
            elif goal.status == GoalStatus.COMPLETED:
                board.completed.append(goal)
        return board

    def add_goal(
        self,
        session: "UserSession",
        text: str,
        target_amount: AmountInput = None,
        target_date: Optional[date] = None,
        priority: Union[int, str, GoalPriority] = GoalPriority.LOW,
    ) -> GoalBoard:
        text = (text or "").strip()
        if not text:
            raise PreconditionError("Goal text is required")
        goal = Goal(
            user_id=session.user_id,
            goal=text,
            target_amount=parse_amount(target_amount),
            target_date=target_date,
            priority=int(parse_priority(priority)),
            status=GoalStatus.ACTIVE.value,
        )
        created = self.goal_repo.create(goal, user_id=session.user_id)
        logger.info("Goal created", extra={"goal_id": created.id, "priority": created.priority})
        return self.list_goals(session)

    def toggle_status(self, session: "UserSession", goal_id: int) -> GoalBoard:
        """Active goals become completed; anything else becomes active."""

        goal = self._require(session, goal_id)
        target = GoalStatus.COMPLETED if goal.status == GoalStatus.ACTIVE else GoalStatus.ACTIVE
        goal.status = target.value
        goal.updated_at = datetime.now(timezone.utc)
        self.goal_repo.update(goal, user_id=session.user_id)
        logger.info("Goal status updated", extra={"goal_id": goal_id, "status": target.value})
        return self.list_goals(session)

    def delete_goal(self, session: "UserSession", goal_id: int) -> GoalBoard:
        self._require(session, goal_id)
        self.goal_repo.delete(goal_id, user_id=session.user_id)
        logger.info("Goal deleted", extra={"goal_id": goal_id})
        return self.list_goals(session)

    def _require(self, session: "UserSession", goal_id: int) -> Goal:
        goal = self.goal_repo.get_by_id(goal_id, user_id=session.user_id)
        if goal is None:
            raise RecordNotFoundError(f"Goal {goal_id} not found")
        return goal


__all__ = ["GoalBoard", "GoalTracker", "parse_priority"]
