"""SQLModel implementation of Goal repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.goal import Goal, GoalStatus
from ..database import SessionFactory


class SQLModelGoalRepository:
    """SQLModel-based goal repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _ordered(statement):
        return statement.order_by(
            Goal.priority.desc(),  # type: ignore
            Goal.created_at.desc(),  # type: ignore
            Goal.id.desc(),  # type: ignore
        )

    def get_by_id(self, goal_id: int, *, user_id: int) -> Optional[Goal]:
        """Retrieve a goal by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Goal]:
        """List goals ordered by priority (high first), then newest first."""
        with self.session_factory() as session:
            statement = self._ordered(select(Goal).where(Goal.user_id == user_id))
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active(self, *, user_id: int, limit: Optional[int] = None) -> list[Goal]:
        """List active goals in the same order as ``list_all``."""
        with self.session_factory() as session:
            statement = self._ordered(
                select(Goal)
                .where(Goal.user_id == user_id)
                .where(Goal.status == GoalStatus.ACTIVE.value)
            )
            if limit is not None:
                statement = statement.limit(limit)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, goal: Goal, *, user_id: int) -> Goal:
        """Create a new goal."""
        with self.session_factory() as session:
            goal.user_id = user_id
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def update(self, goal: Goal, *, user_id: int) -> Goal:
        """Update an existing goal."""
        with self.session_factory() as session:
            goal.user_id = user_id
            merged = session.merge(goal)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, goal_id: int, *, user_id: int) -> bool:
        """Delete a goal by ID."""
        with self.session_factory() as session:
            goal = session.exec(
                select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
            ).first()
            if goal is None:
                return False
            session.delete(goal)
            session.commit()
            return True
