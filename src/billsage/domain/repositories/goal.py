"""Goal repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.goal import Goal


class GoalRepository(Protocol):
    """Repository for managing goal entities."""

    def get_by_id(self, goal_id: int, *, user_id: int) -> Optional[Goal]:
        """Retrieve a goal by ID."""
        ...

    def list_all(self, *, user_id: int) -> list[Goal]:
        """List goals ordered by priority (high first), then newest first."""
        ...

    def list_active(self, *, user_id: int, limit: Optional[int] = None) -> list[Goal]:
        """List active goals in the same order as ``list_all``."""
        ...

    def create(self, goal: Goal, *, user_id: int) -> Goal:
        """Create a new goal."""
        ...

    def update(self, goal: Goal, *, user_id: int) -> Goal:
        """Update an existing goal."""
        ...

    def delete(self, goal_id: int, *, user_id: int) -> bool:
        """Delete a goal; return False when nothing matched."""
        ...
