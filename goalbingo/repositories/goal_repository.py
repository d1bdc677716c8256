"""Repository layer for Goal persistence."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from goalbingo.models.goal import Goal


class GoalRepository:
    def get_by_id(self, session: Session, goal_id: int) -> Goal | None:
        return session.get(Goal, goal_id)

    def update(self, session: Session, goal: Goal, fields: dict[str, Any]) -> Goal:
        for name, value in fields.items():
            setattr(goal, name, value)
        session.flush()
        return goal
