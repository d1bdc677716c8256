"""Business logic for goal edits and completion toggles."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from goalbingo.errors import NotFoundError, ValidationError
from goalbingo.models.goal import Goal
from goalbingo.repositories.goal_repository import GoalRepository
from goalbingo.utils.sanitize import clean_optional, clean_text

logger = logging.getLogger(__name__)


class GoalService:
    """Goal use-cases."""

    def __init__(self, repository: GoalRepository | None = None) -> None:
        self._repo = repository or GoalRepository()

    def get_goal(self, session: Session, goal_id: int) -> Goal:
        goal = self._repo.get_by_id(session, goal_id)
        if goal is None:
            raise NotFoundError(message=f"Goal {goal_id} not found")
        return goal

    def update_goal(self, session: Session, goal_id: int, changes: dict[str, Any]) -> Goal:
        """Apply a partial update.

        ``changes`` uses the keys ``text``, ``is_completed``, ``completed_date``
        and ``notes``. Uncompleting clears the date and the notes. Notes are
        only stored together with ``is_completed=True``.
        """

        goal = self.get_goal(session, goal_id)
        fields: dict[str, Any] = {}

        if changes.get("text") is not None:
            fields["text"] = clean_text(changes["text"])

        is_completed = changes.get("is_completed")
        if "notes" in changes and is_completed is not True:
            raise ValidationError(
                "Notes can only be set when completing a goal",
                details={"notes": ["Requires isCompleted=true"]},
            )

        if is_completed is True:
            fields["is_completed"] = True
            fields["completed_date"] = changes.get("completed_date") or date.today()
            if "notes" in changes:
                fields["notes"] = clean_optional(changes["notes"]) or None
        elif is_completed is False:
            if goal.is_free_space:
                raise ValidationError(
                    "The free space is always complete",
                    details={"isCompleted": ["Free space cannot be uncompleted"]},
                )
            fields["is_completed"] = False
            fields["completed_date"] = None
            fields["notes"] = None

        if not fields:
            raise ValidationError("No updates provided")

        goal = self._repo.update(session, goal, fields)
        logger.debug("Goal updated id=%s card=%s fields=%s", goal.id, goal.card_code, sorted(fields))
        return goal
