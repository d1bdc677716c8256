"""Goal routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from goalbingo.db import get_session
from goalbingo.schemas.goal import GoalSchema, GoalUpdateSchema
from goalbingo.services.goal_service import GoalService
from goalbingo.utils.responses import ok

goals_bp = Blueprint("goals", __name__)

_goal_schema = GoalSchema()
_update_schema = GoalUpdateSchema()
_service = GoalService()


@goals_bp.put("/goals/<int:goal_id>")
def update_goal(goal_id: int):
    """Edit a goal's text or toggle its completion."""

    payload = request.get_json(silent=True) or {}
    data = _update_schema.load(payload)

    session = get_session()
    goal = _service.update_goal(session, goal_id, data)
    return ok(_goal_schema.dump(goal))
