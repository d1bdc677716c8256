"""Client-side card session.

Each operation takes a CardState and returns a new one; nothing is kept in
module globals. After a goal changes, bingos are synced by recomputing every
line locally, sending only the add/remove calls that differ, and applying the
successful ones to the returned state instead of re-reading the card.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from goalbingo.client.api import ApiError, BingoApiClient
from goalbingo.services.reconciler import (
    ReconcileOutcome,
    apply_plan,
    celebration_due,
    plan_reconciliation,
)
from goalbingo.services.line_detection import Grid, Line, build_grid, detect_complete_lines

logger = logging.getLogger(__name__)


class ReadOnlyCardError(Exception):
    """Raised when mutating a card that was opened for viewing only."""


@dataclass(frozen=True)
class GoalView:
    id: int
    position: int
    text: str
    is_free_space: bool = False
    is_completed: bool = False
    completed_date: date | None = None
    notes: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> GoalView:
        raw_date = data.get("completed_date")
        return cls(
            id=int(data["id"]),
            position=int(data["position"]),
            text=str(data["text"]),
            is_free_space=bool(data.get("is_free_space")),
            is_completed=bool(data.get("is_completed")),
            completed_date=date.fromisoformat(raw_date) if raw_date else None,
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class CardState:
    """Snapshot of one card as the client last saw it."""

    card: dict[str, Any]
    goals: tuple[GoalView, ...]
    bingos: frozenset[Line] = frozenset()
    read_only: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any], *, read_only: bool = False) -> CardState:
        goals = sorted((GoalView.from_json(g) for g in data.get("goals") or []), key=lambda g: g.position)
        bingos = frozenset(Line(b["type"], int(b["index"])) for b in data.get("bingos") or [])
        return cls(card=dict(data["card"]), goals=tuple(goals), bingos=bingos, read_only=read_only)

    @property
    def code(self) -> str:
        return str(self.card["code"])

    @property
    def bingo_count(self) -> int:
        return len(self.bingos)

    @property
    def grid(self) -> Grid:
        return build_grid(self.goals)

    def goal(self, goal_id: int) -> GoalView:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        raise KeyError(f"Goal {goal_id} is not on card {self.code}")

    def with_goal(self, updated: GoalView) -> CardState:
        goals = tuple(updated if g.id == updated.id else g for g in self.goals)
        return replace(self, goals=goals)


@dataclass(frozen=True)
class SyncResult:
    state: CardState
    outcome: ReconcileOutcome
    celebrate: bool = False

    @property
    def failed(self) -> frozenset[Line]:
        return self.outcome.failed


def load_card(client: BingoApiClient, code: str, *, read_only: bool = False) -> CardState:
    """Fetch a card. ``read_only`` is used when viewing someone else's card."""

    return CardState.from_json(client.get_card(code.strip().upper()), read_only=read_only)


def refresh(client: BingoApiClient, state: CardState) -> CardState:
    return load_card(client, state.code, read_only=state.read_only)


def create_card(client: BingoApiClient, owner_name: str, goals: list[str], free_space_index: int) -> CardState:
    code = client.create_card(owner_name, goals, free_space_index)
    return load_card(client, code)


def _ensure_writable(state: CardState) -> None:
    if state.read_only:
        raise ReadOnlyCardError(f"Card {state.code} was opened read-only")


def sync_bingos(client: BingoApiClient, state: CardState, *, newly_completed: bool = False) -> SyncResult:
    """Bring the card's bingo records in line with its goals.

    Failed add/remove calls are logged and skipped; they stay out of the
    returned state so the next sync retries them.
    """

    detected = detect_complete_lines(state.grid)
    plan = plan_reconciliation(detected, state.bingos)
    outcome = apply_plan(
        plan,
        add=lambda line: client.add_bingo(state.code, line),
        remove=lambda line: client.remove_bingo(state.code, line),
        tolerate=(ApiError,),
    )
    new_state = replace(state, bingos=outcome.apply_to(state.bingos))
    return SyncResult(
        state=new_state,
        outcome=outcome,
        celebrate=celebration_due(plan, newly_completed=newly_completed),
    )


def complete_goal(
    client: BingoApiClient,
    state: CardState,
    goal_id: int,
    *,
    completed_date: date | None = None,
    notes: str | None = None,
) -> SyncResult:
    """Mark a goal complete, then sync bingos.

    ``celebrate`` is set when this completion produced at least one new line.
    """

    _ensure_writable(state)
    was_completed = state.goal(goal_id).is_completed
    data = client.update_goal(goal_id, is_completed=True, completed_date=completed_date, notes=notes)
    state = state.with_goal(GoalView.from_json(data))
    return sync_bingos(client, state, newly_completed=not was_completed)


def uncomplete_goal(client: BingoApiClient, state: CardState, goal_id: int) -> SyncResult:
    _ensure_writable(state)
    data = client.update_goal(goal_id, is_completed=False)
    state = state.with_goal(GoalView.from_json(data))
    return sync_bingos(client, state)


def edit_goal_text(client: BingoApiClient, state: CardState, goal_id: int, text: str) -> CardState:
    _ensure_writable(state)
    data = client.update_goal(goal_id, text=text)
    return state.with_goal(GoalView.from_json(data))


def save_settings(client: BingoApiClient, state: CardState, **settings: Any) -> CardState:
    """Save display settings (``displayName``, ``theme``, ``stampIcon``, ``stampColor``)."""

    _ensure_writable(state)
    card = client.update_card(state.code, **settings)
    return replace(state, card=dict(card))


def delete_card(client: BingoApiClient, state: CardState, owner_name: str) -> None:
    _ensure_writable(state)
    client.delete_card(state.code, owner_name)
    logger.info("Deleted card %s", state.code)
