"""Bingo reconciliation.

Makes a persisted set of bingo lines equal to the set of complete lines.
Planning is a pure set difference; applying goes through caller supplied
``add``/``remove`` callables so the same steps run against the database
(server side) and against the HTTP API (client side).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from goalbingo.services.line_detection import Line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcilePlan:
    to_add: frozenset[Line]
    to_remove: frozenset[Line]

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


@dataclass(frozen=True)
class ReconcileOutcome:
    """What actually happened when a plan was applied."""

    plan: ReconcilePlan
    added: frozenset[Line] = frozenset()
    removed: frozenset[Line] = frozenset()
    failed: frozenset[Line] = frozenset()

    @property
    def converged(self) -> bool:
        return not self.failed

    def apply_to(self, persisted: Iterable[Line]) -> frozenset[Line]:
        """Persisted set after this outcome, counting only operations that succeeded."""

        return (frozenset(persisted) - self.removed) | self.added


def plan_reconciliation(detected: Iterable[Line], persisted: Iterable[Line]) -> ReconcilePlan:
    detected_set = frozenset(detected)
    persisted_set = frozenset(persisted)
    return ReconcilePlan(
        to_add=detected_set - persisted_set,
        to_remove=persisted_set - detected_set,
    )


def apply_plan(
    plan: ReconcilePlan,
    *,
    add: Callable[[Line], object],
    remove: Callable[[Line], object],
    tolerate: tuple[type[Exception], ...] = (),
) -> ReconcileOutcome:
    """Apply ``plan`` one line at a time.

    Exceptions listed in ``tolerate`` are logged and recorded as failed lines;
    the next reconciliation pass picks them up again. Anything else propagates.
    """

    added: set[Line] = set()
    removed: set[Line] = set()
    failed: set[Line] = set()

    for line in sorted(plan.to_remove):
        try:
            remove(line)
        except tolerate as exc:
            logger.warning("Failed to remove bingo %s: %s", line, exc)
            failed.add(line)
        else:
            removed.add(line)

    for line in sorted(plan.to_add):
        try:
            add(line)
        except tolerate as exc:
            logger.warning("Failed to add bingo %s: %s", line, exc)
            failed.add(line)
        else:
            added.add(line)

    return ReconcileOutcome(
        plan=plan,
        added=frozenset(added),
        removed=frozenset(removed),
        failed=frozenset(failed),
    )


def celebration_due(plan: ReconcilePlan, *, newly_completed: bool) -> bool:
    """Celebrate only when completing a goal produced at least one new line."""

    return newly_completed and bool(plan.to_add)

