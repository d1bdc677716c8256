"""Python client for the goal bingo API."""

from goalbingo.client.api import ApiError, BingoApiClient, NetworkFailure
from goalbingo.client.session import (
    CardState,
    GoalView,
    ReadOnlyCardError,
    SyncResult,
    complete_goal,
    create_card,
    delete_card,
    edit_goal_text,
    load_card,
    refresh,
    save_settings,
    sync_bingos,
    uncomplete_goal,
)

__all__ = [
    "ApiError",
    "BingoApiClient",
    "CardState",
    "GoalView",
    "NetworkFailure",
    "ReadOnlyCardError",
    "SyncResult",
    "complete_goal",
    "create_card",
    "delete_card",
    "edit_goal_text",
    "load_card",
    "refresh",
    "save_settings",
    "sync_bingos",
    "uncomplete_goal",
]
