"""ORM models."""

from goalbingo.models.bingo import Bingo
from goalbingo.models.card import Card
from goalbingo.models.goal import Goal

__all__ = ["Bingo", "Card", "Goal"]
