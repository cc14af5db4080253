"""
fsrs_lite.stats
---------------

Summary helpers over a collection of cards, e.g. for a review dashboard.
"""

from __future__ import annotations
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TypedDict
from fsrs_lite.card import Card
from fsrs_lite.scheduler import Scheduler, _validate_datetime
from fsrs_lite.state import State


class CardStats(TypedDict):
    """
    Number of cards per learning state.
    """

    new: int
    learning: int
    review: int
    total: int


def get_due_count(cards: Iterable[Card], now: datetime | None = None) -> int:
    """
    Counts the cards that are due at the given date and time.

    Args:
        cards: The cards to count.
        now: The current date and time. Defaults to the current UTC time.

    Returns:
        int: The number of cards whose due date is not after `now`.

    Raises:
        ValueError: If `now` or a card's due date is not timezone-aware.
    """

    if now is None:
        now = datetime.now(timezone.utc)
    _validate_datetime(now, name="now")

    due_count = 0
    for card in cards:
        _validate_datetime(card.due, name="card.due")
        if card.due <= now:
            due_count += 1

    return due_count


def get_card_stats(cards: Iterable[Card]) -> CardStats:
    """
    Counts cards per learning state. Relearning cards count as learning.
    """

    stats: CardStats = {"new": 0, "learning": 0, "review": 0, "total": 0}

    for card in cards:
        match card.state:
            case State.New:
                stats["new"] += 1
            case State.Learning | State.Relearning:
                stats["learning"] += 1
            case State.Review:
                stats["review"] += 1
        stats["total"] += 1

    return stats


def get_average_retention(
    cards: Iterable[Card],
    now: datetime | None = None,
    scheduler: Scheduler | None = None,
) -> int:
    """
    Calculates the mean predicted retention of the cards in the Review state.

    Args:
        cards: The cards to average over. Only Review cards with a positive stability are used.
        now: The current date and time. Defaults to the current UTC time.
        scheduler: The scheduler whose forgetting curve is used. Defaults to a Scheduler with default parameters.

    Returns:
        int: The mean retrievability as a rounded percentage between 0 and 100, or 0 if no card qualifies.
    """

    if now is None:
        now = datetime.now(timezone.utc)
    if scheduler is None:
        scheduler = Scheduler()

    retentions = [
        scheduler.get_card_retrievability(card, now=now)
        for card in cards
        if card.state == State.Review and card.stability > 0
    ]

    if len(retentions) == 0:
        return 0

    # halves round up
    return int(sum(retentions) / len(retentions) * 100 + 0.5)


__all__ = ["CardStats", "get_due_count", "get_card_stats", "get_average_retention"]
