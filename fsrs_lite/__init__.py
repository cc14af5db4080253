"""
fsrs-lite
---------

A pure FSRS-5 spaced repetition scheduler: given a card's memory state, a rating and the
current time, it computes the card's next memory state and due date.
"""

from fsrs_lite.scheduler import (
    Scheduler,
    SchedulingCards,
    SchedulingInfo,
    create_card,
    repeat,
    schedule,
)
from fsrs_lite.state import State
from fsrs_lite.card import Card
from fsrs_lite.rating import Rating
from fsrs_lite.review_log import ReviewLog
from fsrs_lite.parameters import DEFAULT_PARAMETERS, Parameters
from fsrs_lite.stats import get_average_retention, get_card_stats, get_due_count

__all__ = [
    "Scheduler",
    "SchedulingCards",
    "SchedulingInfo",
    "Card",
    "Rating",
    "ReviewLog",
    "State",
    "Parameters",
    "DEFAULT_PARAMETERS",
    "create_card",
    "repeat",
    "schedule",
    "get_due_count",
    "get_card_stats",
    "get_average_retention",
]
