"""
fsrs_lite.scheduler
-------------------

This module defines the Scheduler class along with the module-level scheduling functions.

Classes:
    Scheduler: The FSRS spaced-repetition scheduler.
    SchedulingInfo: The outcome of reviewing a card with one rating.
    SchedulingCards: The outcomes of reviewing a card with each of the four ratings.
"""

from __future__ import annotations
from collections.abc import Iterator
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
import json
import logging
import math
from typing_extensions import Self
from fsrs_lite.card import Card
from fsrs_lite.parameters import DEFAULT_PARAMETERS, Parameters, ParametersDict
from fsrs_lite.rating import Rating
from fsrs_lite.review_log import ReviewLog
from fsrs_lite.state import State

logger = logging.getLogger(__name__)

MIN_DIFFICULTY = 1.0
MAX_DIFFICULTY = 10.0
MIN_INITIAL_STABILITY = 0.1

# same-session relearn delay for cards scheduled 0 days out
RELEARN_DELAY = timedelta(seconds=60)


@dataclass(frozen=True)
class SchedulingInfo:
    """
    The outcome of reviewing a card with a single rating.

    Attributes:
        card: The updated card.
        log: The review log entry, holding the card's values from before the review.
    """

    card: Card
    log: ReviewLog


@dataclass(frozen=True)
class SchedulingCards:
    """
    The outcomes of reviewing the same card with each of the four ratings.
    """

    again: SchedulingInfo
    hard: SchedulingInfo
    good: SchedulingInfo
    easy: SchedulingInfo

    def __getitem__(self, rating: Rating) -> SchedulingInfo:
        return getattr(self, Rating(rating).name.lower())

    def __iter__(self) -> Iterator[SchedulingInfo]:
        return iter((self.again, self.hard, self.good, self.easy))


@dataclass(frozen=True)
class Scheduler:
    """
    The FSRS scheduler.

    Computes the next memory state and due date of a card from its current state, a
    rating and the time of the review. A Scheduler holds no mutable state; it never
    modifies the cards passed to it.

    Attributes:
        parameters: The model weights, target retention and maximum interval of the scheduler.
    """

    parameters: Parameters = DEFAULT_PARAMETERS

    def create_card(self, now: datetime | None = None) -> Card:
        """
        Creates a new, never reviewed card that is due immediately.

        Args:
            now: The creation date and time. Defaults to the current UTC time.

        Returns:
            Card: A card in the New state.
        """

        if now is None:
            now = datetime.now(timezone.utc)
        _validate_datetime(now, name="now")

        return Card(state=State.New, due=now)

    def repeat(self, card: Card, now: datetime | None = None) -> SchedulingCards:
        """
        Previews the outcome of reviewing a card with every possible rating.

        Args:
            card: The card being reviewed.
            now: The date and time of the review. Defaults to the current UTC time.

        Returns:
            SchedulingCards: One SchedulingInfo per rating.

        Raises:
            ValueError: If the card or `now` is invalid.
        """

        if now is None:
            now = datetime.now(timezone.utc)
        _validate_datetime(now, name="now")
        _validate_card(card)

        again, hard, good, easy = (
            self._schedule(card=card, rating=rating, now=now, review_duration=None)
            for rating in Rating
        )

        return SchedulingCards(again=again, hard=hard, good=good, easy=easy)

    def schedule(
        self,
        card: Card,
        rating: Rating,
        now: datetime | None = None,
        review_duration: int | None = None,
    ) -> SchedulingInfo:
        """
        Reviews a card with a given rating at a given time.

        Args:
            card: The card being reviewed.
            rating: The chosen rating for the card being reviewed.
            now: The date and time of the review. Defaults to the current UTC time.
            review_duration: The number of milliseconds it took to review the card or None if unspecified.

        Returns:
            SchedulingInfo: The updated card and its corresponding review log.

        Raises:
            ValueError: If the rating is not between 1 and 4, `now` is not timezone-aware
                or the card's fields are outside their valid ranges.
        """

        rating = _validate_rating(rating)
        if now is None:
            now = datetime.now(timezone.utc)
        _validate_datetime(now, name="now")
        _validate_card(card)

        scheduling_info = self._schedule(
            card=card, rating=rating, now=now, review_duration=review_duration
        )

        logger.debug(
            "Scheduled %s card with rating %s: now %s, %d day(s) out, due %s",
            State(card.state).name,
            rating.name,
            scheduling_info.card.state.name,
            scheduling_info.card.scheduled_days,
            scheduling_info.card.due.isoformat(),
        )

        return scheduling_info

    def get_card_retrievability(
        self, card: Card, now: datetime | None = None
    ) -> float:
        """
        Calculates a card's current retrievability.

        The retrievability of a card is the predicted probability that the card is
        correctly recalled at the given date and time.

        Args:
            card: The card whose retrievability is to be calculated.
            now: The current date and time. Defaults to the current UTC time.

        Returns:
            float: The retrievability of the card, or 0 if it has no memory state yet.

        Raises:
            ValueError: If `now` or the card's due date is not timezone-aware.
        """

        if now is None:
            now = datetime.now(timezone.utc)
        _validate_datetime(now, name="now")
        _validate_datetime(card.due, name="card.due")

        if card.state == State.New or card.stability <= 0:
            return 0.0

        return self._forgetting_curve(
            elapsed_days=self._elapsed_days(card=card, now=now),
            stability=card.stability,
        )

    def to_dict(self) -> ParametersDict:
        return self.parameters.to_dict()

    @classmethod
    def from_dict(cls, source_dict: ParametersDict) -> Self:
        return cls(parameters=Parameters.from_dict(source_dict))

    def to_json(self, indent: int | str | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, source_json: str) -> Self:
        source_dict: ParametersDict = json.loads(source_json)
        return cls.from_dict(source_dict=source_dict)

    def _schedule(
        self,
        *,
        card: Card,
        rating: Rating,
        now: datetime,
        review_duration: int | None,
    ) -> SchedulingInfo:
        review_log = ReviewLog(
            rating=rating,
            state=card.state,
            due=card.due,
            stability=card.stability,
            difficulty=card.difficulty,
            elapsed_days=card.elapsed_days,
            scheduled_days=card.scheduled_days,
            reviewed_at=now,
            review_duration=review_duration,
        )

        next_card = replace(card, elapsed_days=self._elapsed_days(card=card, now=now))

        match card.state:
            case State.New:
                next_card = self._new_state(card=next_card, rating=rating)
            case State.Learning | State.Relearning:
                next_card = self._learning_state(card=next_card, rating=rating)
            case State.Review:
                next_card = self._review_state(card=next_card, rating=rating)

        next_card = replace(
            next_card,
            due=self._next_due(now=now, scheduled_days=next_card.scheduled_days),
        )

        return SchedulingInfo(card=next_card, log=review_log)

    def _new_state(self, *, card: Card, rating: Rating) -> Card:
        difficulty = self._initial_difficulty(rating=rating)
        stability = self._initial_stability(rating=rating)

        match rating:
            case Rating.Again | Rating.Hard:
                return replace(
                    card,
                    state=State.Learning,
                    difficulty=difficulty,
                    stability=stability,
                    scheduled_days=0,
                )

            case Rating.Good | Rating.Easy:
                return replace(
                    card,
                    state=State.Review,
                    difficulty=difficulty,
                    stability=stability,
                    scheduled_days=self._next_interval(stability=stability),
                    reps=1,
                )

    def _learning_state(self, *, card: Card, rating: Rating) -> Card:
        match rating:
            case Rating.Again | Rating.Hard:
                # state, difficulty and stability stay the same
                return replace(card, scheduled_days=0)

            case Rating.Good | Rating.Easy:
                stability = self._initial_stability(rating=rating)

                return replace(
                    card,
                    state=State.Review,
                    stability=stability,
                    scheduled_days=self._next_interval(stability=stability),
                    reps=card.reps + 1,
                )

    def _review_state(self, *, card: Card, rating: Rating) -> Card:
        retrievability = self._forgetting_curve(
            elapsed_days=card.elapsed_days, stability=card.stability
        )

        # the stability update uses the already updated difficulty
        difficulty = self._next_difficulty(difficulty=card.difficulty, rating=rating)

        if rating == Rating.Again:
            stability = self._next_forget_stability(
                difficulty=difficulty,
                stability=card.stability,
                retrievability=retrievability,
            )

            return replace(
                card,
                state=State.Relearning,
                difficulty=difficulty,
                stability=stability,
                scheduled_days=0,
                lapses=card.lapses + 1,
            )

        stability = self._next_recall_stability(
            difficulty=difficulty,
            stability=card.stability,
            retrievability=retrievability,
            rating=rating,
        )

        return replace(
            card,
            state=State.Review,
            difficulty=difficulty,
            stability=stability,
            scheduled_days=self._next_interval(stability=stability),
            reps=card.reps + 1,
        )

    def _elapsed_days(self, *, card: Card, now: datetime) -> float:
        if card.state == State.New:
            return 0.0

        # measured on absolute time, independent of either datetime's timezone
        elapsed = now.astimezone(timezone.utc) - card.due.astimezone(timezone.utc)

        return max(0.0, elapsed / timedelta(days=1))

    def _next_due(self, *, now: datetime, scheduled_days: int) -> datetime:
        if scheduled_days == 0:
            return (now.astimezone(timezone.utc) + RELEARN_DELAY).astimezone(
                now.tzinfo
            )

        # calendar days: keeps the wall-clock time of `now` across DST changes
        return now + timedelta(days=int(scheduled_days))

    def _forgetting_curve(self, *, elapsed_days: float, stability: float) -> float:
        return (1 + elapsed_days / (9 * stability)) ** -1

    def _initial_difficulty(self, *, rating: Rating) -> float:
        w = self.parameters.w

        initial_difficulty = w[4] - math.exp(w[5] * (rating - 1)) + 1

        return _clamp(initial_difficulty, MIN_DIFFICULTY, MAX_DIFFICULTY)

    def _initial_stability(self, *, rating: Rating) -> float:
        return max(MIN_INITIAL_STABILITY, self.parameters.w[rating - 1])

    def _next_difficulty(self, *, difficulty: float, rating: Rating) -> float:
        w = self.parameters.w

        next_difficulty = self._mean_reversion(
            initial=w[4], current=difficulty - w[6] * (rating - 3)
        )

        return _clamp(next_difficulty, MIN_DIFFICULTY, MAX_DIFFICULTY)

    def _mean_reversion(self, *, initial: float, current: float) -> float:
        w = self.parameters.w

        return w[7] * initial + (1 - w[7]) * current

    def _next_recall_stability(
        self,
        *,
        difficulty: float,
        stability: float,
        retrievability: float,
        rating: Rating,
    ) -> float:
        w = self.parameters.w

        hard_penalty = w[15] if rating == Rating.Hard else 1
        easy_bonus = w[16] if rating == Rating.Easy else 1

        return stability * (
            1
            + math.exp(w[8])
            * (11 - difficulty)
            * (stability ** -w[9])
            * (math.exp((1 - retrievability) * w[10]) - 1)
            * hard_penalty
            * easy_bonus
        )

    def _next_forget_stability(
        self, *, difficulty: float, stability: float, retrievability: float
    ) -> float:
        w = self.parameters.w

        return (
            w[11]
            * (difficulty ** -w[12])
            * (((stability + 1) ** w[13]) - 1)
            * math.exp((1 - retrievability) * w[14])
        )

    def _next_interval(self, *, stability: float) -> int:
        # request_retention ** (1 / -0.5) is request_retention ** -2, which gives
        # shorter intervals than the published FSRS-5 interval formula
        next_interval = (stability / 0.9) * (
            self.parameters.request_retention ** (1 / -0.5) - 1
        )

        # can not be longer than the maximum interval
        next_interval = min(next_interval, self.parameters.maximum_interval)

        # intervals are full days, halves round up
        next_interval = math.floor(next_interval + 0.5)

        # must be at least 1 day long
        return max(next_interval, 1)


def _clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min(value, max_value), min_value)


def _validate_rating(rating: Rating) -> Rating:
    if isinstance(rating, bool) or rating not in tuple(Rating):
        raise ValueError(f"rating must be one of 1, 2, 3 or 4, got {rating!r}")

    return Rating(rating)


def _validate_datetime(value: datetime, *, name: str) -> None:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware, got {value!r}")


def _validate_card(card: Card) -> None:
    State(card.state)
    _validate_datetime(card.due, name="card.due")

    error_messages = []

    for name in ("stability", "difficulty", "elapsed_days"):
        value = getattr(card, name)
        if not math.isfinite(value) or value < 0:
            error_messages.append(f"{name} = {value} must be finite and non-negative")

    for name in ("scheduled_days", "reps", "lapses"):
        value = getattr(card, name)
        if value < 0:
            error_messages.append(f"{name} = {value} must be non-negative")

    if card.state != State.New:
        if card.stability <= 0:
            error_messages.append(
                f"stability = {card.stability} must be positive once a card is reviewed"
            )
        if not MIN_DIFFICULTY <= card.difficulty <= MAX_DIFFICULTY:
            error_messages.append(
                f"difficulty = {card.difficulty} is out of bounds: ({MIN_DIFFICULTY}, {MAX_DIFFICULTY})"
            )

    if len(error_messages) > 0:
        raise ValueError(
            f"Invalid {State(card.state).name} card:\n" + "\n".join(error_messages)
        )


_DEFAULT_SCHEDULER = Scheduler()


def create_card(now: datetime | None = None) -> Card:
    """Creates a new card with the default scheduler."""
    return _DEFAULT_SCHEDULER.create_card(now=now)


def repeat(card: Card, now: datetime | None = None) -> SchedulingCards:
    """Previews every rating's outcome with the default scheduler."""
    return _DEFAULT_SCHEDULER.repeat(card, now=now)


def schedule(
    card: Card,
    rating: Rating,
    now: datetime | None = None,
    review_duration: int | None = None,
) -> SchedulingInfo:
    """Reviews a card with the default scheduler."""
    return _DEFAULT_SCHEDULER.schedule(
        card, rating, now=now, review_duration=review_duration
    )


__all__ = [
    "Scheduler",
    "SchedulingInfo",
    "SchedulingCards",
    "create_card",
    "repeat",
    "schedule",
]
