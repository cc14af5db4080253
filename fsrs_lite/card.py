"""
fsrs_lite.card
--------------

This module defines the Card class.

Classes:
    Card: Represents the memory state of a flashcard at a point in time.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
from typing import TypedDict
from typing_extensions import Self
from fsrs_lite.state import State


class CardDict(TypedDict):
    """
    JSON-serializable dictionary representation of a Card object.
    """

    state: int
    due: str
    stability: float
    difficulty: float
    elapsed_days: float
    scheduled_days: int
    reps: int
    lapses: int


@dataclass(frozen=True)
class Card:
    """
    Represents the memory state of a flashcard.

    Card objects are immutable: reviewing a card returns a new Card and leaves
    the reviewed one untouched.

    Attributes:
        state: The card's current learning state.
        due: The date and time when the card is due next.
        stability: Days until the probability of recall decays to the target retention.
        difficulty: Intrinsic hardness of the card, between 1 and 10 once reviewed (0 while New).
        elapsed_days: Days between the card becoming due and its last review.
        scheduled_days: The interval scheduled on the last review, 0 for a same-session relearn.
        reps: Number of successful reviews.
        lapses: Number of times the card was forgotten while in the Review state.
    """

    state: State = State.New
    due: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stability: float = 0.0
    difficulty: float = 0.0
    elapsed_days: float = 0.0
    scheduled_days: int = 0
    reps: int = 0
    lapses: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "state", State(self.state))

    def to_dict(self) -> CardDict:
        """
        Returns a JSON-serializable dictionary representation of the Card object.

        This method is specifically useful for storing Card objects in a database.

        Returns:
            A dictionary representation of the Card object.
        """

        return {
            "state": int(self.state),
            "due": self.due.isoformat(),
            "stability": self.stability,
            "difficulty": self.difficulty,
            "elapsed_days": self.elapsed_days,
            "scheduled_days": self.scheduled_days,
            "reps": self.reps,
            "lapses": self.lapses,
        }

    @classmethod
    def from_dict(cls, source_dict: CardDict) -> Self:
        """
        Creates a Card object from an existing dictionary.

        Args:
            source_dict: A dictionary representing an existing Card object.

        Returns:
            A Card object created from the provided dictionary.
        """

        return cls(
            state=State(int(source_dict["state"])),
            due=datetime.fromisoformat(source_dict["due"]),
            stability=float(source_dict["stability"]),
            difficulty=float(source_dict["difficulty"]),
            elapsed_days=float(source_dict["elapsed_days"]),
            scheduled_days=int(source_dict["scheduled_days"]),
            reps=int(source_dict["reps"]),
            lapses=int(source_dict["lapses"]),
        )

    def to_json(self, indent: int | str | None = None) -> str:
        """
        Returns a JSON-serialized string of the Card object.

        Args:
            indent: Equivalent argument to the indent in json.dumps()

        Returns:
            str: A JSON-serialized string of the Card object.
        """

        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, source_json: str) -> Self:
        """
        Creates a Card object from a JSON-serialized string.

        Args:
            source_json: A JSON-serialized string of an existing Card object.

        Returns:
            Self: A Card object created from the JSON string.
        """

        source_dict: CardDict = json.loads(source_json)
        return cls.from_dict(source_dict=source_dict)


__all__ = ["Card"]
