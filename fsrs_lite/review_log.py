"""
fsrs_lite.review_log
--------------------

This module defines the ReviewLog class.

Classes:
    ReviewLog: Represents the log entry of a Card that has been reviewed.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
import json
from typing import TypedDict
from typing_extensions import Self
from fsrs_lite.rating import Rating
from fsrs_lite.state import State


class ReviewLogDict(TypedDict):
    """
    JSON-serializable dictionary representation of a ReviewLog object.
    """

    rating: int
    state: int
    due: str
    stability: float
    difficulty: float
    elapsed_days: float
    scheduled_days: int
    reviewed_at: str
    review_duration: int | None


@dataclass(frozen=True)
class ReviewLog:
    """
    Represents the log entry of a Card object that has been reviewed.

    Every field except `rating`, `reviewed_at` and `review_duration` holds the
    card's value from before the review was applied.

    Attributes:
        rating: The rating given to the card during the review.
        state: The card's state before the review.
        due: When the card was due before the review.
        stability: The card's stability before the review.
        difficulty: The card's difficulty before the review.
        elapsed_days: The card's elapsed days before the review.
        scheduled_days: The card's scheduled days before the review.
        reviewed_at: The date and time of the review.
        review_duration: The number of milliseconds it took to review the card or None if unspecified.
    """

    rating: Rating
    state: State
    due: datetime
    stability: float
    difficulty: float
    elapsed_days: float
    scheduled_days: int
    reviewed_at: datetime
    review_duration: int | None = None

    def to_dict(self) -> ReviewLogDict:
        """
        Returns a JSON-serializable dictionary representation of the ReviewLog object.

        Returns:
            A dictionary representation of the ReviewLog object.
        """

        return {
            "rating": int(self.rating),
            "state": int(self.state),
            "due": self.due.isoformat(),
            "stability": self.stability,
            "difficulty": self.difficulty,
            "elapsed_days": self.elapsed_days,
            "scheduled_days": self.scheduled_days,
            "reviewed_at": self.reviewed_at.isoformat(),
            "review_duration": self.review_duration,
        }

    @classmethod
    def from_dict(cls, source_dict: ReviewLogDict) -> Self:
        """
        Creates a ReviewLog object from an existing dictionary.

        Args:
            source_dict: A dictionary representing an existing ReviewLog object.

        Returns:
            A ReviewLog object created from the provided dictionary.
        """

        return cls(
            rating=Rating(int(source_dict["rating"])),
            state=State(int(source_dict["state"])),
            due=datetime.fromisoformat(source_dict["due"]),
            stability=float(source_dict["stability"]),
            difficulty=float(source_dict["difficulty"]),
            elapsed_days=float(source_dict["elapsed_days"]),
            scheduled_days=int(source_dict["scheduled_days"]),
            reviewed_at=datetime.fromisoformat(source_dict["reviewed_at"]),
            review_duration=source_dict["review_duration"],
        )

    def to_json(self, indent: int | str | None = None) -> str:
        """
        Returns a JSON-serialized string of the ReviewLog object.

        Args:
            indent: Equivalent argument to the indent in json.dumps()

        Returns:
            str: A JSON-serialized string of the ReviewLog object.
        """

        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, source_json: str) -> Self:
        source_dict: ReviewLogDict = json.loads(source_json)
        return cls.from_dict(source_dict=source_dict)


__all__ = ["ReviewLog"]
