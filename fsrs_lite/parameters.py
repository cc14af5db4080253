"""
fsrs_lite.parameters
--------------------

This module defines the Parameters class along with the default model weights and their bounds.

Classes:
    Parameters: Immutable configuration of a Scheduler.
"""

from __future__ import annotations
from collections.abc import Sequence
from dataclasses import dataclass
import json
from typing import TypedDict
from typing_extensions import Self

DEFAULT_WEIGHTS = (
    0.4072,
    1.1829,
    3.1262,
    15.4722,
    7.2102,
    0.5715,
    1.0,
    0.0062,
    1.8363,
    0.2783,
    0.8552,
    2.4029,
    0.1192,
    0.295,
    2.2663,
    0.2924,
    2.9466,
)

DEFAULT_REQUEST_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 36500

REQUEST_RETENTION_MIN = 0.7
REQUEST_RETENTION_MAX = 0.99

STABILITY_MIN = 0.001
LOWER_BOUNDS_WEIGHTS = (
    STABILITY_MIN,
    STABILITY_MIN,
    STABILITY_MIN,
    STABILITY_MIN,
    1.0,
    0.001,
    0.001,
    0.001,
    0.0,
    0.0,
    0.001,
    0.001,
    0.001,
    0.001,
    0.0,
    0.0,
    1.0,
)

INITIAL_STABILITY_MAX = 100.0
UPPER_BOUNDS_WEIGHTS = (
    INITIAL_STABILITY_MAX,
    INITIAL_STABILITY_MAX,
    INITIAL_STABILITY_MAX,
    INITIAL_STABILITY_MAX,
    10.0,
    4.0,
    4.0,
    0.75,
    4.5,
    0.8,
    3.5,
    5.0,
    0.25,
    0.9,
    4.0,
    1.0,
    6.0,
)


class ParametersDict(TypedDict):
    """
    JSON-serializable dictionary representation of a Parameters object.
    """

    w: list[float]
    request_retention: float
    maximum_interval: int


@dataclass(frozen=True, init=False)
class Parameters:
    """
    The configuration of an FSRS scheduler.

    Attributes:
        w: The 17 model weights.
        request_retention: The target probability of recall when a card comes due.
        maximum_interval: The maximum number of days a card can be scheduled into the future.
    """

    w: tuple[float, ...]
    request_retention: float
    maximum_interval: int

    def __init__(
        self,
        w: Sequence[float] = DEFAULT_WEIGHTS,
        request_retention: float = DEFAULT_REQUEST_RETENTION,
        maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL,
    ) -> None:
        _validate(
            w=w,
            request_retention=request_retention,
            maximum_interval=maximum_interval,
        )

        object.__setattr__(self, "w", tuple(float(weight) for weight in w))
        object.__setattr__(self, "request_retention", float(request_retention))
        object.__setattr__(self, "maximum_interval", int(maximum_interval))

    def to_dict(self) -> ParametersDict:
        """
        Returns a JSON-serializable dictionary representation of the Parameters object.

        Returns:
            ParametersDict: A dictionary representation of the Parameters object.
        """

        return {
            "w": list(self.w),
            "request_retention": self.request_retention,
            "maximum_interval": self.maximum_interval,
        }

    @classmethod
    def from_dict(cls, source_dict: ParametersDict) -> Self:
        """
        Creates a Parameters object from an existing dictionary.

        Args:
            source_dict: A dictionary representing an existing Parameters object.

        Returns:
            Self: A Parameters object created from the provided dictionary.
        """

        return cls(
            w=source_dict["w"],
            request_retention=source_dict["request_retention"],
            maximum_interval=source_dict["maximum_interval"],
        )

    def to_json(self, indent: int | str | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, source_json: str) -> Self:
        source_dict: ParametersDict = json.loads(source_json)
        return cls.from_dict(source_dict=source_dict)


def _validate(
    *, w: Sequence[float], request_retention: float, maximum_interval: int
) -> None:
    if len(w) != len(LOWER_BOUNDS_WEIGHTS):
        raise ValueError(
            f"Expected {len(LOWER_BOUNDS_WEIGHTS)} weights, got {len(w)}."
        )

    error_messages = []
    for index, (weight, lower_bound, upper_bound) in enumerate(
        zip(w, LOWER_BOUNDS_WEIGHTS, UPPER_BOUNDS_WEIGHTS)
    ):
        if not lower_bound <= weight <= upper_bound:
            error_message = f"w[{index}] = {weight} is out of bounds: ({lower_bound}, {upper_bound})"
            error_messages.append(error_message)

    if not REQUEST_RETENTION_MIN <= request_retention <= REQUEST_RETENTION_MAX:
        error_messages.append(
            f"request_retention = {request_retention} is out of bounds: ({REQUEST_RETENTION_MIN}, {REQUEST_RETENTION_MAX})"
        )

    if maximum_interval < 1:
        error_messages.append(
            f"maximum_interval = {maximum_interval} must be at least 1"
        )

    if len(error_messages) > 0:
        raise ValueError(
            "One or more parameters are out of bounds:\n" + "\n".join(error_messages)
        )


DEFAULT_PARAMETERS = Parameters()


__all__ = ["Parameters", "DEFAULT_PARAMETERS"]
