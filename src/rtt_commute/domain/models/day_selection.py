"""Day rollover domain models."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class DayChoice(StrEnum):
    """Which calendar date's service is shown."""

    TODAY = "showing_today"
    TOMORROW = "showing_tomorrow"


@dataclass(frozen=True)
class DayOutcome:
    """What today's lookup produced, as seen by a rollover policy."""

    found: bool
    threshold_minutes: int | None = None  # Minute of day after which today's service is gone


@dataclass(frozen=True)
class DaySelection(Generic[T]):
    """The chosen day together with the result evaluated for it."""

    day: DayChoice
    date: date
    result: T
