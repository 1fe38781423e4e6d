"""Protocol for day rollover policies."""

from typing import Protocol

from rtt_commute.domain.civil_clock import LocalNow
from rtt_commute.domain.models.day_selection import DayChoice, DayOutcome


class RolloverPolicyProtocol(Protocol):
    """Decides which day to show given the current time and today's outcome."""

    def decide(self, now: LocalNow, today: DayOutcome) -> DayChoice:
        """Return TODAY or TOMORROW."""
        ...
