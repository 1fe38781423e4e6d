"""Day selector deciding whether today's or tomorrow's service is reported."""

import logging
from collections.abc import Awaitable, Callable
from datetime import date
from typing import TYPE_CHECKING, TypeVar

from rtt_commute.domain.civil_clock import CivilClock, shift_date, to_minutes
from rtt_commute.domain.models.day_selection import DayChoice, DayOutcome, DaySelection
from rtt_commute.domain.models.status import StatusResult
from rtt_commute.domain.models.transfer import TransferBoard

if TYPE_CHECKING:
    from rtt_commute.domain.contracts.rollover_policy import RolloverPolicyProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


def status_day_outcome(result: StatusResult) -> DayOutcome:
    """Describe today's single-service lookup for a rollover policy."""
    if not result.found:
        return DayOutcome(found=False)
    threshold = result.departure_threshold
    return DayOutcome(
        found=True, threshold_minutes=to_minutes(threshold) if threshold else None
    )


def board_day_outcome(board: TransferBoard) -> DayOutcome:
    """Describe today's transfer board for a rollover policy.

    The board is gone once its latest first leg has departed.
    """
    if not board.first_legs:
        return DayOutcome(found=False)
    thresholds = [
        to_minutes(option.leg.departure_call.departure_threshold)
        for option in board.first_legs
        if option.leg.departure_call and option.leg.departure_call.departure_threshold
    ]
    return DayOutcome(found=True, threshold_minutes=max(thresholds) if thresholds else None)


class DaySelector:
    """Rollover state machine with states TODAY and TOMORROW.

    Every run evaluates today first and asks the policy whether to move on.
    Nothing is remembered between runs, so the choice is re-derived from the
    current time each time.
    """

    def __init__(self, clock: CivilClock, policy: "RolloverPolicyProtocol") -> None:
        """Initialize with a clock and a rollover policy."""
        self._clock = clock
        self._policy = policy

    async def select(
        self,
        evaluate: Callable[[date], Awaitable[T]],
        outcome_of: Callable[[T], DayOutcome],
    ) -> DaySelection[T]:
        """Evaluate today and, if the policy says so, tomorrow.

        Args:
            evaluate: Runs the full lookup for one operative date.
            outcome_of: Summarises an evaluated result for the policy.

        Returns:
            The chosen day with its evaluated result.
        """
        now = self._clock.now()
        today_result = await evaluate(now.date)
        outcome = outcome_of(today_result)
        choice = self._policy.decide(now, outcome)

        if choice is DayChoice.TODAY:
            logger.info(f"Showing today {now.date} at {now.hhmm} (found={outcome.found})")
            return DaySelection(day=DayChoice.TODAY, date=now.date, result=today_result)

        tomorrow = shift_date(now.date, 1)
        logger.info(
            f"Rolling over to {tomorrow} at {now.hhmm} "
            f"(found={outcome.found}, threshold={outcome.threshold_minutes})"
        )
        tomorrow_result = await evaluate(tomorrow)
        return DaySelection(day=DayChoice.TOMORROW, date=tomorrow, result=tomorrow_result)
