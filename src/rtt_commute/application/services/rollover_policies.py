"""Day rollover policies.

Each policy answers one question: given the current civil time and what
today's lookup produced, should the board show today or tomorrow?
"""

import logging

from rtt_commute.domain.civil_clock import LocalNow, to_minutes
from rtt_commute.domain.contracts.rollover_policy import RolloverPolicyProtocol
from rtt_commute.domain.models.day_selection import DayChoice, DayOutcome
from rtt_commute.domain.models.tracker_configuration import (
    RolloverConfiguration,
    RolloverPolicyName,
)

logger = logging.getLogger(__name__)


class GraceAfterDeparturePolicy(RolloverPolicyProtocol):
    """Roll over once today's service has departed plus a grace period."""

    def __init__(self, grace_minutes: int = 2) -> None:
        self.grace_minutes = grace_minutes

    def decide(self, now: LocalNow, today: DayOutcome) -> DayChoice:
        if not today.found:
            return DayChoice.TOMORROW
        if today.threshold_minutes is None:
            return DayChoice.TODAY
        if now.minutes >= today.threshold_minutes + self.grace_minutes:
            return DayChoice.TOMORROW
        return DayChoice.TODAY


class FixedCutoverPolicy(RolloverPolicyProtocol):
    """Roll over at a fixed wall-clock time regardless of actual running."""

    def __init__(self, cutover: str = "0900") -> None:
        self.cutover_minutes = to_minutes(cutover)

    def decide(self, now: LocalNow, today: DayOutcome) -> DayChoice:
        if not today.found or now.minutes >= self.cutover_minutes:
            return DayChoice.TOMORROW
        return DayChoice.TODAY


class TodayOnlyPolicy(RolloverPolicyProtocol):
    """Always show today."""

    def decide(self, now: LocalNow, today: DayOutcome) -> DayChoice:  # noqa: ARG002
        return DayChoice.TODAY


def create_rollover_policy(config: RolloverConfiguration) -> RolloverPolicyProtocol:
    """Build the configured rollover policy."""
    if config.policy is RolloverPolicyName.CUTOVER:
        logger.info(f"Using fixed cutover rollover at {config.cutover}")
        return FixedCutoverPolicy(config.cutover)
    if config.policy is RolloverPolicyName.TODAY:
        logger.info("Using today-only rollover")
        return TodayOnlyPolicy()
    logger.info(f"Using grace-after-departure rollover ({config.grace_minutes} min)")
    return GraceAfterDeparturePolicy(config.grace_minutes)
