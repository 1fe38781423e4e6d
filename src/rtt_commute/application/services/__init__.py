"""Application services (use cases) for the commute tracker."""

from rtt_commute.application.services.day_selector import DaySelector
from rtt_commute.application.services.rollover_policies import (
    FixedCutoverPolicy,
    GraceAfterDeparturePolicy,
    TodayOnlyPolicy,
    create_rollover_policy,
)
from rtt_commute.application.services.service_status_service import ServiceStatusService
from rtt_commute.application.services.snapshot_builder import SnapshotBuilder
from rtt_commute.application.services.status_classifier import StatusClassifier
from rtt_commute.application.services.tracker_service import TrackerService
from rtt_commute.application.services.transfer_matcher import TransferMatcher

__all__ = [
    "DaySelector",
    "FixedCutoverPolicy",
    "GraceAfterDeparturePolicy",
    "ServiceStatusService",
    "SnapshotBuilder",
    "StatusClassifier",
    "TodayOnlyPolicy",
    "TrackerService",
    "TransferMatcher",
    "create_rollover_policy",
]
