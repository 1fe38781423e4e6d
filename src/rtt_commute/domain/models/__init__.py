"""Domain models for the commute tracker."""

from rtt_commute.domain.models.day_selection import DayChoice, DayOutcome, DaySelection
from rtt_commute.domain.models.error_details import ErrorDetails
from rtt_commute.domain.models.service import Service, ServiceCandidate
from rtt_commute.domain.models.snapshot import (
    AuditRecord,
    ConnectionSnapshot,
    ErrorSnapshot,
    FirstLegSnapshot,
    LegSnapshot,
    StatusSnapshot,
    StopCallSnapshot,
    TransferSnapshot,
)
from rtt_commute.domain.models.status import EarlyStatusPolicy, ServiceStatus, StatusResult
from rtt_commute.domain.models.stop_call import StopCall
from rtt_commute.domain.models.tracker_configuration import (
    ProviderConfiguration,
    RolloverConfiguration,
    RolloverPolicyName,
    StatusConfiguration,
    TrackerConfiguration,
    TransferConfiguration,
)
from rtt_commute.domain.models.transfer import FirstLegOption, Leg, TransferBoard, TransferOption

__all__ = [
    "AuditRecord",
    "ConnectionSnapshot",
    "DayChoice",
    "DayOutcome",
    "DaySelection",
    "EarlyStatusPolicy",
    "ErrorDetails",
    "ErrorSnapshot",
    "FirstLegOption",
    "FirstLegSnapshot",
    "Leg",
    "LegSnapshot",
    "ProviderConfiguration",
    "RolloverConfiguration",
    "RolloverPolicyName",
    "Service",
    "ServiceCandidate",
    "ServiceStatus",
    "StatusConfiguration",
    "StatusResult",
    "StatusSnapshot",
    "StopCall",
    "StopCallSnapshot",
    "TrackerConfiguration",
    "TransferBoard",
    "TransferConfiguration",
    "TransferOption",
    "TransferSnapshot",
]
