"""Tracker configuration domain models.

Built once at start-up and passed into every component; nothing below the
entry point reads the environment.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from rtt_commute.domain.models.status import EarlyStatusPolicy


class RolloverPolicyName(StrEnum):
    """Available day rollover policies."""

    GRACE = "grace"  # Roll once today's departure (plus grace) has passed
    CUTOVER = "cutover"  # Roll at a fixed wall-clock time
    TODAY = "today"  # Never roll


@dataclass(frozen=True)
class ProviderConfiguration:
    """Remote timetable provider settings."""

    username: str
    password: str = field(repr=False)
    base_url: str = "https://api.rtt.io/api/v1"
    timeout_seconds: float = 10.0
    max_concurrent_requests: int = 4
    min_request_interval_seconds: float = 0.0
    user_agent: str = "rtt-commute"
    log_requests: bool = False  # Log each request and a response snippet


@dataclass(frozen=True)
class StatusConfiguration:
    """The fixed booked service to track."""

    origin_code: str
    destination_code: str
    booked_departure: str  # HHMM
    max_candidates: int = 3  # Search hits to try before reporting not_found


@dataclass(frozen=True)
class TransferConfiguration:
    """The fixed origin -> interchange -> destination chain to track."""

    origin_code: str
    interchange_code: str
    destination_code: str
    window_start: str  # HHMM, exclusive
    window_end: str  # HHMM, inclusive
    direct_anchor: str | None = None  # HHMM of the direct service, if tracked
    min_connection_minutes: int = 1
    max_connection_minutes: int = 45
    max_first_legs: int = 3
    max_second_legs: int = 2


@dataclass(frozen=True)
class RolloverConfiguration:
    """Which day rollover policy to apply and its parameters."""

    policy: RolloverPolicyName = RolloverPolicyName.GRACE
    grace_minutes: int = 2
    cutover: str = "0900"  # HHMM, used by the cutover policy


@dataclass(frozen=True)
class TrackerConfiguration:
    """Complete immutable configuration for one run."""

    timezone: str
    provider: ProviderConfiguration
    status: StatusConfiguration | None = None
    transfer: TransferConfiguration | None = None
    rollover: RolloverConfiguration = field(default_factory=RolloverConfiguration)
    early_status: EarlyStatusPolicy = EarlyStatusPolicy.DISTINCT
    status_output_path: str = "status.json"
    transfer_output_path: str = "xfer.json"
    audit_log_path: str | None = "runs.log.jsonl"
