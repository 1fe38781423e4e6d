"""Snapshot models handed to the snapshot writer and audit log.

Serialized with camelCase keys for the display that consumes them.
"""

from datetime import date as Date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rtt_commute.domain.models.day_selection import DayChoice
from rtt_commute.domain.models.error_details import ErrorDetails
from rtt_commute.domain.models.status import ServiceStatus


class SnapshotModel(BaseModel):
    """Base for all snapshot models."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class StopCallSnapshot(SnapshotModel):
    """Timing of one service at one station, with raw signed delays."""

    location_code: str | None = None
    booked_arrival: str | None = None
    booked_departure: str | None = None
    observed_arrival: str | None = None
    observed_departure: str | None = None
    arrival_delay_mins: int | None = None
    departure_delay_mins: int | None = None
    platform: str | None = None
    is_cancelled: bool = False
    cancel_reason: str | None = None


class StatusSnapshot(SnapshotModel):
    """Status of the tracked booked service."""

    generated_at: datetime
    date: Date
    day: DayChoice
    status: ServiceStatus
    origin_crs: str
    destination_crs: str
    booked_departure: str
    service_uid: str | None = None
    run_date: Date | None = None
    origin: StopCallSnapshot | None = None
    destination: StopCallSnapshot | None = None


class LegSnapshot(SnapshotModel):
    """One leg with both its end calls."""

    service_uid: str
    run_date: Date
    from_crs: str | None
    to_crs: str | None
    departure: str | None
    arrival: str | None
    departure_platform: str | None = None
    arrival_platform: str | None = None
    status: ServiceStatus
    origin: StopCallSnapshot | None = None
    destination: StopCallSnapshot | None = None


class ConnectionSnapshot(SnapshotModel):
    """An accepted onward leg and the wait at the interchange."""

    leg: LegSnapshot
    wait_mins: int | None
    interchange_arrival_platform: str | None = None
    interchange_departure_platform: str | None = None
    status: ServiceStatus


class FirstLegSnapshot(SnapshotModel):
    """A first leg with its accepted connections."""

    leg: LegSnapshot
    connections: list[ConnectionSnapshot]


class TransferSnapshot(SnapshotModel):
    """All transfer options for one operative date."""

    generated_at: datetime
    date: Date
    day: DayChoice
    status: Literal["ok", "not_found"]
    origin_crs: str
    interchange_crs: str
    destination_crs: str
    window_start: str
    window_end: str
    min_connection_mins: int
    max_connection_mins: int
    direct: LegSnapshot | None = None
    first_legs: list[FirstLegSnapshot]


class ErrorSnapshot(SnapshotModel):
    """Written in place of a regular snapshot when a run fails."""

    generated_at: datetime
    status: Literal["error"] = "error"
    error: ErrorDetails


class AuditRecord(SnapshotModel):
    """One line of the append-only run log."""

    timestamp: datetime
    job: str
    outcome: Literal["success", "failure"]
    date: Date | None = None
    status: str | None = None
    message: str | None = None
