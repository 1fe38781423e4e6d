"""Status classification domain models."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from rtt_commute.domain.models.stop_call import StopCall


class ServiceStatus(StrEnum):
    """Qualitative state of a tracked service."""

    ON_TIME = "on_time"
    DELAYED = "delayed"
    EARLY = "early"
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"


# Higher is worse; used when combining the status of several legs.
STATUS_SEVERITY = {
    ServiceStatus.ON_TIME: 0,
    ServiceStatus.EARLY: 1,
    ServiceStatus.DELAYED: 2,
    ServiceStatus.CANCELLED: 3,
    ServiceStatus.NOT_FOUND: 4,
}


class EarlyStatusPolicy(StrEnum):
    """How running early is reported."""

    DISTINCT = "distinct"
    ON_TIME = "on_time"


@dataclass(frozen=True)
class StatusResult:
    """Classified status of one service between two of its calls."""

    status: ServiceStatus
    origin_call: StopCall | None = None
    destination_call: StopCall | None = None
    service_id: str | None = None
    run_date: date | None = None

    @classmethod
    def not_found(cls) -> "StatusResult":
        return cls(status=ServiceStatus.NOT_FOUND)

    @property
    def found(self) -> bool:
        return self.status is not ServiceStatus.NOT_FOUND

    @property
    def departure_threshold(self) -> str | None:
        return self.origin_call.departure_threshold if self.origin_call else None
