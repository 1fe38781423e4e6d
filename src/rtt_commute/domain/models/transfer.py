"""Transfer domain models."""

from dataclasses import dataclass, field
from datetime import date

from rtt_commute.domain.civil_clock import minutes_between
from rtt_commute.domain.models.status import STATUS_SEVERITY, ServiceStatus
from rtt_commute.domain.models.stop_call import StopCall


@dataclass(frozen=True)
class Leg:
    """One train journey between two stations."""

    service_id: str
    run_date: date
    departure_call: StopCall | None
    arrival_call: StopCall | None
    status: ServiceStatus

    @property
    def departure(self) -> str | None:
        return self.departure_call.effective_departure if self.departure_call else None

    @property
    def arrival(self) -> str | None:
        return self.arrival_call.effective_arrival if self.arrival_call else None


@dataclass(frozen=True)
class TransferOption:
    """A first leg paired with a feasible onward leg at the interchange."""

    first_leg: Leg
    second_leg: Leg

    @property
    def wait_minutes(self) -> int | None:
        """Minutes between arriving at and leaving the interchange."""
        arrival = self.first_leg.arrival
        departure = self.second_leg.departure
        if arrival is None or departure is None:
            return None
        return minutes_between(arrival, departure)

    @property
    def status(self) -> ServiceStatus:
        """The worse of the two legs' statuses."""
        return max(
            (self.first_leg.status, self.second_leg.status), key=STATUS_SEVERITY.__getitem__
        )


@dataclass(frozen=True)
class FirstLegOption:
    """A first leg with its accepted connections in departure order."""

    leg: Leg
    connections: tuple[TransferOption, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TransferBoard:
    """All options for the transfer chain on one operative date."""

    date: date
    direct: Leg | None = None
    first_legs: tuple[FirstLegOption, ...] = field(default_factory=tuple)
