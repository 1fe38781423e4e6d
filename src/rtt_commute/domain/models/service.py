"""Service domain models."""

from dataclasses import dataclass, field
from datetime import date

from rtt_commute.domain.models.stop_call import StopCall


@dataclass(frozen=True)
class ServiceCandidate:
    """A search hit: one running of a train that calls at the searched origin.

    The provider does not guarantee the candidate reaches the searched
    destination; callers confirm that from the full call pattern.
    """

    service_id: str
    booked_departure: str | None
    observed_departure: str | None = None
    run_date: date | None = None  # Pre-resolved by the provider when available
    origin_name: str | None = None
    destination_name: str | None = None
    operator: str | None = None

    @property
    def effective_departure(self) -> str | None:
        return self.observed_departure or self.booked_departure


@dataclass(frozen=True)
class Service:
    """One running of a train on one calendar date with its call pattern."""

    service_id: str
    run_date: date
    calls: tuple[StopCall, ...] = field(default_factory=tuple)
    is_cancelled: bool = False

    def call_at(self, location_code: str) -> StopCall | None:
        """Return the first call at a location, if any."""
        index = self._index_of(location_code)
        return self.calls[index] if index is not None else None

    def reaches(self, origin_code: str, destination_code: str) -> bool:
        """Whether the service calls at the destination after the origin."""
        origin_index = self._index_of(origin_code)
        if origin_index is None:
            return False
        return any(
            call.location_code == destination_code for call in self.calls[origin_index + 1 :]
        )

    def _index_of(self, location_code: str) -> int | None:
        for index, call in enumerate(self.calls):
            if call.location_code == location_code:
                return index
        return None
