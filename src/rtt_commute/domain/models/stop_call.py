"""Stop call domain model."""

from dataclasses import dataclass

from rtt_commute.domain.civil_clock import minutes_between


@dataclass(frozen=True)
class StopCall:
    """One service's timing at one station.

    Times are civil "HHMM" strings. Observed times are the best known
    estimate or confirmation of the actual time and may be absent.
    """

    location_code: str
    booked_arrival: str | None = None
    booked_departure: str | None = None
    observed_arrival: str | None = None
    observed_departure: str | None = None
    observed_arrival_actual: bool = False  # True when the observed arrival is confirmed
    observed_departure_actual: bool = False
    platform: str | None = None
    is_cancelled: bool = False
    cancel_reason: str | None = None

    @property
    def arrival_delay_minutes(self) -> int | None:
        """Observed minus booked arrival, or None if either is unknown."""
        if not self.booked_arrival or not self.observed_arrival:
            return None
        return minutes_between(self.booked_arrival, self.observed_arrival)

    @property
    def departure_delay_minutes(self) -> int | None:
        """Observed minus booked departure, or None if either is unknown."""
        if not self.booked_departure or not self.observed_departure:
            return None
        return minutes_between(self.booked_departure, self.observed_departure)

    @property
    def effective_arrival(self) -> str | None:
        return self.observed_arrival or self.booked_arrival

    @property
    def effective_departure(self) -> str | None:
        return self.observed_departure or self.booked_departure

    @property
    def departure_threshold(self) -> str | None:
        """The departure time after which this call is considered gone.

        Observed departure when the call is not cancelled and one is known,
        otherwise the booked departure.
        """
        if not self.is_cancelled and self.observed_departure:
            return self.observed_departure
        return self.booked_departure
