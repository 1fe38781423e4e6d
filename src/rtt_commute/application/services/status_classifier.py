"""Status classification of a service between two of its calls."""

from rtt_commute.domain.models.status import EarlyStatusPolicy, ServiceStatus
from rtt_commute.domain.models.stop_call import StopCall


class StatusClassifier:
    """Reduces booked vs observed timing and cancellation flags to a status.

    Priority order: not_found, cancelled, delayed, early, on_time. Only the
    departure from the origin and the arrival at the destination are
    compared. A missing observed time never registers as a delay.
    """

    def __init__(self, early_policy: EarlyStatusPolicy = EarlyStatusPolicy.DISTINCT) -> None:
        """Initialize with the policy for reporting early running."""
        self._early_policy = early_policy

    def classify(
        self, origin_call: StopCall | None, destination_call: StopCall | None
    ) -> ServiceStatus:
        """Classify a service from its origin and destination calls."""
        if origin_call is None and destination_call is None:
            return ServiceStatus.NOT_FOUND

        if any(call is not None and call.is_cancelled for call in (origin_call, destination_call)):
            return ServiceStatus.CANCELLED

        delays = [
            delay
            for delay in (
                origin_call.departure_delay_minutes if origin_call else None,
                destination_call.arrival_delay_minutes if destination_call else None,
            )
            if delay is not None
        ]

        if any(delay >= 1 for delay in delays):
            return ServiceStatus.DELAYED
        if any(delay < 0 for delay in delays):
            if self._early_policy is EarlyStatusPolicy.DISTINCT:
                return ServiceStatus.EARLY
            return ServiceStatus.ON_TIME
        return ServiceStatus.ON_TIME
