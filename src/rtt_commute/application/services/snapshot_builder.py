"""Builds display snapshots from classified results."""

from datetime import datetime

from rtt_commute.domain.models.day_selection import DaySelection
from rtt_commute.domain.models.error_details import ErrorDetails
from rtt_commute.domain.models.snapshot import (
    ConnectionSnapshot,
    ErrorSnapshot,
    FirstLegSnapshot,
    LegSnapshot,
    StatusSnapshot,
    StopCallSnapshot,
    TransferSnapshot,
)
from rtt_commute.domain.models.status import StatusResult
from rtt_commute.domain.models.stop_call import StopCall
from rtt_commute.domain.models.tracker_configuration import (
    StatusConfiguration,
    TransferConfiguration,
)
from rtt_commute.domain.models.transfer import Leg, TransferBoard, TransferOption


class SnapshotBuilder:
    """Converts domain results into snapshot models."""

    @staticmethod
    def stop_call(call: StopCall | None) -> StopCallSnapshot | None:
        if call is None:
            return None
        return StopCallSnapshot(
            location_code=call.location_code,
            booked_arrival=call.booked_arrival,
            booked_departure=call.booked_departure,
            observed_arrival=call.observed_arrival,
            observed_departure=call.observed_departure,
            arrival_delay_mins=call.arrival_delay_minutes,
            departure_delay_mins=call.departure_delay_minutes,
            platform=call.platform,
            is_cancelled=call.is_cancelled,
            cancel_reason=call.cancel_reason,
        )

    @staticmethod
    def status(
        generated_at: datetime,
        selection: DaySelection[StatusResult],
        config: StatusConfiguration,
    ) -> StatusSnapshot:
        """Snapshot of the tracked booked service."""
        result = selection.result
        return StatusSnapshot(
            generated_at=generated_at,
            date=selection.date,
            day=selection.day,
            status=result.status,
            origin_crs=config.origin_code,
            destination_crs=config.destination_code,
            booked_departure=config.booked_departure,
            service_uid=result.service_id,
            run_date=result.run_date,
            origin=SnapshotBuilder.stop_call(result.origin_call),
            destination=SnapshotBuilder.stop_call(result.destination_call),
        )

    @staticmethod
    def leg(leg: Leg) -> LegSnapshot:
        departure_call = leg.departure_call
        arrival_call = leg.arrival_call
        return LegSnapshot(
            service_uid=leg.service_id,
            run_date=leg.run_date,
            from_crs=departure_call.location_code if departure_call else None,
            to_crs=arrival_call.location_code if arrival_call else None,
            departure=leg.departure,
            arrival=leg.arrival,
            departure_platform=departure_call.platform if departure_call else None,
            arrival_platform=arrival_call.platform if arrival_call else None,
            status=leg.status,
            origin=SnapshotBuilder.stop_call(departure_call),
            destination=SnapshotBuilder.stop_call(arrival_call),
        )

    @staticmethod
    def connection(option: TransferOption) -> ConnectionSnapshot:
        first_arrival = option.first_leg.arrival_call
        second_departure = option.second_leg.departure_call
        return ConnectionSnapshot(
            leg=SnapshotBuilder.leg(option.second_leg),
            wait_mins=option.wait_minutes,
            interchange_arrival_platform=first_arrival.platform if first_arrival else None,
            interchange_departure_platform=second_departure.platform if second_departure else None,
            status=option.status,
        )

    @staticmethod
    def transfers(
        generated_at: datetime,
        selection: DaySelection[TransferBoard],
        config: TransferConfiguration,
    ) -> TransferSnapshot:
        """Snapshot of the transfer board."""
        board = selection.result
        return TransferSnapshot(
            generated_at=generated_at,
            date=selection.date,
            day=selection.day,
            status="ok" if board.first_legs or board.direct else "not_found",
            origin_crs=config.origin_code,
            interchange_crs=config.interchange_code,
            destination_crs=config.destination_code,
            window_start=config.window_start,
            window_end=config.window_end,
            min_connection_mins=config.min_connection_minutes,
            max_connection_mins=config.max_connection_minutes,
            direct=SnapshotBuilder.leg(board.direct) if board.direct else None,
            first_legs=[
                FirstLegSnapshot(
                    leg=SnapshotBuilder.leg(option.leg),
                    connections=[SnapshotBuilder.connection(c) for c in option.connections],
                )
                for option in board.first_legs
            ],
        )

    @staticmethod
    def error(generated_at: datetime, phase: str, error: Exception) -> ErrorSnapshot:
        """Snapshot written when a run could not produce a regular one."""
        return ErrorSnapshot(
            generated_at=generated_at,
            error=ErrorDetails(
                phase=phase,
                reason=str(error) or error.__class__.__name__,
                status_code=getattr(error, "status_code", None),
            ),
        )
