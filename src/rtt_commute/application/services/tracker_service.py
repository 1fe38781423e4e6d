"""Runs the status and transfer cores and hands their snapshots to the writers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from rtt_commute.application.services.day_selector import (
    DaySelector,
    board_day_outcome,
    status_day_outcome,
)
from rtt_commute.application.services.rollover_policies import create_rollover_policy
from rtt_commute.application.services.service_status_service import ServiceStatusService
from rtt_commute.application.services.snapshot_builder import SnapshotBuilder
from rtt_commute.application.services.status_classifier import StatusClassifier
from rtt_commute.application.services.transfer_matcher import TransferMatcher
from rtt_commute.domain.civil_clock import CivilClock
from rtt_commute.domain.errors import ConfigurationError
from rtt_commute.domain.models.snapshot import (
    AuditRecord,
    ErrorSnapshot,
    StatusSnapshot,
    TransferSnapshot,
)
from rtt_commute.domain.models.tracker_configuration import TrackerConfiguration

if TYPE_CHECKING:
    from rtt_commute.domain.ports import AuditLog, SnapshotWriter, TimetableRepository

logger = logging.getLogger(__name__)

S = TypeVar("S", StatusSnapshot, TransferSnapshot)

STATUS_JOB = "status"
TRANSFERS_JOB = "transfers"


class TrackerService:
    """Use case: compute and publish one status snapshot and one transfer snapshot.

    A failure inside a core never leaves the consumer without output: an
    error snapshot is written in its place and a failure record is logged.
    """

    def __init__(
        self,
        config: TrackerConfiguration,
        repository: "TimetableRepository",
        snapshot_writer: "SnapshotWriter",
        clock: CivilClock,
        audit_log: "AuditLog | None" = None,
    ) -> None:
        """Initialize the tracker.

        Args:
            config: Immutable tracker configuration.
            repository: Remote timetable lookups.
            snapshot_writer: Persists snapshots.
            clock: Civil clock in the configured timezone.
            audit_log: Optional append-only run log.
        """
        self._config = config
        self._snapshot_writer = snapshot_writer
        self._audit_log = audit_log
        self._clock = clock

        classifier = StatusClassifier(config.early_status)
        self._day_selector = DaySelector(clock, create_rollover_policy(config.rollover))
        self._status_service = ServiceStatusService(
            repository,
            classifier,
            max_candidates=config.status.max_candidates if config.status else 3,
        )
        self._transfer_matcher = (
            TransferMatcher(repository, classifier, config.transfer, self._status_service)
            if config.transfer
            else None
        )

    async def compute_status(self) -> StatusSnapshot:
        """Compute the status snapshot without writing it."""
        status_config = self._config.status
        if status_config is None:
            raise ConfigurationError("No booked service configured")

        selection = await self._day_selector.select(
            lambda day: self._status_service.resolve(
                status_config.origin_code,
                status_config.destination_code,
                day,
                status_config.booked_departure,
            ),
            status_day_outcome,
        )
        return SnapshotBuilder.status(self._clock.utc_now(), selection, status_config)

    async def compute_transfers(self) -> TransferSnapshot:
        """Compute the transfer snapshot without writing it."""
        transfer_config = self._config.transfer
        if transfer_config is None or self._transfer_matcher is None:
            raise ConfigurationError("No transfer chain configured")

        selection = await self._day_selector.select(
            self._transfer_matcher.build_board, board_day_outcome
        )
        return SnapshotBuilder.transfers(self._clock.utc_now(), selection, transfer_config)

    async def run_status(self) -> StatusSnapshot | ErrorSnapshot:
        """Compute and publish the status snapshot."""
        return await self._run(
            STATUS_JOB, self.compute_status, self._config.status_output_path
        )

    async def run_transfers(self) -> TransferSnapshot | ErrorSnapshot:
        """Compute and publish the transfer snapshot."""
        return await self._run(
            TRANSFERS_JOB, self.compute_transfers, self._config.transfer_output_path
        )

    async def run_all(self) -> list[StatusSnapshot | TransferSnapshot | ErrorSnapshot]:
        """Run every configured core concurrently."""
        runs = []
        if self._config.status:
            runs.append(self.run_status())
        if self._config.transfer:
            runs.append(self.run_transfers())
        return list(await asyncio.gather(*runs))

    async def _run(
        self, job: str, compute: Callable[[], Awaitable[S]], destination: str
    ) -> S | ErrorSnapshot:
        try:
            snapshot = await compute()
        except Exception as e:
            logger.exception(f"{job} run failed: {e}")
            return self._fail(job, destination, e)

        try:
            self._snapshot_writer.write(destination, snapshot)
        except Exception as e:
            logger.exception(f"Failed to write {job} snapshot to {destination}: {e}")
            return self._fail(job, destination, e)

        logger.info(f"Wrote {job} snapshot to {destination} ({snapshot.status})")
        self._audit(
            AuditRecord(
                timestamp=snapshot.generated_at,
                job=job,
                outcome="success",
                date=snapshot.date,
                status=str(snapshot.status),
            )
        )
        return snapshot

    def _fail(self, job: str, destination: str, error: Exception) -> ErrorSnapshot:
        """Publish an error snapshot where possible and record the failure."""
        failure = SnapshotBuilder.error(self._clock.utc_now(), job, error)
        try:
            self._snapshot_writer.write(destination, failure)
        except Exception as e:
            logger.error(f"Failed to write {job} error snapshot to {destination}: {e}")
        self._audit(
            AuditRecord(
                timestamp=failure.generated_at,
                job=job,
                outcome="failure",
                status=failure.status,
                message=failure.error.reason,
            )
        )
        return failure

    def _audit(self, record: AuditRecord) -> None:
        if self._audit_log is None:
            return
        try:
            self._audit_log.append(record)
        except Exception as e:
            logger.error(f"Failed to append {record.job} run record: {e}")
