"""Snapshot writer port."""

from typing import Protocol

from rtt_commute.domain.models.snapshot import SnapshotModel


class SnapshotWriter(Protocol):
    """Port for persisting the latest computed snapshot."""

    def write(self, destination: str, snapshot: SnapshotModel) -> None:
        """Replace the snapshot stored at destination."""
        ...
