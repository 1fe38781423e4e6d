"""Audit log port."""

from typing import Protocol

from rtt_commute.domain.models.snapshot import AuditRecord


class AuditLog(Protocol):
    """Port for the append-only record of runs."""

    def append(self, record: AuditRecord) -> None:
        """Append one record."""
        ...
