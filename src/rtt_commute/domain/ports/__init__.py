"""Ports (interfaces) for the ports-and-adapters architecture."""

from rtt_commute.domain.ports.audit_log import AuditLog
from rtt_commute.domain.ports.snapshot_writer import SnapshotWriter
from rtt_commute.domain.ports.timetable_repository import TimetableRepository

__all__ = [
    "AuditLog",
    "SnapshotWriter",
    "TimetableRepository",
]
