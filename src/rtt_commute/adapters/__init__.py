"""Adapters layer - external system integrations."""

from rtt_commute.adapters.config import AppConfig
from rtt_commute.adapters.output import JsonlAuditLog, JsonSnapshotWriter
from rtt_commute.adapters.rtt_api import RttHttpClient, RttTimetableRepository

__all__ = [
    "AppConfig",
    "JsonSnapshotWriter",
    "JsonlAuditLog",
    "RttHttpClient",
    "RttTimetableRepository",
]
