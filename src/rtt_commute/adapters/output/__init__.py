"""Output adapters for snapshots and the run log."""

from rtt_commute.adapters.output.json_snapshot_writer import JsonSnapshotWriter
from rtt_commute.adapters.output.jsonl_audit_log import JsonlAuditLog

__all__ = ["JsonSnapshotWriter", "JsonlAuditLog"]
