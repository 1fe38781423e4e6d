"""Append-only JSON lines run log."""

import logging
from pathlib import Path

from rtt_commute.domain.models.snapshot import AuditRecord
from rtt_commute.domain.ports.audit_log import AuditLog

logger = logging.getLogger(__name__)


class JsonlAuditLog(AuditLog):
    """Appends one JSON object per line; existing lines are never rewritten."""

    def __init__(self, log_path: str | Path) -> None:
        self.log_path = Path(log_path)

    def append(self, record: AuditRecord) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as logf:
            logf.write(record.model_dump_json(by_alias=True, exclude_none=True) + "\n")
