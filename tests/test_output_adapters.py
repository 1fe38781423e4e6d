"""Tests for the snapshot writer and audit log."""

import json
from datetime import UTC, date, datetime
from pathlib import Path

from rtt_commute.adapters.output import JsonlAuditLog, JsonSnapshotWriter
from rtt_commute.domain.models import AuditRecord, ErrorDetails, ErrorSnapshot

GENERATED_AT = datetime(2024, 3, 15, 7, 30, tzinfo=UTC)


class TestJsonSnapshotWriter:
    """Tests for JsonSnapshotWriter."""

    def test_writes_camel_case_json(self, tmp_path: Path) -> None:
        """Given a snapshot, when writing, then the file holds camelCase JSON."""
        snapshot = ErrorSnapshot(
            generated_at=GENERATED_AT,
            error=ErrorDetails(phase="status", reason="HTTP 503", status_code=503),
        )

        JsonSnapshotWriter(tmp_path).write("status.json", snapshot)

        data = json.loads((tmp_path / "status.json").read_text())
        assert data["status"] == "error"
        assert data["generatedAt"] == "2024-03-15T07:30:00Z"
        assert data["error"] == {"phase": "status", "reason": "HTTP 503", "statusCode": 503}

    def test_replaces_existing_file_without_leftovers(self, tmp_path: Path) -> None:
        """Given an existing snapshot, when writing again, then it is replaced atomically."""
        target = tmp_path / "out" / "status.json"
        writer = JsonSnapshotWriter()
        first = ErrorSnapshot(
            generated_at=GENERATED_AT, error=ErrorDetails(phase="status", reason="first")
        )
        second = ErrorSnapshot(
            generated_at=GENERATED_AT, error=ErrorDetails(phase="status", reason="second")
        )

        writer.write(str(target), first)
        writer.write(str(target), second)

        assert json.loads(target.read_text())["error"]["reason"] == "second"
        assert [p.name for p in target.parent.iterdir()] == ["status.json"]


class TestJsonlAuditLog:
    """Tests for JsonlAuditLog."""

    def test_appends_one_line_per_record(self, tmp_path: Path) -> None:
        """Given two records, when appending, then both are kept as separate lines."""
        log_path = tmp_path / "runs.log.jsonl"
        audit_log = JsonlAuditLog(log_path)

        audit_log.append(
            AuditRecord(
                timestamp=GENERATED_AT,
                job="status",
                outcome="success",
                date=date(2024, 3, 15),
                status="on_time",
            )
        )
        audit_log.append(
            AuditRecord(timestamp=GENERATED_AT, job="transfers", outcome="failure", message="boom")
        )

        lines = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert lines[0] == {
            "timestamp": "2024-03-15T07:30:00Z",
            "job": "status",
            "outcome": "success",
            "date": "2024-03-15",
            "status": "on_time",
        }
        assert lines[1]["outcome"] == "failure"
        assert lines[1]["message"] == "boom"
        assert "date" not in lines[1]
