"""Snapshot writer storing each snapshot as a JSON file."""

import logging
import os
from pathlib import Path

from rtt_commute.domain.models.snapshot import SnapshotModel
from rtt_commute.domain.ports.snapshot_writer import SnapshotWriter

logger = logging.getLogger(__name__)


class JsonSnapshotWriter(SnapshotWriter):
    """Writes snapshots as pretty-printed camelCase JSON.

    The file is written next to its destination and then renamed over it, so a
    reader never sees a partially written snapshot.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        """Initialize the writer.

        Args:
            base_dir: Directory relative destinations are resolved against.
        """
        self._base_dir = Path(base_dir) if base_dir else None

    def _resolve(self, destination: str) -> Path:
        path = Path(destination)
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        return path

    def write(self, destination: str, snapshot: SnapshotModel) -> None:
        path = self._resolve(destination)
        path.parent.mkdir(parents=True, exist_ok=True)

        tmp = path.with_name(path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(snapshot.model_dump_json(by_alias=True, indent=2))
            f.write("\n")
        os.replace(tmp, path)
        logger.debug(f"Snapshot written to {path}")
