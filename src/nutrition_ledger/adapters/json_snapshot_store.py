"""File-backed snapshot repository."""

import contextlib
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from nutrition_ledger.adapters.snapshot_models import SNAPSHOT_VERSION, LedgerSnapshot
from nutrition_ledger.domain.snapshot import LedgerState
from nutrition_ledger.services.data_manager import SnapshotError

_logger = logging.getLogger(__name__)


@dataclass
class JsonSnapshotStore:
    """Reads and atomically rewrites one JSON snapshot file."""

    path: Path

    def load(self) -> LedgerState | None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                _logger.info("No snapshot at %s", self.path)
                return None
            snapshot = LedgerSnapshot.model_validate_json(self.path.read_bytes())
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            raise SnapshotError(f"Cannot read snapshot {self.path}: {exc}") from exc
        if snapshot.version != SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {snapshot.version} in {self.path}"
            )
        return snapshot.to_state()

    def save(self, state: LedgerState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = LedgerSnapshot.from_state(state).model_dump_json(indent=2)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise
        _logger.debug("Saved snapshot to %s", self.path)
