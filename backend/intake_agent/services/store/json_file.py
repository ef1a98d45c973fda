"""JSON snapshot implementation of the intake store."""
from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Sequence

from pydantic import TypeAdapter, ValidationError

from ...core.logging_utils import log_event
from ...core.models import IntakeRecord
from .base import BaseIntakeStore

SNAPSHOT_VERSION = 1
SNAPSHOT_KEY = "intakes"

_records_adapter = TypeAdapter(list[IntakeRecord])


class SnapshotFormatError(ValueError):
    """Raised when a snapshot has an unexpected shape or version."""


def _extract_record_payloads(raw: Any) -> list[Any]:
    # Bare lists are the unversioned shape written by the browser client.
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, dict):
        raise SnapshotFormatError("Snapshot is neither an object nor a list.")
    version = raw.get("version")
    if version != SNAPSHOT_VERSION:
        raise SnapshotFormatError(f"Unsupported snapshot version: {version!r}")
    payloads = raw.get(SNAPSHOT_KEY)
    if not isinstance(payloads, list):
        raise SnapshotFormatError(f"Snapshot '{SNAPSHOT_KEY}' is not a list.")
    return payloads


class JsonFileIntakeStore(BaseIntakeStore):
    """Store persisted as one JSON document, rewritten on every append."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__()
        self.path = Path(path)
        self._write_lock = threading.Lock()

    def load(self) -> Sequence[IntakeRecord]:
        if not self.path.exists():
            self._records = []
            log_event(
                component="intake_store",
                event="store_snapshot_missing",
                details={"path": str(self.path)},
            )
            return self.records

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            records = _records_adapter.validate_python(_extract_record_payloads(raw))
        except (OSError, ValueError, ValidationError) as err:
            self._records = []
            log_event(
                component="intake_store",
                event="store_load_failed",
                level="ERROR",
                details={"path": str(self.path), "error": str(err)},
            )
            return self.records

        self._records = list(records)
        log_event(
            component="intake_store",
            event="store_loaded",
            details={"path": str(self.path), "records": len(self._records)},
        )
        return self.records

    def append(self, record: IntakeRecord) -> None:
        with self._write_lock:
            self._records.append(record)
            try:
                self._write_snapshot()
            except OSError as err:
                log_event(
                    component="intake_store",
                    event="store_persist_failed",
                    level="ERROR",
                    details={
                        "path": str(self.path),
                        "intake_id": record.id,
                        "error": str(err),
                    },
                )
                return

        log_event(
            component="intake_store",
            event="store_persisted",
            details={"intake_id": record.id, "records": len(self._records)},
        )

    def _write_snapshot(self) -> None:
        snapshot = {
            "version": SNAPSHOT_VERSION,
            SNAPSHOT_KEY: [record.to_payload() for record in self._records],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            try:
                json.dump(snapshot, tmp, ensure_ascii=False)
                tmp.flush()
                os.fsync(tmp.fileno())
            except OSError:
                tmp.close()
                os.remove(tmp_path)
                raise

        try:
            os.replace(tmp_path, self.path)
        except OSError:
            os.remove(tmp_path)
            raise
