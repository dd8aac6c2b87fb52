"""Persistence backends for the task store.

A backend holds one JSON array of task records and knows only how to read
it whole and overwrite it whole. ``TaskStore`` never caches what it reads,
so whatever the backend returns is the authoritative list.
"""
import copy
import json
import logging
import os
from typing import Any, Dict, List, Optional

from checklist.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

Records = List[Dict[str, Any]]


class JsonFileBackend:
    """Task records stored as a single pretty-printed JSON document."""

    def __init__(self, path: str):
        self.path = os.fspath(path)
        self._ensure_exists()

    def _ensure_exists(self) -> None:
        if os.path.exists(self.path):
            return
        logger.info("Initializing empty task file at %s", self.path)
        self.write([])

    def read(self) -> Records:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageReadError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(data, list):
            raise StorageReadError(f"{self.path} does not contain a JSON array")
        return data

    def write(self, records: Records) -> None:
        # Serialize before truncating so a bad payload leaves the old file alone
        try:
            payload = json.dumps(records, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageWriteError(f"Could not serialize tasks: {exc}") from exc
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as exc:
            raise StorageWriteError(f"Could not write {self.path}: {exc}") from exc
        logger.debug("Wrote %d task(s) to %s", len(records), self.path)


class MemoryBackend:
    """In-process list of records, for tests and throwaway servers.

    ``fail_reads`` / ``fail_writes`` make the next operations raise the same
    errors the file backend would.
    """

    def __init__(self, initial: Optional[Records] = None):
        self._records: Records = copy.deepcopy(initial or [])
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0

    def read(self) -> Records:
        if self.fail_reads:
            raise StorageReadError("In-memory backend configured to fail reads")
        return copy.deepcopy(self._records)

    def write(self, records: Records) -> None:
        if self.fail_writes:
            raise StorageWriteError("In-memory backend configured to fail writes")
        self._records = copy.deepcopy(records)
        self.write_count += 1
