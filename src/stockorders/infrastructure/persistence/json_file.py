"""A JSON array stored in a single file.

Every read and read-modify-write holds ``<name>.lock`` (an OS file lock),
so separate processes sharing a data directory see each update whole.
Writes go to a uniquely named temp file in the same directory which then
replaces the original.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock


class JsonFile:

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock_path = path.with_name(path.name + ".lock")
        self._ensure_file()

    def read(self) -> list[dict]:
        with self._lock():
            return self._load_raw()

    @contextmanager
    def update(self) -> Iterator[list[dict]]:
        """Yield the records for in-place mutation and write them back.

        If the block raises, nothing is written.
        """
        with self._lock():
            records = self._load_raw()
            yield records
            self._persist_raw(records)

    # --- File helpers ---------------------------------------------------------

    def _lock(self) -> FileLock:
        # A fresh instance per acquisition, so threads exclude each other too
        return FileLock(self._lock_path)

    def _load_raw(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=self.path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp.write(json.dumps(records, indent=2) + "\n")
        os.replace(tmp.name, self.path)

    def _ensure_file(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock():
            if not self.path.exists():
                self.path.write_text("[]", encoding="utf-8")
