"""Shared plumbing for the JSON-file repositories.

Each repository keeps one JSON array of records in one file.  Writes go
to a sibling temp file first and are moved into place, so a reader never
sees half a document.

``lock`` serializes read-modify-write sequences across threads and
processes: an ``fcntl.flock`` on a sibling ``.lock`` file guards against
other processes (every CLI command is one), and a per-path ``RLock``
guards against other threads in this one.  The lock is re-entrant; only
the outermost holder takes and releases the file lock.
"""

from __future__ import annotations

import fcntl
import json
import threading
from pathlib import Path
from typing import IO

from storefront.domain.model.value_objects import Money


class FileLock:

    def __init__(self, lock_path: Path) -> None:
        self.path = lock_path
        self._thread_lock = threading.RLock()
        self._depth = 0
        self._handle: IO[str] | None = None

    def __enter__(self) -> FileLock:
        self._thread_lock.acquire()
        if self._depth == 0:
            try:
                self._handle = open(self.path, "w")
                fcntl.flock(self._handle.fileno(), fcntl.LOCK_EX)
            except BaseException:
                if self._handle is not None:
                    self._handle.close()
                    self._handle = None
                self._thread_lock.release()
                raise
        self._depth += 1
        return self

    def __exit__(self, *exc_info) -> None:
        self._depth -= 1
        try:
            if self._depth == 0 and self._handle is not None:
                fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
                self._handle.close()
                self._handle = None
        finally:
            self._thread_lock.release()


_LOCKS: dict[Path, FileLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> FileLock:
    with _LOCKS_GUARD:
        if path not in _LOCKS:
            _LOCKS[path] = FileLock(path.with_suffix(path.suffix + ".lock"))
        return _LOCKS[path]


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = file_path.resolve()
        self.lock = _lock_for(self.path)
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self.path)

    def _ensure_file(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.lock:
            if not self.path.exists():
                self.path.write_text("[]", encoding="utf-8")


# --- Money helpers ---------------------------------------------------------


def money_to_raw(money: Money | None) -> dict | None:
    if money is None:
        return None
    return {"amount": money.amount, "currency": money.currency}


def money_from_raw(raw: dict | None) -> Money | None:
    if raw is None:
        return None
    return Money(raw["amount"], raw["currency"])
