"""Append-only JSONL result file consumed by the platform."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TextIO

from testable.errors import SinkWriteError
from testable.models import Envelope


class FileSink:
    """Writes one JSON line per envelope and flushes after each one."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._handle: TextIO = self._path.open("a", encoding="utf-8")
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def write(self, envelope: Envelope) -> None:
        line = envelope.to_json()
        with self._lock:
            try:
                self._handle.write(line + "\n")
                self._handle.flush()
            except (OSError, ValueError) as exc:
                raise SinkWriteError(self._path, str(exc)) from exc

    def close(self) -> None:
        with self._lock:
            self._handle.close()
