"""Access to CSV data files uploaded alongside a scenario."""

from __future__ import annotations

import csv
import random
import sys
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import CsvNotFoundError


def resolve_resource(path: str | Path, search_paths: Iterable[str | Path] | None = None) -> Path:
    """Locate ``path`` as given, under the working directory, then on ``sys.path``."""
    candidate = Path(path).expanduser()
    if candidate.is_file():
        return candidate
    if not candidate.is_absolute():
        entries = sys.path if search_paths is None else search_paths
        roots = [Path.cwd(), *(Path(entry) for entry in entries if entry)]
        for root in roots:
            resolved = root / candidate
            if resolved.is_file():
                return resolved
    raise CsvNotFoundError(path)


class CsvReader:
    """Rows of a CSV file keyed by its header line."""

    def __init__(self, path: str | Path, *, search_paths: Iterable[str | Path] | None = None) -> None:
        self._path = resolve_resource(path, search_paths)
        with self._path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle)
            self._rows: list[dict[str, str]] = list(reader)
            self._headers: list[str] = list(reader.fieldnames or [])
        self._cursor = 0
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def headers(self) -> list[str]:
        return list(self._headers)

    @property
    def rows(self) -> list[dict[str, str]]:
        return [dict(row) for row in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[dict[str, str]]:
        return iter(self.rows)

    def get(self, index: int) -> dict[str, str]:
        return dict(self._rows[index])

    def next(self) -> dict[str, str]:
        """Return rows round-robin, wrapping after the last one."""
        if not self._rows:
            raise IndexError(f"CSV has no rows: {self._path}")
        with self._lock:
            row = self._rows[self._cursor % len(self._rows)]
            self._cursor += 1
        return dict(row)

    def random(self) -> dict[str, str]:
        if not self._rows:
            raise IndexError(f"CSV has no rows: {self._path}")
        return dict(random.choice(self._rows))
