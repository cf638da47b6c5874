"""In-memory sink for tests and dry runs."""

from __future__ import annotations

import json
import threading
from typing import Any

from testable.models import Envelope


class MemorySink:
    """Keeps every serialized record in order of arrival."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._lock = threading.Lock()

    def write(self, envelope: Envelope) -> None:
        line = envelope.to_json()
        with self._lock:
            self.lines.append(line)

    def records(self, event_type: str | None = None) -> list[dict[str, Any]]:
        parsed = [json.loads(line) for line in self.lines]
        if event_type is None:
            return parsed
        return [record for record in parsed if record["type"] == event_type]

    def clear(self) -> None:
        with self._lock:
            self.lines.clear()
