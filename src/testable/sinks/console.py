"""Console fallback used when no result file is available."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from testable.models import Envelope


class ConsoleSink:
    """Prints ``[<type>] <json>`` lines for local debugging."""

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output
        self._lock = threading.Lock()

    def write(self, envelope: Envelope) -> None:
        line = f"[{envelope.type}] {envelope.to_json()}"
        # sys.stdout may be replaced after construction.
        output = self._output or sys.stdout
        with self._lock:
            print(line, file=output, flush=True)
