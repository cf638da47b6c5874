"""Output sinks for reported events."""

from __future__ import annotations

import logging
from pathlib import Path

from .console import ConsoleSink
from .file import FileSink
from .interfaces import ResultSink
from .memory import MemorySink

logger = logging.getLogger("testable.sinks")


def init_sink(path: str | Path | None) -> ResultSink:
    """Open the result file at ``path`` or fall back to the console.

    A file that cannot be opened is reported once and the console is used for
    the rest of the process; there is no retry.
    """
    if not path:
        return ConsoleSink()
    try:
        return FileSink(path)
    except OSError:
        logger.exception("result_file_unavailable", extra={"path": str(path)})
        return ConsoleSink()


__all__ = [
    "ConsoleSink",
    "FileSink",
    "MemorySink",
    "ResultSink",
    "init_sink",
]
