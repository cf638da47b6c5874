"""Exceptions raised by the reporting client.

Configuration gaps are never errors. Everything here signals either a defect
in what the caller handed over or a broken result stream.
"""

from __future__ import annotations

from pathlib import Path


class ReportingError(RuntimeError):
    """Base class for reporting client failures."""


class SerializationError(ReportingError):
    """Raised when an event payload cannot be rendered as JSON."""

    def __init__(self, event_type: str, detail: str) -> None:
        super().__init__(f"Unable to serialize {event_type!r} event: {detail}")
        self.event_type = event_type


class SinkWriteError(ReportingError):
    """Raised when the result file rejects a write mid-stream."""

    def __init__(self, path: str | Path, detail: str) -> None:
        super().__init__(f"Failed writing to result file {path}: {detail}")
        self.path = str(path)


class CsvNotFoundError(ReportingError, FileNotFoundError):
    """Raised when a CSV path resolves to nothing readable."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"CSV not found: {path}")
        self.path = str(path)


class AlreadyConfiguredError(ReportingError):
    """Raised on a second attempt to initialize the process reporter."""


class TestRunClosedError(ReportingError):
    """Raised when steps are recorded on a finished test run."""

    __test__ = False


class NoOpenStepError(ReportingError):
    """Raised when a step is finished or failed while none is open."""
