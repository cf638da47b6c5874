"""Process-wide reporter and module-level shortcuts.

The first call to :func:`configure` (or to any shortcut) builds the single
reporter of the process. There is no way to rebuild it afterwards.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from .config import Settings, load_settings
from .csv_reader import CsvReader
from .errors import AlreadyConfiguredError
from .models import LogLevel
from .reporter import ReportableMetric, Reporter
from .steps import TestRun

_reporter: Reporter | None = None
_lock = threading.Lock()


def configure(settings: Settings | None = None, **kwargs: Any) -> Reporter:
    """Build the process reporter from ``settings`` (or the environment)."""
    global _reporter
    with _lock:
        if _reporter is not None:
            raise AlreadyConfiguredError("The process reporter is already configured")
        _reporter = Reporter.from_settings(settings or load_settings(), **kwargs)
        return _reporter


def get_reporter() -> Reporter:
    """Return the process reporter, configuring it from the environment on first use."""
    global _reporter
    with _lock:
        if _reporter is None:
            _reporter = Reporter.from_settings(load_settings())
        return _reporter


def is_configured() -> bool:
    return _reporter is not None


def report_metric(metric: ReportableMetric) -> None:
    get_reporter().report_metric(metric)


def log(level: LogLevel | str, message: str | None = None, *, cause: BaseException | None = None) -> None:
    get_reporter().log(level, message, cause=cause)


def start_test(name: str) -> TestRun:
    return get_reporter().start_test(name)


def read_csv(path: str | Path) -> CsvReader:
    return get_reporter().read_csv(path)


def namespaced_name(base: str) -> str:
    return get_reporter().namespaced_name(base)
