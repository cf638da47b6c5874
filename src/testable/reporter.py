"""Public reporting facade used by test scripts."""

from __future__ import annotations

import logging
import time
import traceback
from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from .config import Settings
from .context import ExecutionContext, namespaced_name, resolve_context
from .csv_reader import CsvReader
from .models import LOG_EVENT, TEST_START_EVENT, Envelope, LogLevel, LogRecord, TestStartRecord
from .sinks import ResultSink, init_sink
from .steps import TestRun


class ReportableMetric(Protocol):
    """Anything carrying a metric kind tag in ``type``."""

    type: Any


def render_exception(error: BaseException) -> str:
    """Full traceback text of ``error`` including its chained causes."""
    return "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip("\n")


def _kind_tag(kind: Any) -> str:
    if isinstance(kind, Enum):
        return str(kind.value)
    return str(kind)


class Reporter:
    """Builds events for metrics, logs and test steps and hands them to a sink.

    A reporter owns exactly one sink. Build it once at startup, either
    directly or with :meth:`from_settings`, and share it with every call site.
    """

    def __init__(
        self,
        sink: ResultSink,
        *,
        context: ExecutionContext | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.time,
        logger: logging.Logger | None = None,
    ) -> None:
        self._sink = sink
        self._context = context or ExecutionContext()
        self._settings = settings
        self._clock = clock
        self._logger = logger or logging.getLogger("testable.reporter")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> Reporter:
        sink = init_sink(settings.result_file)
        reporter = cls(sink, context=resolve_context(settings), settings=settings, **kwargs)
        reporter._logger.debug(
            "reporter_configured",
            extra={"sink": type(sink).__name__, "region_name": settings.region_name},
        )
        return reporter

    @property
    def sink(self) -> ResultSink:
        return self._sink

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def settings(self) -> Settings | None:
        return self._settings

    @property
    def smoke_test(self) -> bool:
        return bool(self._settings and self._settings.smoke_test)

    @property
    def proxy_autoconfig_url(self) -> str | None:
        return self._settings.proxy_autoconfig_url if self._settings else None

    def report(self, event_type: str, data: Any) -> None:
        """Emit ``data`` under a caller-supplied event type."""
        self._sink.write(Envelope(type=event_type, data=data))

    def report_metric(self, metric: ReportableMetric) -> None:
        """Report a counter, timing or histogram into the test results.

        Example::

            reporter.report_metric(Metric.counter("My Request Counter", 1, units="requests"))
        """
        self.report(_kind_tag(metric.type), metric)

    def log(
        self,
        level: LogLevel | str,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
    ) -> None:
        """Log a line into the test results.

        When ``cause`` is given its traceback is rendered now and appended to
        ``message`` (or used on its own). Trace lines only show up while smoke
        testing; a fatal line stops the whole test run.
        """
        if message is None and cause is None:
            raise ValueError("log() needs a message, a cause, or both")
        parts = [message] if message else []
        if cause is not None:
            parts.append(render_exception(cause))
        record = LogRecord(
            level=LogLevel(level),
            message="\n".join(parts),
            timestamp_millis=int(self._clock() * 1000),
        )
        self.report(LOG_EVENT, record)

    def trace(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        self.log(LogLevel.TRACE, message, cause=cause)

    def debug(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        self.log(LogLevel.DEBUG, message, cause=cause)

    def info(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        self.log(LogLevel.INFO, message, cause=cause)

    def warn(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        self.log(LogLevel.WARN, message, cause=cause)

    def error(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        self.log(LogLevel.ERROR, message, cause=cause)

    def fatal(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        self.log(LogLevel.FATAL, message, cause=cause)

    def start_test(self, name: str) -> TestRun:
        """Start recording the steps of a test shown in the assertions widget.

        Reports one ``TestStart`` event carrying the namespaced test name.
        """
        test_name = self.namespaced_name(name)
        self.report(TEST_START_EVENT, TestStartRecord(test_name=test_name))
        return TestRun(test_name, self._sink.write)

    def read_csv(self, path: str | Path, *, search_paths: Iterable[str | Path] | None = None) -> CsvReader:
        return CsvReader(path, search_paths=search_paths)

    def namespaced_name(self, base: str) -> str:
        return namespaced_name(base, self._context)

    def output_path(self, filename: str) -> Path:
        """Location for an artifact written by the test, inside ``OUTPUT_DIR`` when set."""
        output_dir = self._settings.output_dir if self._settings else None
        return Path(output_dir or Path.cwd()) / filename
