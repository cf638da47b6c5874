"""Report metrics, logs and test steps to the Testable platform."""

from .config import Settings, load_settings
from .context import ExecutionContext, namespaced_name, resolve_context
from .csv_reader import CsvReader
from .errors import (
    AlreadyConfiguredError,
    CsvNotFoundError,
    NoOpenStepError,
    ReportingError,
    SerializationError,
    SinkWriteError,
    TestRunClosedError,
)
from .models import AssertionRecord, Envelope, LogLevel, LogRecord, Metric, MetricType, TestStartRecord
from .reporter import Reporter
from .runtime import configure, get_reporter, log, read_csv, report_metric, start_test
from .sinks import ConsoleSink, FileSink, MemorySink, ResultSink, init_sink
from .steps import StepState, TestRun, TestStep

__all__ = [
    "AlreadyConfiguredError",
    "AssertionRecord",
    "ConsoleSink",
    "CsvNotFoundError",
    "CsvReader",
    "Envelope",
    "ExecutionContext",
    "FileSink",
    "LogLevel",
    "LogRecord",
    "MemorySink",
    "Metric",
    "MetricType",
    "NoOpenStepError",
    "Reporter",
    "ReportingError",
    "ResultSink",
    "SerializationError",
    "Settings",
    "SinkWriteError",
    "StepState",
    "TestRun",
    "TestRunClosedError",
    "TestStartRecord",
    "TestStep",
    "configure",
    "get_reporter",
    "init_sink",
    "load_settings",
    "log",
    "namespaced_name",
    "read_csv",
    "report_metric",
    "resolve_context",
    "start_test",
]
