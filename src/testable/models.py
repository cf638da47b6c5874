"""Event envelope and the payloads it carries."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticSerializationError

from .errors import SerializationError

LOG_EVENT = "Log"
ASSERTION_EVENT = "Assertion"
TEST_START_EVENT = "TestStart"


class LogLevel(str, Enum):
    """Severity of a reported log line.

    ``TRACE`` is only honored by the platform while smoke testing and
    ``FATAL`` stops the whole test run.
    """

    TRACE = "Trace"
    DEBUG = "Debug"
    INFO = "Info"
    WARN = "Warn"
    ERROR = "Error"
    FATAL = "Fatal"


class MetricType(str, Enum):
    COUNTER = "Counter"
    TIMING = "Timing"
    HISTOGRAM = "Histogram"


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class LogRecord(_Payload):
    level: LogLevel
    message: str
    timestamp_millis: int


class Metric(_Payload):
    """A custom metric reported into the test results.

    Counters accumulate ``val``, timings record a duration in ``units`` and
    histograms count occurrences of ``key`` within the metric ``name``.
    """

    type: MetricType
    name: str
    val: float
    key: str | None = None
    units: str | None = None

    @classmethod
    def counter(cls, name: str, val: float = 1, units: str | None = None) -> Metric:
        return cls(type=MetricType.COUNTER, name=name, val=val, units=units)

    @classmethod
    def timing(cls, name: str, val: float, units: str = "ms") -> Metric:
        return cls(type=MetricType.TIMING, name=name, val=val, units=units)

    @classmethod
    def histogram(cls, name: str, key: str, val: float = 1) -> Metric:
        return cls(type=MetricType.HISTOGRAM, name=name, key=key, val=val)


class TestStartRecord(_Payload):
    __test__ = False

    test_name: str


class AssertionRecord(_Payload):
    test_name: str
    step_name: str
    state: str
    duration_ms: int
    error_type: str | None = None
    error: str | None = None


class Envelope(BaseModel):
    """Uniform ``{type, data}`` wrapper written as one result line."""

    model_config = ConfigDict(frozen=True)

    type: str
    data: Any

    def to_json(self) -> str:
        try:
            return self.model_dump_json(by_alias=True)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise SerializationError(self.type, str(exc)) from exc
