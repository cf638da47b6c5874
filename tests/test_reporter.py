from __future__ import annotations

import json
from pathlib import Path

import pytest

from testable.config import Settings
from testable.context import ExecutionContext
from testable.errors import SerializationError
from testable.models import LogLevel, Metric, MetricType
from testable.reporter import Reporter, render_exception
from testable.sinks import ConsoleSink, FileSink, MemorySink


class _OpaqueMetric:
    type = MetricType.COUNTER

    def __init__(self) -> None:
        self.connection = object()


def test_metric_envelope_roundtrip() -> None:
    sink = MemorySink()
    metric = Metric.counter("My Request Counter", 1, units="requests")

    Reporter(sink).report_metric(metric)

    assert json.loads(sink.lines[0]) == {
        "type": "Counter",
        "data": metric.model_dump(mode="json", by_alias=True),
    }


def test_metric_kinds_become_event_types() -> None:
    sink = MemorySink()
    reporter = Reporter(sink)

    reporter.report_metric(Metric.timing("Page Load", 120))
    reporter.report_metric(Metric.histogram("Status Codes", key="200"))

    timing, histogram = sink.records()
    assert timing["type"] == "Timing"
    assert timing["data"] == {"type": "Timing", "name": "Page Load", "val": 120.0, "key": None, "units": "ms"}
    assert histogram["type"] == "Histogram"
    assert histogram["data"]["key"] == "200"


def test_unserializable_metric_fails_the_call() -> None:
    sink = MemorySink()

    with pytest.raises(SerializationError) as excinfo:
        Reporter(sink).report_metric(_OpaqueMetric())

    assert excinfo.value.event_type == "Counter"
    assert sink.lines == []


def test_log_captures_level_message_and_timestamp() -> None:
    sink = MemorySink()
    reporter = Reporter(sink, clock=lambda: 1_700_000_000.5)

    reporter.log(LogLevel.WARN, "slow response")
    reporter.log("Debug", "raw level")

    first, second = sink.records("Log")
    assert first["data"] == {"level": "Warn", "message": "slow response", "timestampMillis": 1_700_000_000_500}
    assert second["data"]["level"] == "Debug"


def test_log_renders_chained_cause() -> None:
    sink = MemorySink()
    reporter = Reporter(sink)

    try:
        try:
            raise KeyError("cart")
        except KeyError as exc:
            raise RuntimeError("checkout failed") from exc
    except RuntimeError as err:
        reporter.error("step blew up", cause=err)
        reporter.fatal(cause=err)

    with_message, cause_only = (record["data"]["message"] for record in sink.records("Log"))
    assert with_message.startswith("step blew up\nTraceback")
    assert "KeyError: 'cart'" in with_message
    assert "direct cause of the following exception" in with_message
    assert with_message.endswith("RuntimeError: checkout failed")
    assert cause_only.startswith("Traceback")
    assert sink.records("Log")[1]["data"]["level"] == "Fatal"


def test_render_exception_without_traceback() -> None:
    assert render_exception(ValueError("bad value")) == "ValueError: bad value"


def test_log_requires_message_or_cause() -> None:
    with pytest.raises(ValueError):
        Reporter(MemorySink()).log(LogLevel.INFO)


def test_level_shortcuts() -> None:
    sink = MemorySink()
    reporter = Reporter(sink)

    reporter.trace("t")
    reporter.debug("d")
    reporter.info("i")
    reporter.warn("w")
    reporter.error("e")
    reporter.fatal("f")

    assert [record["data"]["level"] for record in sink.records()] == ["Trace", "Debug", "Info", "Warn", "Error", "Fatal"]


def test_start_test_returns_independent_namespaced_runs() -> None:
    sink = MemorySink()
    reporter = Reporter(sink, context=ExecutionContext(region_name="us-east", global_client_index="2", iteration="5"))

    first = reporter.start_test("checkout")
    second = reporter.start_test("checkout")
    first.start_step("add to cart")

    assert first is not second
    assert first.name == second.name == "us-east-2-5-checkout"
    assert [step.name for step in first.steps] == ["add to cart"]
    assert second.steps == ()
    assert second.current_step is None


def test_from_settings_wires_file_sink_and_context(tmp_path: Path) -> None:
    settings = Settings(
        result_file=str(tmp_path / "results.jsonl"),
        region_name="us-east",
        global_client_index="1",
        iteration="0",
        proxy_autoconfig_url="http://proxy.local/pac",
        smoke_test=True,
    )

    reporter = Reporter.from_settings(settings)

    assert isinstance(reporter.sink, FileSink)
    assert reporter.namespaced_name("login") == "us-east-1-0-login"
    assert reporter.proxy_autoconfig_url == "http://proxy.local/pac"
    assert reporter.smoke_test is True
    reporter.sink.close()


def test_from_settings_without_result_file_prints(capsys) -> None:
    reporter = Reporter.from_settings(Settings())

    reporter.info("standalone")

    assert isinstance(reporter.sink, ConsoleSink)
    assert capsys.readouterr().out.startswith("[Log] ")


def test_output_path_prefers_output_dir(tmp_path: Path) -> None:
    configured = Reporter(MemorySink(), settings=Settings(output_dir=str(tmp_path / "out")))
    standalone = Reporter(MemorySink())

    assert configured.output_path("shot.png") == tmp_path / "out" / "shot.png"
    assert standalone.output_path("shot.png") == Path.cwd() / "shot.png"


def test_start_test_appends_one_record_to_result_file(tmp_path: Path) -> None:
    path = tmp_path / "results.jsonl"
    sink = FileSink(path)
    reporter = Reporter(sink, context=ExecutionContext(region_name="us-east", global_client_index="2", iteration="5"))

    reporter.start_test("checkout")
    lines = path.read_text(encoding="utf-8").splitlines()
    sink.close()

    assert len(lines) == 1
    assert json.loads(lines[0]) == {"type": "TestStart", "data": {"testName": "us-east-2-5-checkout"}}


def test_start_test_prints_one_line_when_standalone(capsys) -> None:
    Reporter(ConsoleSink()).start_test("checkout")

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    assert lines[0] == '[TestStart] {"type":"TestStart","data":{"testName":"checkout"}}'
