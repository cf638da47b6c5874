"""CLI entrypoint for reporting from shell scripts and for local debugging."""

from __future__ import annotations

import logging

import typer
from rich import print

from testable.config import load_settings
from testable.context import namespaced_name, resolve_context
from testable.errors import CsvNotFoundError
from testable.models import LogLevel, Metric, MetricType
from testable.reporter import Reporter

app = typer.Typer(help="Testable reporting client")


def _build_reporter() -> Reporter:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())
    return Reporter.from_settings(settings)


@app.command()
def context() -> None:
    """Show the resolved configuration and execution context."""
    settings = load_settings()
    ctx = resolve_context(settings)
    print(
        {
            "result_file": settings.result_file,
            "output_dir": settings.output_dir,
            "proxy_autoconfig_url": settings.proxy_autoconfig_url,
            "smoke_test": settings.smoke_test,
            "region_name": ctx.region_name,
            "global_client_index": ctx.global_client_index,
            "iteration": ctx.iteration,
        }
    )


@app.command()
def name(base: str) -> None:
    """Print ``base`` prefixed with the region, client index and iteration."""
    typer.echo(namespaced_name(base, resolve_context(load_settings())))


@app.command("log")
def log_message(
    message: str,
    level: LogLevel = typer.Option(LogLevel.INFO, case_sensitive=False, help="Log level"),
) -> None:
    """Report a log line."""
    _build_reporter().log(level, message)


@app.command()
def metric(
    kind: MetricType = typer.Argument(..., case_sensitive=False, help="Counter, Timing or Histogram"),
    metric_name: str = typer.Argument(..., help="Metric name"),
    value: float = typer.Argument(1.0, help="Metric value"),
    units: str = typer.Option(None, help="Units, e.g. requests or ms"),
    key: str = typer.Option(None, help="Histogram bucket key"),
) -> None:
    """Report a custom metric."""
    if kind == MetricType.HISTOGRAM and not key:
        raise typer.BadParameter("Histogram metrics need --key")
    _build_reporter().report_metric(Metric(type=kind, name=metric_name, val=value, key=key, units=units))


@app.command()
def csv(
    path: str,
    rows: int = typer.Option(5, help="How many rows to show"),
) -> None:
    """Show the header and first rows of a CSV data file."""
    try:
        reader = _build_reporter().read_csv(path)
    except CsvNotFoundError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    print({"path": str(reader.path), "headers": reader.headers, "rows": reader.rows[:rows]})


if __name__ == "__main__":
    app()
