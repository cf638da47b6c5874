"""Named test steps shown in the platform's assertions widget."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from .errors import NoOpenStepError, TestRunClosedError
from .models import ASSERTION_EVENT, AssertionRecord, Envelope


class StepState(str, Enum):
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


@dataclass(slots=True)
class TestStep:
    """One step of a test run and its outcome."""

    __test__ = False

    name: str
    started_at: float
    finished_at: float | None = None
    state: StepState = StepState.RUNNING
    error_type: str | None = None
    error: str | None = None

    @property
    def duration_ms(self) -> int | None:
        if self.finished_at is None:
            return None
        return int(round((self.finished_at - self.started_at) * 1000))


class TestRun:
    """Records an ordered series of steps for one named test.

    Runs never share state: each one owns its step list and reports every
    finished step through ``emit`` as an ``Assertion`` event.
    """

    __test__ = False

    def __init__(
        self,
        name: str,
        emit: Callable[[Envelope], None],
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._name = name
        self._emit = emit
        self._clock = clock
        self._steps: list[TestStep] = []
        self._current: TestStep | None = None
        self._finished = False
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def steps(self) -> tuple[TestStep, ...]:
        with self._lock:
            return tuple(self._steps)

    @property
    def current_step(self) -> TestStep | None:
        return self._current

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def passed(self) -> bool:
        with self._lock:
            return all(step.state != StepState.FAILED for step in self._steps)

    def start_step(self, name: str) -> TestStep:
        """Open a new step, passing any step that is still open."""
        with self._lock:
            self._ensure_open()
            if self._current is not None:
                self._close_current(StepState.PASSED)
            step = TestStep(name=name, started_at=self._clock())
            self._steps.append(step)
            self._current = step
            return step

    def finish_step(self) -> TestStep:
        with self._lock:
            self._ensure_open()
            return self._close_current(StepState.PASSED)

    def fail_step(self, error: BaseException | str) -> TestStep:
        with self._lock:
            self._ensure_open()
            if isinstance(error, BaseException):
                return self._close_current(StepState.FAILED, type(error).__name__, str(error))
            return self._close_current(StepState.FAILED, None, error)

    @contextmanager
    def step(self, name: str) -> Iterator[TestStep]:
        """Run a block as one step; an exception fails the step and propagates."""
        current = self.start_step(name)
        try:
            yield current
        except BaseException as exc:
            with self._lock:
                if self._current is current and not self._finished:
                    self.fail_step(exc)
            raise
        with self._lock:
            if self._current is current and not self._finished:
                self.finish_step()

    def finish(self) -> None:
        with self._lock:
            if self._finished:
                return
            if self._current is not None:
                self._close_current(StepState.PASSED)
            self._finished = True

    def __enter__(self) -> TestRun:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        with self._lock:
            if exc is not None and not self._finished:
                # Errors outside any step are recorded under the run name.
                if self._current is None:
                    self.start_step(self._name)
                self.fail_step(exc)
            self.finish()

    def _ensure_open(self) -> None:
        if self._finished:
            raise TestRunClosedError(f"Test run {self._name!r} is already finished")

    def _close_current(
        self,
        state: StepState,
        error_type: str | None = None,
        error: str | None = None,
    ) -> TestStep:
        step = self._current
        if step is None:
            raise NoOpenStepError(f"Test run {self._name!r} has no open step")
        step.finished_at = self._clock()
        step.state = state
        step.error_type = error_type
        step.error = error
        self._current = None
        self._emit(
            Envelope(
                type=ASSERTION_EVENT,
                data=AssertionRecord(
                    test_name=self._name,
                    step_name=step.name,
                    state=state.value,
                    duration_ms=step.duration_ms or 0,
                    error_type=error_type,
                    error=error,
                ),
            )
        )
        return step
