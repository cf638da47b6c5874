"""Contract for result sinks."""

from typing import Protocol, runtime_checkable

from testable.models import Envelope


@runtime_checkable
class ResultSink(Protocol):
    """Writes serialized events to the result stream."""

    def write(self, envelope: Envelope) -> None:
        """Append one envelope as a single record."""
