"""Per-process naming context for distributed test executions."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings


@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """Region, worker and iteration identifiers of the current process."""

    region_name: str | None = None
    global_client_index: str | None = None
    iteration: str | None = None

    @property
    def is_distributed(self) -> bool:
        return self.region_name is not None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve_context(settings: Settings | None = None) -> ExecutionContext:
    if settings is None:
        return ExecutionContext()
    return ExecutionContext(
        region_name=_clean(settings.region_name),
        global_client_index=_clean(settings.global_client_index),
        iteration=_clean(settings.iteration),
    )


def namespaced_name(base: str, ctx: ExecutionContext) -> str:
    """Prefix ``base`` so parallel runs of one scenario do not collide.

    Outside a region the name is returned unchanged. Inside one, absent
    client index or iteration segments are left out of the prefix.
    """
    if ctx.region_name is None:
        return base
    segments = [ctx.region_name, ctx.global_client_index, ctx.iteration, base]
    return "-".join(segment for segment in segments if segment is not None)
