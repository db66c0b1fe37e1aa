"""Verbose-mode telemetry for service calls.

``@traced`` opens a root span around a service method; ``trace_span``
opens child spans inside it. With telemetry off both reduce to one
ContextVar lookup. With it on (``archmodel -v``) the finished span tree,
annotated with the model's size after the call, lands in
``ServiceResult.meta["telemetry"]`` and one ``span.complete`` event is
logged per root span.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from archmodel.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("archmodel_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("archmodel_active_span", default=None)

log = structlog.get_logger("archmodel.telemetry")


@dataclass
class Span:
    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started_ns: int = field(default_factory=time.perf_counter_ns)
    finished_ns: int | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished_ns is None:
            return 0.0
        return (self.finished_ns - self.started_ns) / 1_000_000

    def finish(self) -> None:
        if self.finished_ns is None:
            self.finished_ns = time.perf_counter_ns()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        tree: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            tree["annotations"] = dict(self.annotations)
        if self.children:
            tree["children"] = [child.to_dict() for child in self.children]
        return tree


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.finish()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a step of the enclosing ``@traced`` call.

    Yields ``None`` when telemetry is off or there is no enclosing span,
    so callers guard annotations with ``if span:``.
    """
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


def _annotate_model_size(span: Span, service: object) -> None:
    workspace = getattr(service, "_workspace", None)
    if workspace is None or not workspace.is_loaded:
        return
    span.annotate("elements", len(workspace.model.elements))
    span.annotate("relationships", len(workspace.model.relationships))


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Record a root span for a service method and attach it to the result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        ok = False
        try:
            with _activate(span):
                result = func(*args, **kwargs)
            if args:
                _annotate_model_size(span, args[0])
            if isinstance(result, ServiceResult):
                ok = result.ok
                meta = {**(result.meta or {}), "telemetry": span.to_dict()}
                result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
            return result
        finally:
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=ok,
                children=len(span.children),
            )

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on for this context (``archmodel -v``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
