"""Verbose-mode tracing for service operations.

``--verbose`` switches tracing on for the process. Each ``@traced``
operation then records a span tree (nested operations and ``trace_span``
blocks become children) and the outermost one attaches it to
``ServiceResult.meta["telemetry"]``. The resolver tallies where each value
came from on whatever span is open, so a trace shows how much of an
answer was real and how much was synthesized.

With tracing off the cost is one ContextVar lookup per call.
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

from zonepulse.services.result import ServiceResult

_log = structlog.get_logger("zonepulse.telemetry")

_enabled: ContextVar[bool] = ContextVar("zonepulse_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("zonepulse_span", default=None)


@dataclass
class Span:
    """One timed step. ``annotations`` holds free-form tags and tallies."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def tally(self, key: str, amount: int = 1) -> None:
        """Add *amount* to the counter *key*."""
        self.annotations[key] = self.annotations.get(key, 0) + amount

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def _open_span(name: str) -> Iterator[Span]:
    parent = _active.get()
    span = Span(name=name)
    if parent is not None:
        parent.children.append(span)
    token = _active.set(span)
    try:
        yield span
    finally:
        span.finished = time.perf_counter()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a block as a child of the running operation.

    Yields None when tracing is off or no ``@traced`` operation is running.
    """
    if not _enabled.get() or _active.get() is None:
        yield None
        return
    with _open_span(name) as span:
        yield span


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Trace a service operation; the outermost one gets the tree in its meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = _active.get() is None
        ok = False
        with _open_span(func.__qualname__) as span:
            try:
                result = func(*args, **kwargs)
                ok = not isinstance(result, ServiceResult) or result.ok
            finally:
                span.finished = time.perf_counter()
                _log.debug(
                    "span.complete",
                    span_name=span.name,
                    duration_ms=round(span.duration_ms, 2),
                    ok=ok,
                    children=len(span.children),
                )

        if root and isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn tracing on (AppContext does this for ``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The open span, for annotating from deep inside an operation."""
    if not _enabled.get():
        return None
    return _active.get()
