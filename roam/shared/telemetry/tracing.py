"""Span helpers for search execution and index maintenance.

Query text is user content and is never written to span attributes;
only counts and identifiers from the allowlist below are recorded.
"""

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_RECORDED_KWARGS = frozenset({
    "count", "limit", "max_results", "entity_type", "entity_id", "types", "generation",
})


@contextmanager
def _span(name: str, attributes: dict | None, kwargs: dict) -> Iterator[trace.Span]:
    """Open a span, record allowlisted kwargs, and mark it OK or ERROR on exit."""
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(name, record_exception=False) as span:
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)
        for key, value in kwargs.items():
            if key in _RECORDED_KWARGS:
                span.set_attribute(f"arg.{key}", str(value))
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, type(e).__name__))
            raise
        span.set_status(Status(StatusCode.OK))


def traced(name: str | None = None, attributes: dict | None = None) -> Callable:
    """Wrap a function or coroutine function in a span.

    Args:
        name: Span name; defaults to "<module>.<qualname>".
        attributes: Static attributes set on every span.
    """

    def decorator(func: Callable) -> Callable:
        span_name = name or f"{func.__module__}.{func.__qualname__}"

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _span(span_name, attributes, kwargs):
                    return await func(*args, **kwargs)

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _span(span_name, attributes, kwargs):
                return func(*args, **kwargs)

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)
