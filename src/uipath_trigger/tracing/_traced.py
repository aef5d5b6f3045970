import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

logger = logging.getLogger(__name__)

_tracer_instance: Optional[trace.Tracer] = None


def get_tracer() -> trace.Tracer:
    """Lazily initializes and returns the tracer instance."""
    global _tracer_instance
    if _tracer_instance is None:
        _tracer_instance = trace.get_tracer("uipath_trigger")
    return _tracer_instance


def _set_call_attributes(
    span: trace.Span, func: Callable[..., Any], args: tuple, kwargs: dict
) -> None:
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return

    for name, value in bound.arguments.items():
        if name in ("self", "cls"):
            continue
        # secrets never reach a span
        if "secret" in name or "token" in name:
            continue
        if isinstance(value, (str, int, float, bool)):
            span.set_attribute(f"input.{name}", value)


def traced(
    name: Optional[str] = None,
    run_type: Optional[str] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that wraps a function call in an OpenTelemetry span.

    Args:
        name: Span name, defaults to the function name.
        run_type: Optional category recorded as the ``run_type`` attribute.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        span_name = name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer().start_as_current_span(span_name) as span:
                if run_type:
                    span.set_attribute("run_type", run_type)
                _set_call_attributes(span, func, args, kwargs)
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    raise

        return wrapper

    return decorator
