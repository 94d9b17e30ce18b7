import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import Status, StatusCode

from better_attributes.telemetry import get_tracer


F = TypeVar('F', bound=Callable[..., Any])

SpanAttributes = Dict[str, Any]


def traced(
    span_name: Optional[str] = None,
    *,
    call_attributes: Optional[Callable[..., SpanAttributes]] = None,
    result_attributes: Optional[Callable[[Any], SpanAttributes]] = None,
) -> Callable[[F], F]:
    """Run a function inside a ``better_attributes`` span.

    Args:
        span_name: Span name, defaults to the module-qualified function name.
        call_attributes: Receives the call's arguments and returns span
            attributes recorded before the function runs.
        result_attributes: Receives the return value and returns span
            attributes recorded after it.
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer("better_attributes")

            with tracer.start_as_current_span(name) as span:
                if call_attributes is not None:
                    _record(span, call_attributes(*args, **kwargs))

                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

                if result_attributes is not None:
                    _record(span, result_attributes(result))
                return result

        return wrapper  # type: ignore[return-value]

    return decorator


def _record(span: Any, attributes: SpanAttributes) -> None:
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(f"better_attributes.{key}", value)
