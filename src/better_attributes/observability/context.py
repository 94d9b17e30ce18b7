"""Shared observability context utilities."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry.trace import Status, StatusCode
from pydantic import Field

from better_attributes.logging import get_logger
from better_attributes.logging.filters import reset_query_context, set_query_context
from better_attributes.telemetry import get_tracer
from better_attributes.types.base import AttributesBaseModel


class QueryContext(AttributesBaseModel):
    """Observability context for a single attribute query."""

    query_id: str
    target_class: str
    kind: str
    condition: str
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def generate(cls, **kwargs: Any) -> "QueryContext":
        """Generate a new context with a unique query id."""
        return cls(query_id=uuid.uuid4().hex, **kwargs)

    def to_telemetry_dict(self) -> Dict[str, str]:
        payload: Dict[str, str] = {
            "query_id": self.query_id,
            "target_class": self.target_class,
            "kind": self.kind,
            "condition": self.condition,
        }
        payload.update(sanitize_extras(self.attributes, prefix="ctx."))
        return payload


@contextmanager
def query_scope(ctx: QueryContext) -> Iterator[QueryContext]:
    """Apply logging + tracing scope for one query.

    Scopes nest: on exit the context of any enclosing query is restored.
    """
    tokens = set_query_context(query_id=ctx.query_id, target_class=ctx.target_class)

    tracer = get_tracer("better_attributes")
    try:
        with tracer.start_as_current_span("better_attributes.query") as span:
            for key, value in ctx.to_telemetry_dict().items():
                span.set_attribute(f"better_attributes.{key}", value)

            try:
                yield ctx
            except Exception as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR))
                get_logger(__name__).debug(
                    "query.failed",
                    extra=ctx.to_telemetry_dict(),
                    exc_info=True,
                )
                raise
    finally:
        reset_query_context(tokens)


def sanitize_extras(
    extra: Optional[Dict[str, Any]],
    *,
    prefix: Optional[str] = None,
) -> Dict[str, str]:
    """Sanitize arbitrary telemetry extras into a JSON-safe dict."""
    if not extra:
        return {}

    result: Dict[str, str] = {}
    for key, value in extra.items():
        if value is None:
            continue
        field = f"{prefix}{key}" if prefix else str(key)
        result[field] = str(value)
    return result
