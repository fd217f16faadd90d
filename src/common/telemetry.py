"""OTEL tracing helpers shared by the schema pipeline steps."""

import contextlib
from typing import Any, Dict, Iterator, Mapping, Optional

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

TRACER_NAME = "supergraph-api-schema"

_ATTRIBUTE_TYPES = (str, bool, int, float)


def _clean_attributes(attributes: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    # OTEL rejects None and non-primitive values; sequences are joined.
    cleaned: Dict[str, Any] = {}
    for key, value in (attributes or {}).items():
        if value is None:
            continue
        if isinstance(value, _ATTRIBUTE_TYPES):
            cleaned[key] = value
        elif isinstance(value, (list, tuple, set, frozenset)):
            cleaned[key] = ",".join(str(item) for item in value)
        else:
            cleaned[key] = str(value)
    return cleaned


class Telemetry:
    """Thin wrapper over the OTEL tracer used by the supergraph package."""

    @staticmethod
    @contextlib.contextmanager
    def start_span(
        name: str,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Iterator[Span]:
        """Start an internal span as a context manager."""
        tracer = trace.get_tracer(TRACER_NAME)

        with tracer.start_as_current_span(
            name=name,
            kind=trace.SpanKind.INTERNAL,
            attributes=_clean_attributes(attributes),
        ) as span:
            yield span

    @staticmethod
    def set_span_attributes(span: Span, attributes: Mapping[str, Any]) -> None:
        """Attach attributes to a span, dropping values OTEL cannot encode."""
        for key, value in _clean_attributes(attributes).items():
            span.set_attribute(key, value)

    @staticmethod
    def set_span_status(span: Span, success: bool, error: Optional[Exception] = None) -> None:
        """Set span status based on success/error."""
        if success:
            span.set_status(Status(StatusCode.OK))
            return
        span.set_status(Status(StatusCode.ERROR, description=str(error)))
        if error:
            span.record_exception(error)
