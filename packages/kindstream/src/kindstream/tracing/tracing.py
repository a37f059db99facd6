"""OpenTelemetry spans around registry bootstrap and stream decoding.

Only the OpenTelemetry API is required; without an installed SDK every span
is a no-op.
"""
import logging
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

TRACER_NAME = "kindstream"

# OpenTelemetry allows only: bool, str, bytes, int, float, or sequences of those.
_ALLOWED = (bool, str, bytes, int, float)


def get_tracer(name: str | None = None) -> Tracer:
    """Return the OpenTelemetry tracer used by kindstream."""
    return trace.get_tracer(name or TRACER_NAME)


def _set_attributes(span: Span, attrs: Mapping[str, Any] | None) -> None:
    for key, value in (attrs or {}).items():
        if value is None:
            continue
        if isinstance(value, _ALLOWED):
            span.set_attribute(key, value)
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            cleaned = [x for x in value if isinstance(x, _ALLOWED)]
            if cleaned:
                span.set_attribute(key, cleaned)
        else:
            logger.debug("Span attribute %s skipped: %s", key, type(value).__name__)


def _mark_failed(span: Span, err: Exception) -> None:
    span.record_exception(err)
    span.set_status(Status(StatusCode.ERROR, description=str(err)))
    span.set_attribute("kindstream.error", type(err).__name__)
    # Decode errors know which document failed.
    index = getattr(err, "index", None)
    if isinstance(index, int):
        span.set_attribute("kindstream.document.index", index)


@contextmanager
def span_sync(name: str, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Run the block inside an internal span named ``name``.

    Exceptions are recorded on the span and re-raised unchanged.

    Usage:
        with span_sync("kindstream.decode", attributes={"kindstream.registry.size": 3}):
            ...
    """
    with get_tracer().start_as_current_span(
        name, kind=SpanKind.INTERNAL, record_exception=False, set_status_on_exception=False
    ) as span:
        _set_attributes(span, attributes)
        try:
            yield span
        except Exception as err:
            _mark_failed(span, err)
            raise


__all__ = [
    "TRACER_NAME",
    "get_tracer",
    "span_sync",
]
