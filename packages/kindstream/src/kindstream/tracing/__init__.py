# kindstream/tracing/__init__.py
from .tracing import get_tracer, span_sync

__all__ = [
    "get_tracer",
    "span_sync",
]
