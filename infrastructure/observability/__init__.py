"""
Observability Infrastructure

Prometheus metrics and OpenTelemetry tracing shared by every app.
"""

from .tracing import add_span_attributes, get_tracer, setup_tracing

__all__ = ["setup_tracing", "get_tracer", "add_span_attributes"]
