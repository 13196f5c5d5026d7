"""
OpenTelemetry Distributed Tracing

Configures tracing for the API process. Spans are exported over OTLP/HTTP
when an endpoint is configured.
"""

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

_initialized = False


def setup_tracing(service_name: str = "zade-backend", otlp_endpoint: Optional[str] = None, enable: bool = True):
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP/HTTP traces endpoint, e.g. http://otel-collector:4318/v1/traces
        enable: Enable/disable tracing
    """
    global _initialized

    if _initialized:
        logger.warning("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    tracer_provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: service_name}))
    trace.set_tracer_provider(tracer_provider)

    if otlp_endpoint:
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
        logger.info(f"OTLP trace export configured: {otlp_endpoint}")
    else:
        logger.warning("No OTLP endpoint configured. Traces will not be exported.")

    DjangoInstrumentor().instrument()
    RequestsInstrumentor().instrument()

    _initialized = True
    logger.info(f"OpenTelemetry tracing initialized for service: {service_name}")


def get_tracer(name: str = __name__) -> trace.Tracer:
    """
    Get tracer for custom spans.

    Example:
        tracer = get_tracer(__name__)

        with tracer.start_as_current_span("checkout"):
            ...
    """
    return trace.get_tracer(name)


def add_span_attributes(span: trace.Span, **attributes) -> None:
    for key, value in attributes.items():
        span.set_attribute(key, str(value))
