"""Configuration du tracing OpenTelemetry pour l'observabilité.

Ce module configure le tracing distribué avec OpenTelemetry pour exporter les traces vers un
endpoint OTLP configuré via les variables d'environnement.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def setup_tracing(settings) -> bool:
    """Configure le tracing OpenTelemetry si `OTLP_ENDPOINT` est défini.

    Returns:
        bool: True si un exporteur a été installé.
    """
    endpoint = getattr(settings, "OTLP_ENDPOINT", None)
    if not endpoint:
        return False

    provider = TracerProvider(
        resource=Resource.create({"service.name": getattr(settings, "APP_NAME", "vedic-backend")})
    )
    processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return True
