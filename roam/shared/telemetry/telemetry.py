"""OpenTelemetry setup for the search core.

Traces search executions and index rebuilds. Without setup_telemetry the
global tracer provider is the no-op default, so @traced costs nothing.
"""

import logging
import threading

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.instrumentor import BaseInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

def build_exporter(exporter_type: str, otlp_endpoint: str | None = None) -> SpanExporter | None:
    """Return the span exporter for exporter_type ("none" gives None).

    otlp without an endpoint and unknown names fall back to the console
    exporter with a warning.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "otlp" and otlp_endpoint:
        return OTLPSpanExporter(
            endpoint=otlp_endpoint,
            insecure=otlp_endpoint.startswith("http://"),
        )
    if exporter_type != "console":
        logger.warning(
            "Span exporter %r unusable (endpoint=%s); falling back to console",
            exporter_type,
            otlp_endpoint,
        )
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider lifecycle plus logging and Redis instrumentation."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Install a global tracer provider.

        Args:
            exporter_type: "console", "otlp", or "none".
            otlp_endpoint: OTLP gRPC endpoint, used when exporter_type is "otlp".
            sample_rate: Root span sampling ratio between 0.0 and 1.0.

        Returns:
            The installed provider, or None when disabled or setup failed.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            provider = TracerProvider(
                resource=Resource.create({
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }),
                sampler=ParentBased(TraceIdRatioBased(sample_rate)),
            )
            exporter = build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Telemetry setup failed; tracing stays disabled")
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: service=%s version=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_logging(self) -> None:
        """Inject trace_id and span_id into log records."""
        self._instrument(LoggingInstrumentor(), "logging", set_logging_format=True)

    def instrument_redis(self) -> None:
        """Create spans for Redis commands issued by the preferences store."""
        self._instrument(RedisInstrumentor(), "redis")

    def _instrument(
        self, instrumentor: BaseInstrumentor, label: str, **options: object
    ) -> None:
        if self.tracer_provider is None:
            return
        try:
            instrumentor.instrument(tracer_provider=self.tracer_provider, **options)
            logger.info("%s instrumentation enabled", label)
        except Exception:
            logger.exception("Failed to instrument %s", label)

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Telemetry shutdown failed")
        else:
            logger.info("Telemetry shut down")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process-wide telemetry instance set at startup."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set the process-wide telemetry instance (None clears it)."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
