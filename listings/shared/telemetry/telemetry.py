"""OpenTelemetry tracing for the listings API.

Spans cover incoming requests (FastAPI), SQL statements (SQLAlchemy),
Redis commands and the cache-aside lookups in CacheAside. Off unless
TELEMETRY_ENABLED is set; exporters are console, otlp or none.
"""

import logging
import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from listings.core.config import Settings

logger = logging.getLogger(__name__)


def _build_exporter(kind: str, endpoint: str | None) -> SpanExporter | None:
    if kind == "none":
        return None
    if kind == "otlp":
        if endpoint:
            return OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
        logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
    elif kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentations attached to it.

    Build with from_settings(), then start() once the app and engine exist.
    Instrumentation failures are logged and never stop the service.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        health_path: str = "/api/health",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.health_path = health_path
        self.tracer_provider: TracerProvider | None = None
        self._redis_instrumented = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "TelemetryConfig":
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            health_path=f"{settings.api_prefix}/health",
        )

    def setup_provider(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider:
        """Create the tracer provider and make it the global one."""
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_rate))
        )
        exporter = _build_exporter(exporter_type, otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: service=%s version=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return provider

    def start(
        self,
        settings: Settings,
        app: FastAPI,
        engine: AsyncEngine,
        *,
        with_redis: bool,
    ) -> None:
        """Set up the provider and instrument the app, SQL engine and (optionally) Redis."""
        try:
            provider = self.setup_provider(
                exporter_type=settings.telemetry_exporter,
                otlp_endpoint=settings.telemetry_otlp_endpoint,
                sample_rate=settings.telemetry_sample_rate,
            )
        except Exception:
            logger.exception("Tracing setup failed; continuing without it")
            return
        try:
            # Liveness checks would otherwise dominate the trace volume.
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls=self.health_path
            )
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=provider
            )
            if with_redis:
                RedisInstrumentor().instrument(tracer_provider=provider)
                self._redis_instrumented = True
        except Exception:
            logger.exception("Instrumentation failed; spans may be incomplete")

    def shutdown(self) -> None:
        """Flush pending spans and release the provider."""
        if self._redis_instrumented:
            RedisInstrumentor().uninstrument()
            self._redis_instrumented = False
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error flushing spans on shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process-wide telemetry instance (set in the lifespan)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry


def get_tracer(name: str) -> trace.Tracer:
    """Tracer for custom spans; a no-op tracer until a provider is set."""
    return trace.get_tracer(name)
