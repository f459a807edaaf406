"""Bootstrap OpenTelemetry providers for cmdtrace."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from opentelemetry import trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanLimits, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from obs.otel.config import TelemetryConfig, TraceExporterKind
from obs.otel.constants import ResourceAttribute
from obs.otel.processors import BaggageSpanProcessor, RunIdSpanProcessor

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class OtelProviders:
    """Providers installed by :func:`configure_otel`."""

    tracer_provider: TracerProvider
    span_exporter: InMemorySpanExporter | None = None

    def shutdown(self) -> None:
        """Flush and shut down the tracer provider."""
        self.tracer_provider.force_flush()
        self.tracer_provider.shutdown()


_PROVIDERS: dict[str, OtelProviders | None] = {"value": None}


def build_resource(config: TelemetryConfig) -> Resource:
    """Return the resource describing this process.

    Returns
    -------
    opentelemetry.sdk.resources.Resource
        Resource with service attributes.
    """
    attributes: dict[str, str] = {ResourceAttribute.SERVICE_NAME: config.service_name}
    if config.service_version:
        attributes[ResourceAttribute.SERVICE_VERSION] = config.service_version
    return Resource.create(attributes)


def build_tracer_provider(config: TelemetryConfig) -> OtelProviders:
    """Build a tracer provider for ``config`` without installing it.

    Parameters
    ----------
    config
        Resolved telemetry configuration.

    Returns
    -------
    OtelProviders
        Provider bundle; ``span_exporter`` is set for the memory exporter.
    """
    provider = TracerProvider(
        resource=build_resource(config),
        sampler=ParentBased(TraceIdRatioBased(config.sampler_ratio)),
        span_limits=SpanLimits(
            max_span_attributes=config.attribute_count_limit,
            max_attribute_length=config.attribute_value_length_limit,
        ),
    )
    provider.add_span_processor(BaggageSpanProcessor())
    provider.add_span_processor(RunIdSpanProcessor())
    memory_exporter: InMemorySpanExporter | None = None
    if config.exporter == TraceExporterKind.CONSOLE:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    elif config.exporter == TraceExporterKind.MEMORY:
        memory_exporter = InMemorySpanExporter()
        provider.add_span_processor(SimpleSpanProcessor(memory_exporter))
    return OtelProviders(tracer_provider=provider, span_exporter=memory_exporter)


def configure_otel(config: TelemetryConfig) -> OtelProviders | None:
    """Install global OpenTelemetry providers once per process.

    Parameters
    ----------
    config
        Resolved telemetry configuration.

    Returns
    -------
    OtelProviders | None
        Installed providers, or None when telemetry is disabled.
    """
    existing = _PROVIDERS["value"]
    if existing is not None:
        return existing
    if not config.enabled:
        _LOGGER.debug("Telemetry disabled; leaving the no-op tracer provider in place.")
        return None
    providers = build_tracer_provider(config)
    trace.set_tracer_provider(providers.tracer_provider)
    set_global_textmap(
        CompositePropagator([TraceContextTextMapPropagator(), W3CBaggagePropagator()])
    )
    _PROVIDERS["value"] = providers
    return providers


def shutdown_otel() -> None:
    """Shut down providers installed by :func:`configure_otel`."""
    providers = _PROVIDERS["value"]
    if providers is None:
        return
    providers.shutdown()


__all__ = [
    "OtelProviders",
    "build_resource",
    "build_tracer_provider",
    "configure_otel",
    "shutdown_otel",
]
