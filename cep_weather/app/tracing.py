"""Configuration du tracing OpenTelemetry pour l'observabilité.

Ce module configure le tracing distribué avec OpenTelemetry (export OTLP optionnel) et fournit des
décorateurs de lookup qui ouvrent un span par appel amont. Le cas d'usage reste indépendant de
toute infrastructure de tracing: les décorateurs sont posés au câblage.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from opentelemetry import propagate, trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from cep_weather.core.settings import Settings
from cep_weather.domain.entities import Address, PostalCode, WeatherReading
from cep_weather.domain.ports import PostalLookup, WeatherLookup

TRACER_NAME = "cep_weather"


def setup_tracing(settings: Settings) -> TracerProvider | None:
    """Configure le tracing OpenTelemetry pour l'observabilité.

    Initialise le provider de tracing et configure l'exporteur OTLP si l'endpoint est configuré dans
    les paramètres. Sans endpoint, le provider global (no-op) reste en place.
    """
    if not settings.OTLP_ENDPOINT:
        return None

    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: settings.APP_NAME}))
    processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return provider


@contextmanager
def request_span(name: str, headers: Mapping[str, str]) -> Iterator[trace.Span]:
    """Ouvre un span serveur rattaché au contexte W3C extrait des en-têtes entrants."""
    ctx = propagate.extract(dict(headers))
    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(name, context=ctx, kind=trace.SpanKind.SERVER) as span:
        yield span


def current_trace_id() -> str | None:
    """Retourne l'identifiant de trace courant (hex) ou None hors span."""
    span_ctx = trace.get_current_span().get_span_context()
    if not span_ctx.is_valid:
        return None
    return format(span_ctx.trace_id, "032x")


class TracedPostalLookup(PostalLookup):
    """Décorateur: un span client par appel de `resolve_address`."""

    def __init__(self, inner: PostalLookup, tracer: trace.Tracer | None = None) -> None:
        self.inner = inner
        self.name = inner.name
        self._tracer = tracer or trace.get_tracer(TRACER_NAME)

    async def resolve_address(self, code: PostalCode) -> Address:
        with self._tracer.start_as_current_span(
            "PostalLookup.resolve_address",
            kind=trace.SpanKind.CLIENT,
            attributes={"cep.code": str(code), "lookup.backend": self.name},
        ):
            return await self.inner.resolve_address(code)


class TracedWeatherLookup(WeatherLookup):
    """Décorateur: un span client par appel de `resolve_weather`."""

    def __init__(self, inner: WeatherLookup, tracer: trace.Tracer | None = None) -> None:
        self.inner = inner
        self.name = inner.name
        self._tracer = tracer or trace.get_tracer(TRACER_NAME)

    async def resolve_weather(self, city: str) -> WeatherReading:
        with self._tracer.start_as_current_span(
            "WeatherLookup.resolve_weather",
            kind=trace.SpanKind.CLIENT,
            attributes={"weather.city": city, "lookup.backend": self.name},
        ) as span:
            reading = await self.inner.resolve_weather(city)
            span.set_attribute("weather.temp_c", reading.temp_c)
            return reading
