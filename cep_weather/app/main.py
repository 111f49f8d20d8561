"""
Application principale FastAPI.

Ce module assemble tous les composants du service : middlewares, gestion des erreurs, routes,
métriques et tracing.

Responsabilités du module:
- Initialiser le logging structuré et le tracing
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (request id, timing, Prometheus)
- Monter les routers (santé, température, métriques)
- Fermer le client HTTP partagé et le provider de tracing à l'arrêt
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from cep_weather.api.errors import register_error_handlers
from cep_weather.api.routes_health import router as health_router
from cep_weather.api.routes_temperature import router as temperature_router
from cep_weather.app.metrics import PrometheusMiddleware, metrics_router
from cep_weather.app.tracing import setup_tracing
from cep_weather.core.container import container
from cep_weather.core.logging import setup_logging
from cep_weather.middlewares.request_id import RequestIDMiddleware
from cep_weather.middlewares.timing import TimingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Cycle de vie: journalise le démarrage, ferme le client HTTP et vide les spans à l'arrêt."""
    log = structlog.get_logger(__name__)
    log.info(
        "service_started",
        postal_backend=container.postal_lookup.name,
        weather_backend=container.weather_lookup.name,
    )
    yield
    await container.aclose()
    provider = getattr(app.state, "tracer_provider", None)
    if provider is not None:
        # vide le BatchSpanProcessor avant l'arrêt
        provider.shutdown()
    log.info("service_stopped")


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog) et le tracing (OTLP si configuré)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares utiles au debug/traçabilité
    - Enregistre les handlers d'erreurs et publie les routes
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)
    tracer_provider = setup_tracing(settings)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG, lifespan=lifespan)
    app.state.tracer_provider = tracer_provider
    app.add_middleware(TimingMiddleware)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(temperature_router)
    app.include_router(metrics_router)
    return app


app = create_app()
