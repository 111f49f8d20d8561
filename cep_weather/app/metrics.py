"""
Métriques Prometheus pour l'application.

Ce module définit les métriques Prometheus du service (requêtes HTTP, issues des résolutions de
température) et expose `/metrics` ainsi qu'un middleware de mesure par route.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from cep_weather.domain.errors import CoreError, Stage

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Issue d'une résolution: "ok" ou ErrorKind, et étape atteinte
LOOKUP_OUTCOMES = Counter(
    "temperature_lookups_total",
    "Temperature resolutions by outcome and pipeline stage",
    ["outcome", "stage"],
)


def record_lookup_outcome(error: CoreError | None = None) -> None:
    """Incrémente `LOOKUP_OUTCOMES` pour un succès (error=None) ou une erreur classée."""
    if error is None:
        LOOKUP_OUTCOMES.labels(outcome="ok", stage=Stage.DONE.value).inc()
        return
    LOOKUP_OUTCOMES.labels(outcome=error.kind.value, stage=error.stage.value).inc()


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route pour l'exposition
    Prometheus.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Traite une requête HTTP et collecte les métriques.

        Args:
            request: Requête HTTP entrante.
            call_next: Fonction pour appeler le middleware suivant.

        Returns:
            Response: Réponse HTTP avec métriques collectées.
        """
        start = time.perf_counter()
        response: Response = await call_next(request)
        # gabarit de la route résolue: cardinalité bornée (les URL inconnues -> "unknown")
        route = getattr(request.scope.get("route"), "path", "unknown")
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
