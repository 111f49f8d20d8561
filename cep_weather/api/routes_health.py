"""
Endpoint de santé pour vérifier la disponibilité de l'API.

Expose `/health` pour signaler l'état général de l'application et les backends de lookup câblés.
Aucun appel amont n'est effectué.
"""


from fastapi import APIRouter

from cep_weather.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et indique les backends configurés."""
    return {
        "status": "ok",
        "postal_backend": getattr(container.postal_lookup, "name", "unknown"),
        "weather_backend": getattr(container.weather_lookup, "name", "unknown"),
    }
