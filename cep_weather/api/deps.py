"""Dépendances FastAPI partagées par les routes (service et échéance)."""

from cep_weather.core.container import container
from cep_weather.domain.services import TemperatureService


def get_temperature_service() -> TemperatureService:
    """Retourne le service de température câblé dans le conteneur."""
    return container.temperature_service


def get_lookup_timeout() -> float | None:
    """Échéance globale des appels amont (secondes); <= 0 désactive l'échéance."""
    timeout = container.settings.LOOKUP_TIMEOUT_S
    return timeout if timeout and timeout > 0 else None
