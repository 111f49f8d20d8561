"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, client HTTP partagé, lookups CEP et météo, service
de température) et expose un singleton `container` utilisé par le reste de l'application. Le choix
des backends se fait ici, jamais dans le cas d'usage.
"""

import structlog

from cep_weather.app.tracing import TracedPostalLookup, TracedWeatherLookup
from cep_weather.core.settings import POSTAL_BACKENDS, WEATHER_BACKENDS, Settings, get_settings
from cep_weather.domain.ports import PostalLookup, WeatherLookup
from cep_weather.domain.services import TemperatureService
from cep_weather.infra.http_clients import ViaCepClient, WeatherApiClient, build_async_client
from cep_weather.infra.memory_lookups import InMemoryPostalLookup, InMemoryWeatherLookup

log = structlog.get_logger(__name__)


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.http_client = build_async_client(self.settings)
        self.postal_lookup = TracedPostalLookup(self._build_postal_lookup())
        self.weather_lookup = TracedWeatherLookup(self._build_weather_lookup())
        self.temperature_service = TemperatureService(self.postal_lookup, self.weather_lookup)

    def _build_postal_lookup(self) -> PostalLookup:
        backend = self.settings.POSTAL_BACKEND.strip().lower()
        if backend == "memory":
            return InMemoryPostalLookup()
        if backend == "viacep":
            return ViaCepClient(self.http_client, base_url=self.settings.VIACEP_BASE_URL)
        raise ValueError(f"POSTAL_BACKEND invalide: {backend!r} (attendu: {POSTAL_BACKENDS})")

    def _build_weather_lookup(self) -> WeatherLookup:
        backend = self.settings.WEATHER_BACKEND.strip().lower()
        if backend == "memory":
            return InMemoryWeatherLookup(seed=self.settings.MEMORY_SEED)
        if backend == "weatherapi":
            if not self.settings.WEATHER_API_KEY:
                # Ne journalise jamais la valeur de la clé.
                log.warning("weather_api_key_missing", backend=backend)
            return WeatherApiClient(
                self.http_client,
                api_key=self.settings.WEATHER_API_KEY,
                base_url=self.settings.WEATHERAPI_BASE_URL,
            )
        raise ValueError(f"WEATHER_BACKEND invalide: {backend!r} (attendu: {WEATHER_BACKENDS})")

    async def aclose(self) -> None:
        """Ferme le client HTTP partagé (arrêt gracieux)."""
        await self.http_client.aclose()


container = Container()
