"""Tests pour les chemins de configuration du container.

Ce module teste le choix des backends de lookup (CEP et météo) selon les paramètres, sans recharger
le module: chaque test construit un `Container` isolé à partir de `Settings` explicites.
"""

from __future__ import annotations

import pytest

from cep_weather.core.container import Container
from cep_weather.core.settings import Settings
from cep_weather.infra.http_clients import ViaCepClient, WeatherApiClient
from cep_weather.infra.memory_lookups import InMemoryPostalLookup, InMemoryWeatherLookup


@pytest.mark.asyncio
async def test_container_memory_path() -> None:
    """Backends mémoire: aucun client HTTP utilisé par les lookups."""
    c = Container(Settings(POSTAL_BACKEND="memory", WEATHER_BACKEND="memory", MEMORY_SEED=1))
    try:
        assert isinstance(c.postal_lookup.inner, InMemoryPostalLookup)
        assert isinstance(c.weather_lookup.inner, InMemoryWeatherLookup)
        assert c.postal_lookup.name == "memory"
        assert c.temperature_service.postal is c.postal_lookup
    finally:
        await c.aclose()


@pytest.mark.asyncio
async def test_container_http_path() -> None:
    """Backends HTTP: ViaCEP et WeatherAPI partagent le même client httpx."""
    c = Container(
        Settings(POSTAL_BACKEND="ViaCEP ", WEATHER_BACKEND="weatherapi", WEATHER_API_KEY="k")
    )
    try:
        postal = c.postal_lookup.inner
        weather = c.weather_lookup.inner
        assert isinstance(postal, ViaCepClient)
        assert isinstance(weather, WeatherApiClient)
        assert postal._client is c.http_client
        assert weather._client is c.http_client
    finally:
        await c.aclose()


@pytest.mark.parametrize(
    "overrides",
    [
        {"POSTAL_BACKEND": "correios", "WEATHER_BACKEND": "memory"},
        {"POSTAL_BACKEND": "memory", "WEATHER_BACKEND": "openweather"},
    ],
)
def test_container_unknown_backend_raises(overrides: dict[str, str]) -> None:
    """Backend inconnu: erreur de configuration au câblage."""
    with pytest.raises(ValueError):
        Container(Settings(**overrides))


@pytest.mark.asyncio
async def test_container_aclose_is_idempotent() -> None:
    """Fermer deux fois le client partagé ne lève pas."""
    c = Container(Settings(POSTAL_BACKEND="memory", WEATHER_BACKEND="memory"))
    await c.aclose()
    await c.aclose()
    assert c.http_client.is_closed
