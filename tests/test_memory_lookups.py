"""Tests pour les backends de lookup en mémoire."""

from __future__ import annotations

import pytest

from cep_weather.domain.ports import LookupNotFoundError
from cep_weather.domain.services import TemperatureService
from cep_weather.infra.memory_lookups import (
    DEFAULT_CITY,
    UNKNOWN_POSTAL_CODE,
    InMemoryPostalLookup,
    InMemoryWeatherLookup,
)

MIN_C = 5.0
MAX_C = 35.0
SEED = 42
SAMPLES = 20


@pytest.mark.asyncio
async def test_memory_postal_unknown_code() -> None:
    """Le CEP 00000000 est inconnu."""
    with pytest.raises(LookupNotFoundError):
        await InMemoryPostalLookup().resolve_address(UNKNOWN_POSTAL_CODE)


@pytest.mark.asyncio
async def test_memory_postal_known_code() -> None:
    """Tout autre CEP se résout en Rio de Janeiro."""
    address = await InMemoryPostalLookup().resolve_address("20561250")
    assert address.city == DEFAULT_CITY
    assert address.cep == "20561250"


@pytest.mark.asyncio
async def test_memory_weather_fixed_temperature() -> None:
    """Température fixe quand configurée."""
    reading = await InMemoryWeatherLookup(fixed_temp_c=12.5).resolve_weather("Recife")
    assert reading.temp_c == pytest.approx(12.5)
    assert reading.city == "Recife"


@pytest.mark.asyncio
async def test_memory_weather_random_within_bounds_and_whole_degrees() -> None:
    """Températures aléatoires entières dans [5, 35]."""
    lookup = InMemoryWeatherLookup(seed=SEED)
    for _ in range(SAMPLES):
        reading = await lookup.resolve_weather("Rio")
        assert MIN_C <= reading.temp_c <= MAX_C
        assert reading.temp_c == int(reading.temp_c)


@pytest.mark.asyncio
async def test_memory_weather_is_reproducible_with_seed() -> None:
    """Même graine, même séquence."""
    first = [await InMemoryWeatherLookup(seed=SEED).resolve_weather("Rio") for _ in range(3)]
    second = [await InMemoryWeatherLookup(seed=SEED).resolve_weather("Rio") for _ in range(3)]
    assert first == second


def test_memory_weather_rejects_inverted_bounds() -> None:
    """Bornes inversées refusées à la construction."""
    with pytest.raises(ValueError):
        InMemoryWeatherLookup(min_c=MAX_C, max_c=MIN_C)


@pytest.mark.asyncio
async def test_memory_backends_through_service() -> None:
    """Chaîne complète avec les backends mémoire."""
    service = TemperatureService(InMemoryPostalLookup(), InMemoryWeatherLookup(fixed_temp_c=20.0))
    result = await service.execute("20561250")
    assert result.city == DEFAULT_CITY
    assert result.fahrenheit == pytest.approx(68.0)
    assert result.kelvin == pytest.approx(293.15)
