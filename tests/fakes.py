"""
Fakes pour les tests unitaires.

Ce module fournit des implémentations factices des interfaces `PostalLookup` et `WeatherLookup`
avec comportement déterministe, enregistrement des appels et possibilité de bloquer un appel
(pour les tests d'annulation et d'échéance).
"""

from __future__ import annotations

import asyncio

from cep_weather.domain.entities import Address, PostalCode, WeatherReading
from cep_weather.domain.ports import PostalLookup, WeatherLookup


class FakePostalLookup(PostalLookup):
    """Lookup CEP factice: table CEP -> ville, ou erreur imposée."""

    name = "fake-postal"

    def __init__(
        self,
        cities: dict[str, str] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.cities = cities or {}
        self.error = error
        self.calls: list[str] = []

    async def resolve_address(self, code: PostalCode) -> Address:
        """Retourne l'adresse connue ou lève l'erreur configurée."""
        self.calls.append(code)
        if self.error is not None:
            raise self.error
        return Address(city=self.cities[code], cep=code)


class FakeWeatherLookup(WeatherLookup):
    """Lookup météo factice: température fixe, erreur imposée, ou attente bloquante."""

    name = "fake-weather"

    def __init__(
        self,
        temp_c: float = 10.0,
        error: BaseException | None = None,
        block: bool = False,
    ) -> None:
        self.temp_c = temp_c
        self.error = error
        self.block = block
        self.calls: list[str] = []
        self.started = asyncio.Event()

    async def resolve_weather(self, city: str) -> WeatherReading:
        """Retourne un relevé constant pour `city` (ou bloque si `block`)."""
        self.calls.append(city)
        self.started.set()
        if self.block:
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        return WeatherReading(city=city, temp_c=self.temp_c)
