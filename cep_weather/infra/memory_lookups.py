"""Backends de lookup en mémoire pour le développement local et les démos.

Ce module implémente des services CEP et météo factices, sans réseau. Le CEP `00000000` est
inconnu; tout autre CEP valide se résout en "Rio de Janeiro".
"""

from __future__ import annotations

import random

from cep_weather.domain.entities import Address, PostalCode, WeatherReading
from cep_weather.domain.ports import LookupNotFoundError, PostalLookup, WeatherLookup

UNKNOWN_POSTAL_CODE = "00000000"
DEFAULT_CITY = "Rio de Janeiro"


class InMemoryPostalLookup(PostalLookup):
    """Lookup CEP factice: une seule ville, une liste de CEP inconnus."""

    name = "memory"

    def __init__(
        self,
        city: str = DEFAULT_CITY,
        unknown_codes: frozenset[str] = frozenset({UNKNOWN_POSTAL_CODE}),
    ) -> None:
        self.city = city
        self.unknown_codes = unknown_codes

    async def resolve_address(self, code: PostalCode) -> Address:
        if code in self.unknown_codes:
            raise LookupNotFoundError(f"cep {code} not found")
        return Address(city=self.city, cep=code)


class InMemoryWeatherLookup(WeatherLookup):
    """Lookup météo factice.

    Retourne `fixed_temp_c` si fourni, sinon un entier de degrés tiré dans [min_c, max_c] par un
    générateur initialisé avec `seed` (reproductible quand `seed` est fixé).
    """

    name = "memory"

    def __init__(
        self,
        seed: int | None = None,
        fixed_temp_c: float | None = None,
        min_c: float = 5.0,
        max_c: float = 35.0,
    ) -> None:
        if min_c > max_c:
            raise ValueError("min_c doit être <= max_c")
        self._rng = random.Random(seed)
        self.fixed_temp_c = fixed_temp_c
        self.min_c = min_c
        self.max_c = max_c

    async def resolve_weather(self, city: str) -> WeatherReading:
        if self.fixed_temp_c is not None:
            return WeatherReading(city=city, temp_c=self.fixed_temp_c)
        temp_c = float(round(self._rng.uniform(self.min_c, self.max_c)))
        return WeatherReading(city=city, temp_c=temp_c)
