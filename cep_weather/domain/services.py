"""Cas d'usage: température courante à partir d'un CEP."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from cep_weather.domain.entities import TemperatureResult
from cep_weather.domain.errors import (
    CodeNotFoundError,
    DeadlineExceededError,
    Stage,
    UpstreamUnavailableError,
)
from cep_weather.domain.ports import (
    LookupNotFoundError,
    LookupTransportError,
    PostalLookup,
    WeatherLookup,
)
from cep_weather.domain.units import Conversion, convert
from cep_weather.domain.validation import validate_postal_code

T = TypeVar("T")


class TemperatureService:
    """Service métier orchestrant la résolution CEP -> ville -> température.

    Responsabilités:
    - Valider le CEP avant tout appel réseau.
    - Appeler le lookup CEP puis, seulement en cas de succès, le lookup météo.
    - Convertir la température et classer chaque échec dans la taxonomie `ErrorKind`.

    Le service ne journalise pas et ne garde aucun état entre deux appels.
    """

    def __init__(
        self,
        postal_lookup: PostalLookup,
        weather_lookup: WeatherLookup,
        converter: Callable[[float], Conversion] = convert,
    ) -> None:
        """Initialise le service avec ses dépendances.

        Paramètres:
        - postal_lookup: résolution CEP -> adresse.
        - weather_lookup: résolution ville -> relevé de température.
        - converter: conversion Celsius -> (C, F, K).
        """
        self.postal = postal_lookup
        self.weather = weather_lookup
        self.converter = converter

    async def execute(self, raw_code: str, *, timeout: float | None = None) -> TemperatureResult:
        """Résout la température courante du CEP `raw_code`.

        Démarche:
        - Valide le CEP (aucun appel amont si invalide).
        - Résout l'adresse, puis la météo de la ville retournée.
        - Convertit et retourne le résultat, estampillé avec la ville issue du CEP.

        Paramètres:
        - raw_code: CEP brut reçu de la frontière HTTP.
        - timeout: échéance globale en secondes pour les appels amont (None = aucune).

        Raises:
            InvalidCodeError: CEP mal formé.
            CodeNotFoundError: CEP inconnu, ou aucune météo pour la ville résolue.
            UpstreamUnavailableError: échec d'un service amont.
            DeadlineExceededError: échéance dépassée pendant un appel amont.
            asyncio.CancelledError: annulation par l'appelant, propagée sans résultat partiel.
        """
        code = validate_postal_code(raw_code)

        stage = Stage.RESOLVING_ADDRESS
        try:
            async with asyncio.timeout(timeout):
                address = await _call(stage, self.postal.resolve_address, code)
                stage = Stage.RESOLVING_WEATHER
                reading = await _call(stage, self.weather.resolve_weather, address.city)
        except TimeoutError as err:
            raise DeadlineExceededError(stage=stage) from err

        celsius, fahrenheit, kelvin = self.converter(reading.temp_c)
        return TemperatureResult(
            city=address.city,
            celsius=celsius,
            fahrenheit=fahrenheit,
            kelvin=kelvin,
        )


async def _call(stage: Stage, fn: Callable[..., Awaitable[T]], *args: Any) -> T:
    try:
        return await fn(*args)
    except LookupNotFoundError as err:
        raise CodeNotFoundError(stage=stage) from err
    except LookupTransportError as err:
        raise UpstreamUnavailableError(stage=stage) from err
    except Exception as err:
        # décodage inattendu, bug d'adaptateur: jamais exposé tel quel
        raise UpstreamUnavailableError(stage=stage) from err
