"""Interfaces des services amont consommés par le cas d'usage.

Toute implémentation (client HTTP, backend mémoire, fake de test) respectant ces contrats est
interchangeable. Les implémentations ne font qu'un seul appel sortant par invocation, sans retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cep_weather.domain.entities import Address, PostalCode, WeatherReading


class UpstreamLookupError(RuntimeError):
    """Erreur de base levée par un service de lookup."""


class LookupNotFoundError(UpstreamLookupError):
    """Le service amont indique explicitement que la ressource n'existe pas."""


class LookupTransportError(UpstreamLookupError):
    """Échec réseau, statut non attendu ou corps de réponse invalide."""


class PostalLookup(ABC):
    """Résout un CEP validé en adresse."""

    name: str = "postal"

    @abstractmethod
    async def resolve_address(self, code: PostalCode) -> Address:
        """Retourne l'adresse du CEP.

        Raises:
            LookupNotFoundError: CEP inexistant.
            LookupTransportError: service indisponible ou réponse invalide.
        """
        ...


class WeatherLookup(ABC):
    """Résout un nom de ville en relevé de température courant."""

    name: str = "weather"

    @abstractmethod
    async def resolve_weather(self, city: str) -> WeatherReading:
        """Retourne la température courante de `city` (transmis tel quel).

        Raises:
            LookupNotFoundError: aucune donnée météo pour cette ville.
            LookupTransportError: service indisponible ou réponse invalide.
        """
        ...
