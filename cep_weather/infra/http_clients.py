"""Clients HTTP des services amont (ViaCEP, WeatherAPI).

Objectif du module
------------------
- Encapsuler les appels réseau vers les services tiers derrière les interfaces `PostalLookup` et
  `WeatherLookup`.
- Traduire statuts HTTP, erreurs réseau et corps invalides en `LookupNotFoundError` /
  `LookupTransportError`.
- Propager le contexte de trace W3C sur chaque requête sortante.

Un seul appel sortant par invocation: aucun retry ici.
"""

from __future__ import annotations

import json
from typing import TypeVar

import httpx
import structlog
from opentelemetry import propagate
from pydantic import BaseModel, ValidationError

from cep_weather.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_NOT_FOUND,
    HTTP_OK,
    WEATHERAPI_NO_LOCATION_CODE,
)
from cep_weather.core.settings import Settings
from cep_weather.domain.entities import Address, PostalCode, WeatherReading
from cep_weather.domain.ports import (
    LookupNotFoundError,
    LookupTransportError,
    PostalLookup,
    WeatherLookup,
)

M = TypeVar("M", bound=BaseModel)


def build_async_client(settings: Settings) -> httpx.AsyncClient:
    """Crée le `httpx.AsyncClient` partagé par les clients amont (timeouts/pool)."""
    timeout = httpx.Timeout(
        connect=settings.HTTP_CONNECT_TIMEOUT_S,
        read=settings.HTTP_READ_TIMEOUT_S,
        write=settings.HTTP_READ_TIMEOUT_S,
        pool=settings.HTTP_CONNECT_TIMEOUT_S,
    )
    limits = httpx.Limits(max_keepalive_connections=20, max_connections=50)
    return httpx.AsyncClient(
        timeout=timeout,
        limits=limits,
        headers={"Accept": "application/json", "User-Agent": settings.APP_NAME},
    )


class _JSONUpstream:
    """Socle commun: requête GET unique et décodage JSON validé par Pydantic."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, *, component: str) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")
        self._log = structlog.get_logger(__name__).bind(component=component)

    async def _get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        headers: dict[str, str] = {}
        propagate.inject(headers)
        # l'URL est journalisée sans query string (la clé API y figure)
        self._log.debug("upstream_request", url=url)
        try:
            return await self._client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            self._log.warning("upstream_timeout", url=url, error=type(exc).__name__)
            raise LookupTransportError("timeout") from exc
        except httpx.HTTPError as exc:
            self._log.warning("upstream_request_failed", url=url, error=type(exc).__name__)
            raise LookupTransportError("request failed") from exc

    def _decode(self, response: httpx.Response, model: type[M]) -> M:
        try:
            return model.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as exc:
            self._log.warning("upstream_invalid_body", status=response.status_code)
            raise LookupTransportError("invalid json") from exc


class ViaCepPayload(BaseModel):
    """Réponse de `GET /ws/{cep}/json/` (champs utiles seulement)."""

    cep: str = ""
    localidade: str = ""
    logradouro: str = ""
    bairro: str = ""
    uf: str = ""
    erro: bool = False


class ViaCepClient(_JSONUpstream, PostalLookup):
    """Lookup CEP via l'API publique ViaCEP.

    ViaCEP répond 200 avec `{"erro": true}` pour un CEP bien formé mais inexistant.
    """

    name = "viacep"

    def __init__(
        self, client: httpx.AsyncClient, base_url: str = "https://viacep.com.br/ws"
    ) -> None:
        super().__init__(client, base_url, component="viacep_client")

    async def resolve_address(self, code: PostalCode) -> Address:
        """Retourne l'adresse du CEP ou lève une erreur de lookup."""
        cep = code.replace("-", "")
        response = await self._get(f"{self.base_url}/{cep}/json/")
        if response.status_code == HTTP_NOT_FOUND:
            raise LookupNotFoundError(f"cep {cep} not found")
        if response.status_code != HTTP_OK:
            self._log.warning("viacep_unexpected_status", status=response.status_code)
            raise LookupTransportError(f"HTTP {response.status_code}")

        payload = self._decode(response, ViaCepPayload)
        if payload.erro or not payload.cep:
            raise LookupNotFoundError(f"cep {cep} not found")
        if not payload.localidade:
            raise LookupTransportError("missing localidade")
        return Address(
            city=payload.localidade,
            cep=payload.cep.replace("-", ""),
            street=payload.logradouro,
            district=payload.bairro,
            state=payload.uf,
        )


class _WeatherApiLocation(BaseModel):
    name: str


class _WeatherApiCurrent(BaseModel):
    temp_c: float


class WeatherApiPayload(BaseModel):
    """Réponse de `GET /v1/current.json`."""

    location: _WeatherApiLocation
    current: _WeatherApiCurrent


class _WeatherApiErrorDetail(BaseModel):
    code: int
    message: str = ""


class WeatherApiErrorPayload(BaseModel):
    error: _WeatherApiErrorDetail


class WeatherApiClient(_JSONUpstream, WeatherLookup):
    """Lookup météo via weatherapi.com (température courante)."""

    name = "weatherapi"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str | None,
        base_url: str = "https://api.weatherapi.com/v1",
    ) -> None:
        super().__init__(client, base_url, component="weatherapi_client")
        self._api_key = api_key or ""

    async def resolve_weather(self, city: str) -> WeatherReading:
        """Retourne la température courante de `city` ou lève une erreur de lookup."""
        params = {"key": self._api_key, "q": city, "aqi": "no"}
        response = await self._get(f"{self.base_url}/current.json", params=params)
        if response.status_code == HTTP_BAD_REQUEST:
            error = self._decode(response, WeatherApiErrorPayload).error
            if error.code == WEATHERAPI_NO_LOCATION_CODE:
                raise LookupNotFoundError(f"no weather for {city!r}")
            self._log.warning("weatherapi_error", code=error.code, message=error.message)
            raise LookupTransportError(f"weatherapi error {error.code}")
        if response.status_code != HTTP_OK:
            self._log.warning("weatherapi_unexpected_status", status=response.status_code)
            raise LookupTransportError(f"HTTP {response.status_code}")

        payload = self._decode(response, WeatherApiPayload)
        return WeatherReading(city=payload.location.name, temp_c=payload.current.temp_c)
