"""
Routes de résolution de température à partir d'un CEP.

Ce module expose `/temperature` en deux transports: `GET ?cep=` et `POST {"cep": ...}`. Les deux
délèguent au `TemperatureService`; les erreurs du cas d'usage remontent jusqu'aux handlers de
`cep_weather.api.errors` qui les traduisent en statuts HTTP.
"""

from fastapi import APIRouter, Depends, Request

from cep_weather.api.deps import get_lookup_timeout, get_temperature_service
from cep_weather.api.schemas import CepRequest, ErrorResponse, TemperatureResponse
from cep_weather.app.metrics import record_lookup_outcome
from cep_weather.app.tracing import current_trace_id, request_span
from cep_weather.domain.errors import CoreError
from cep_weather.domain.services import TemperatureService

router = APIRouter(prefix="/temperature", tags=["temperature"])
service_dep = Depends(get_temperature_service)
timeout_dep = Depends(get_lookup_timeout)

_ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


async def _resolve(
    request: Request,
    raw_code: str,
    service: TemperatureService,
    timeout: float | None,
) -> TemperatureResponse:
    with request_span(f"{request.method} /temperature", request.headers):
        request.state.trace_id = current_trace_id()
        try:
            result = await service.execute(raw_code, timeout=timeout)
        except CoreError as err:
            record_lookup_outcome(err)
            raise
    record_lookup_outcome()
    return TemperatureResponse.from_result(result)


@router.get("", response_model=TemperatureResponse, responses=_ERROR_RESPONSES)
async def get_temperature(
    request: Request,
    cep: str = "",
    service: TemperatureService = service_dep,
    timeout: float | None = timeout_dep,
):
    """
    Retourne la température courante de la ville du CEP.

    Paramètres:
    - cep: 8 chiffres, passé en query string.

    Retour: `TemperatureResponse` (city, temp_C, temp_F, temp_K).
    """
    return await _resolve(request, cep, service, timeout)


@router.post("", response_model=TemperatureResponse, responses=_ERROR_RESPONSES)
async def post_temperature(
    request: Request,
    payload: CepRequest,
    service: TemperatureService = service_dep,
    timeout: float | None = timeout_dep,
):
    """Variante POST: le CEP est lu dans le corps JSON `{"cep": "..."}`."""
    return await _resolve(request, payload.cep, service, timeout)
