# Schémas Pydantic exposés par l'API (requêtes et réponses).

from pydantic import BaseModel, ConfigDict, Field

from cep_weather.domain.entities import TemperatureResult


class CepRequest(BaseModel):
    """Corps de `POST /temperature`.

    Champs:
    - cep: str (8 chiffres, sans tiret)
    """

    cep: str


class TemperatureResponse(BaseModel):
    """Réponse de succès: ville et température en °C, °F et K.

    Champs (noms JSON):
    - city: str
    - temp_C: float
    - temp_F: float
    - temp_K: float
    """

    model_config = ConfigDict(populate_by_name=True)

    city: str
    celsius: float = Field(alias="temp_C")
    fahrenheit: float = Field(alias="temp_F")
    kelvin: float = Field(alias="temp_K")

    @classmethod
    def from_result(cls, result: TemperatureResult) -> "TemperatureResponse":
        return cls(
            city=result.city,
            celsius=result.celsius,
            fahrenheit=result.fahrenheit,
            kelvin=result.kelvin,
        )


class ErrorResponse(BaseModel):
    """Enveloppe d'erreur standard (documentation OpenAPI)."""

    code: str
    message: str
    trace_id: str | None = None
