"""
Entités du domaine métier.

Ce module définit les modèles de données échangés entre le cas d'usage et les services de lookup
(CEP, météo). Toutes les entités vivent le temps d'une seule requête.
"""

from typing import NewType

from pydantic import BaseModel, ConfigDict

# Chaîne de exactement 8 chiffres ASCII, produite uniquement par le validateur.
PostalCode = NewType("PostalCode", str)


class Address(BaseModel):
    """Adresse résolue à partir d'un CEP; seul `city` est consommé en aval."""

    model_config = ConfigDict(frozen=True)

    city: str
    cep: str = ""
    street: str = ""
    district: str = ""
    state: str = ""


class WeatherReading(BaseModel):
    """Relevé de température courant pour une ville."""

    model_config = ConfigDict(frozen=True)

    city: str
    temp_c: float


class TemperatureResult(BaseModel):
    """Résultat du cas d'usage: ville et température dans les trois unités."""

    model_config = ConfigDict(frozen=True)

    city: str
    celsius: float
    fahrenheit: float
    kelvin: float
