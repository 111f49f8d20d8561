"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `cep_weather` en ajoutant la racine du projet
au sys.path, force les backends en mémoire avant tout import de l'application et fournit un client
HTTP de test dont le service de température est câblé sur des fakes.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from cep_weather...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Aucun appel réseau réel pendant les tests
os.environ.setdefault("POSTAL_BACKEND", "memory")
os.environ.setdefault("WEATHER_BACKEND", "memory")
os.environ.setdefault("OTLP_ENDPOINT", "")
# Hors debug: les exceptions passent par le handler générique (enveloppe 500)
os.environ["APP_DEBUG"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from cep_weather.api.deps import get_lookup_timeout, get_temperature_service  # noqa: E402
from cep_weather.app.main import app  # noqa: E402
from cep_weather.domain.services import TemperatureService  # noqa: E402
from tests.fakes import FakePostalLookup, FakeWeatherLookup  # noqa: E402

RIO_CEP = "20561250"
RIO_CITY = "Rio de Janeiro"


@pytest.fixture()
def fake_postal() -> FakePostalLookup:
    """Lookup CEP factice connaissant le CEP de Rio."""
    return FakePostalLookup(cities={RIO_CEP: RIO_CITY})


@pytest.fixture()
def fake_weather() -> FakeWeatherLookup:
    """Lookup météo factice à 10 °C."""
    return FakeWeatherLookup(temp_c=10.0)


@pytest.fixture()
def api_client(fake_postal, fake_weather):
    """TestClient dont le service de température utilise les fakes."""
    service = TemperatureService(fake_postal, fake_weather)
    app.dependency_overrides[get_temperature_service] = lambda: service
    app.dependency_overrides[get_lookup_timeout] = lambda: None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
