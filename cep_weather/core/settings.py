"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
- Choisir les backends de lookup (CEP et météo) au moment du câblage
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _candidate_default = _cwd / ".env"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    else:
        _ENV_FILE_PATH = _candidate_default

POSTAL_BACKENDS = ("viacep", "memory")
WEATHER_BACKENDS = ("weatherapi", "memory")


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )
    APP_NAME: str = "cep-weather"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Backends: "viacep" | "memory" et "weatherapi" | "memory"
    POSTAL_BACKEND: str = "viacep"
    WEATHER_BACKEND: str = "weatherapi"
    VIACEP_BASE_URL: str = "https://viacep.com.br/ws"
    WEATHERAPI_BASE_URL: str = "https://api.weatherapi.com/v1"
    WEATHER_API_KEY: str | None = None

    # Timeouts (secondes)
    HTTP_CONNECT_TIMEOUT_S: float = 2.0
    HTTP_READ_TIMEOUT_S: float = 5.0
    LOOKUP_TIMEOUT_S: float = 10.0

    # Backend mémoire
    MEMORY_SEED: int | None = None

    OTLP_ENDPOINT: str | None = None


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
