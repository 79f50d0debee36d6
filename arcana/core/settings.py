"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path
from typing import Literal

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
    _ENV_FILE_PATH = _candidate_specific if _candidate_specific.exists() else _cwd / ".env"


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "arcana-reading"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Narration (LLM); désactivée -> lecture finale par gabarit
    OPENAI_API_KEY: str | None = None
    NARRATIVE_ENABLED: bool = False
    NARRATIVE_MODEL: str = "gpt-4o-mini"
    NARRATIVE_MAX_ATTEMPTS: int = 3
    NARRATIVE_BACKOFF_SECONDS: float = 1.0

    # Catalogue de cartes
    CARD_CATALOG_BACKEND: Literal["static", "remote"] = "static"
    TAROT_API_URL: str = "https://tarotapi.dev/api/v1"
    CARD_IMAGE_BASE_URL: str = "https://sacred-texts.com/tarot/pkt/img"
    HTTP_TIMEOUT_SECONDS: float = 5.0


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
