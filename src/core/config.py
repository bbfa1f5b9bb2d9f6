"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que servicios y adaptadores (tokenizer, redirecciones) lean los
  mismos límites de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "osh"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "osh"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "osh"
    return Path.home() / ".config" / "osh"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central del intérprete.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/servicios.
    """

    model_config = SettingsConfigDict(
        env_prefix="OSH_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    prompt: str = Field(
        default="osh>",
        description="Prompt del loop interactivo.",
    )
    max_tokens: int = Field(
        default=39,
        ge=1,
        le=1024,
        description="Tokens máximos por línea (40 slots de argumentos, uno reservado).",
    )
    redirect_file_mode: int = Field(
        default=0o600,
        ge=0,
        le=0o777,
        description="Permisos de los ficheros creados con '>' (solo el propietario).",
    )
    reap_background: bool = Field(
        default=True,
        description="Anunciar procesos en background que ya terminaron.",
    )
    echo_history: bool = Field(
        default=True,
        description="Mostrar la línea recuperada al usar '!!'.",
    )
    show_banner: bool = Field(
        default=True,
        description="Banner al arrancar en modo interactivo (solo TTY).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return level
