"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) para que los clientes de
servicio (Personality Insights, Natural Language Classifier) y la CLI lean
credenciales y URLs base de la misma forma.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "watsonkit"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "watsonkit"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "watsonkit"
    return Path.home() / ".config" / "watsonkit"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` se ignoran; el resto pisa lo que ya hubiera.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# watsonkit user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="WATSONKIT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="watsonkit/0.1 (+https://local)",
        min_length=1,
        description="User-Agent enviado a los servicios.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )

    personality_insights_url: str = Field(
        default="https://gateway.watsonplatform.net/personality-insights/api",
        min_length=8,
        description="URL base del servicio Personality Insights.",
    )
    personality_insights_username: str | None = Field(
        default=None,
        description="Usuario (Basic auth) para Personality Insights.",
    )
    personality_insights_password: str | None = Field(
        default=None,
        description="Password (Basic auth) para Personality Insights.",
    )

    natural_language_classifier_url: str = Field(
        default="https://gateway.watsonplatform.net/natural-language-classifier/api",
        min_length=8,
        description="URL base del servicio Natural Language Classifier.",
    )
    natural_language_classifier_username: str | None = Field(
        default=None,
        description="Usuario (Basic auth) para Natural Language Classifier.",
    )
    natural_language_classifier_password: str | None = Field(
        default=None,
        description="Password (Basic auth) para Natural Language Classifier.",
    )

    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma por defecto para contenido y clasificadores.",
    )
