"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Un único valor inmutable que el cliente, el executor y la CLI comparten.

Nota:
- `ClientSettings` es `frozen`: para cambiar algo se crea una copia
  (`model_copy(update=...)`), nunca se muta en sitio.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://api.pipe.run/v1"
DEFAULT_ACCOUNT_FIELD_ID = 427888


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "piperun"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "piperun"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "piperun"
    return Path.home() / ".config" / "piperun"


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


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# piperun user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ClientSettings(BaseSettings):
    """Configuración de conexión con la API PipeRun.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin lógica ad-hoc.
    - El mismo contrato sirve para el SDK y para la CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIPERUN_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    token: str = Field(
        default="",
        description="Token de la cuenta PipeRun (header `Token`).",
    )
    debug: bool = Field(
        default=False,
        description="Adjunta información de diagnóstico (`info`) a cada respuesta.",
    )
    upload: bool = Field(
        default=False,
        description="Modo upload: el body se envía como multipart/form-data sin serializar.",
    )
    decode: bool = Field(
        default=True,
        description="Decodifica el body de la respuesta como JSON.",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="URL base de la API.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    account_custom_field_id: int = Field(
        default=DEFAULT_ACCOUNT_FIELD_ID,
        gt=0,
        description="Custom field de oportunidades que guarda el id de la cuenta.",
    )

    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Nivel de logging para la CLI.",
    )
    log_json: bool = Field(
        default=False,
        description="Logs en JSON en vez de formato consola.",
    )
