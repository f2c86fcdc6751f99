"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (Graph/CSV) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.policy import MAX_LIST_SIZE


def get_user_config_dir() -> Path:
    """Directorio donde `banlist-sync setup` guarda las credenciales del tenant.

    Windows: %APPDATA%, macOS: Application Support, resto: XDG_CONFIG_HOME o ~/.config.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "banlist-sync"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "banlist-sync"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "banlist-sync"
    return Path.home() / ".config" / "banlist-sync"


def get_user_env_file() -> Path:
    """`.env` leído por `AppSettings` después del `.env` del proyecto."""

    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    # KEY=VALUE por línea; comillas externas fuera, comentarios y basura ignorados.
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        if key.strip():
            data[key.strip()] = value.strip().strip("\"'")
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Fusiona `values` con el .env de usuario (tenant, client id, secret).

    Las claves con valor `None` no tocan lo ya guardado; el fichero se reescribe
    ordenado por clave para que `doctor` y los diffs sean estables.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# banlist-sync user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="BANLIST_SYNC_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    tenant_id: str | None = Field(
        default=None,
        description="Tenant (directory) id de Entra ID.",
    )
    client_id: str | None = Field(
        default=None,
        description="Application (client) id con permiso Directory.ReadWrite.All.",
    )
    client_secret: str | None = Field(
        default=None,
        description="Client secret para el flujo client-credentials.",
    )
    access_token: str | None = Field(
        default=None,
        description="Bearer token ya emitido; si existe, se omite el flujo OAuth2.",
    )

    graph_base_url: str = Field(
        default="https://graph.microsoft.com/v1.0",
        min_length=8,
        description="Base URL de Microsoft Graph.",
    )
    authority_url: str = Field(
        default="https://login.microsoftonline.com",
        min_length=8,
        description="Authority para emitir tokens OAuth2.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="banlist-sync/0.1",
        min_length=1,
        description="User-Agent para peticiones a Graph.",
    )

    password_column: str = Field(
        default="Password",
        min_length=1,
        description="Columna del CSV que contiene las contraseñas candidatas.",
    )
    max_list_size: int = Field(
        default=MAX_LIST_SIZE,
        ge=1,
        le=MAX_LIST_SIZE,
        description="Capacidad máxima de la lista en el directorio.",
    )
    legacy_untrimmed_length: bool = Field(
        default=False,
        description="Validar la longitud antes de recortar espacios (comportamiento histórico).",
    )
    export_dir: Path = Field(
        default=Path("exports"),
        description="Directorio por defecto para la exportación de auditoría.",
    )

    def has_credentials(self) -> bool:
        if self.access_token:
            return True
        return bool(self.tenant_id and self.client_id and self.client_secret)
