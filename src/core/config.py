"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el adaptador HTTP lea endpoint/TLS/timeout de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.tls import TLSConfig

DEFAULT_TIMEOUT_SECONDS = 30.0


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "libvirtplus-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "libvirtplus-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "libvirtplus-client"
    return Path.home() / ".config" / "libvirtplus-client"


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
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# libvirtplus-client user config (.env)"]
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
        env_prefix="LIBVIRTPLUS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    daemon_url: str = Field(
        default="http://127.0.0.1:2376",
        min_length=1,
        description="Dirección del daemon (host:port, tcp://, http:// o https://).",
    )
    http_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout por request (segundos).",
    )

    tls_enabled: bool = Field(
        default=False,
        description="Forzar TLS aunque no haya certificados configurados.",
    )
    tls_ca_cert: Path | None = Field(
        default=None,
        description="CA para verificar el certificado del daemon.",
    )
    tls_client_cert: Path | None = Field(
        default=None,
        description="Certificado de cliente (TLS mutuo).",
    )
    tls_client_key: Path | None = Field(
        default=None,
        description="Clave privada del certificado de cliente.",
    )
    tls_verify: bool = Field(
        default=True,
        description="Verificar el certificado del daemon.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING, ...).",
    )

    def tls_config(self) -> TLSConfig | None:
        """Devuelve la configuración TLS, o `None` si no se pidió TLS."""

        if not (self.tls_enabled or self.tls_ca_cert or self.tls_client_cert):
            return None
        return TLSConfig(
            ca_cert=self.tls_ca_cert,
            client_cert=self.tls_client_cert,
            client_key=self.tls_client_key,
            verify=self.tls_verify,
        )
