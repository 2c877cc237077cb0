"""Parámetros TLS del cliente.

Solo describe los ficheros y la política de verificación; el `SSLContext`
se construye en el adaptador HTTP.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class TLSConfig(BaseModel):
    ca_cert: Path | None = Field(
        default=None,
        description="CA para verificar el daemon (None = almacén del sistema).",
    )
    client_cert: Path | None = Field(
        default=None,
        description="Certificado de cliente para TLS mutuo.",
    )
    client_key: Path | None = Field(
        default=None,
        description="Clave del certificado de cliente.",
    )
    verify: bool = Field(
        default=True,
        description="Verificar el certificado del daemon.",
    )

    @model_validator(mode="after")
    def _key_requires_cert(self) -> "TLSConfig":
        if self.client_key is not None and self.client_cert is None:
            raise ValueError("client_key requires client_cert")
        return self
