"""Modelo genérico de contenedor (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar el Core
  a librerías de I/O.
- Las claves JSON son las de la API de Docker (PascalCase); los atributos son
  snake_case y también se aceptan al construir (`populate_by_name`).

Nota:
- Este es el contrato que consume el código llamador. El cliente solo mapea
  campos hacia/desde él, no valida su semántica.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class HostConfig(BaseModel):
    """Límites de recursos del host para un contenedor."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    memory: int = Field(
        default=0,
        ge=0,
        alias="Memory",
        description="Memoria en bytes.",
    )
    memory_swap: int = Field(default=0, alias="MemorySwap")
    cpu_shares: int = Field(default=0, alias="CpuShares")
    cpu_quota: int = Field(
        default=0,
        alias="CpuQuota",
        description="Cuota de CPU; el daemon de virtualización la interpreta como número de vCPUs.",
    )
    cpuset_cpus: str = Field(default="", alias="CpusetCpus")
    network_mode: str = Field(
        default="",
        alias="NetworkMode",
        description="Modo de red; para el daemon es el nombre del bridge.",
    )
    binds: list[str] | None = Field(default=None, alias="Binds")
    privileged: bool = Field(default=False, alias="Privileged")


class ContainerConfig(BaseModel):
    """Configuración genérica de creación.

    Las claves desconocidas se conservan (`extra="allow"`) para que viajen
    intactas dentro del payload del daemon.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    hostname: str = Field(default="", alias="Hostname")
    user: str = Field(default="", alias="User")
    env: list[str] | None = Field(default=None, alias="Env")
    cmd: list[str] | None = Field(
        default=None,
        alias="Cmd",
        description="Comando; el primer token es el modo de arranque (hd/cdrom).",
    )
    entrypoint: list[str] | None = Field(default=None, alias="Entrypoint")
    image: str = Field(
        default="",
        alias="Image",
        description="Referencia de imagen; para el daemon es la ruta del disco o ISO.",
    )
    labels: dict[str, str] | None = Field(default=None, alias="Labels")
    working_dir: str = Field(default="", alias="WorkingDir")
    host_config: HostConfig = Field(default_factory=HostConfig, alias="HostConfig")


class State(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    status: str = Field(
        default="",
        alias="Status",
        description="Estado legible (p.ej. 'running', 'shutoff'); vacío si el daemon no lo informa.",
    )
    running: bool = Field(default=False, alias="Running")
    paused: bool = Field(default=False, alias="Paused")
    restarting: bool = Field(default=False, alias="Restarting")
    pid: int = Field(default=0, alias="Pid")
    exit_code: int = Field(default=0, alias="ExitCode")
    started_at: str = Field(default="", alias="StartedAt")
    finished_at: str = Field(default="", alias="FinishedAt")


class ContainerInfo(BaseModel):
    """Resultado de `inspect`: identidad, configuración y estado."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="Id")
    name: str = Field(default="", alias="Name")
    image: str = Field(default="", alias="Image")
    created: str = Field(default="", alias="Created")
    config: ContainerConfig | None = Field(default=None, alias="Config")
    state: State = Field(default_factory=State, alias="State")


class Container(BaseModel):
    """Entrada de un listado (`ps`)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="Id")
    names: list[str] = Field(default_factory=list, alias="Names")
    image: str = Field(default="", alias="Image")
    command: str = Field(default="", alias="Command")
    created: int = Field(default=0, alias="Created")
    status: str = Field(default="", alias="Status")
    labels: dict[str, Any] | None = Field(default=None, alias="Labels")
