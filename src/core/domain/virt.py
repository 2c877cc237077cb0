"""Formato de cable del daemon de virtualización.

Por qué un módulo aparte:
- El daemon describe una máquina virtual "como si fuera un contenedor"; su
  esquema (vCPU, memoria, disco/CD-ROM, estado de dominio) no es el modelo
  genérico y no debe filtrarse al código llamador.
- Las claves de nivel superior de `VirtContainerInfo` se aceptan en
  cualquiera de las grafías que emite el daemon (`Id`/`id`, `Name`/`name`).
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.models import ContainerConfig


class BootDevice(str, Enum):
    """Dispositivo de arranque declarado en el primer token de `Cmd`."""

    HD = "hd"
    CDROM = "cdrom"


class DomainStatus(IntEnum):
    """Códigos de estado de dominio de libvirt (`virDomainState`)."""

    NOSTATE = 0
    RUNNING = 1
    BLOCKED = 2
    PAUSED = 3
    SHUTDOWN = 4
    SHUTOFF = 5
    CRASHED = 6
    PMSUSPENDED = 7

    @property
    def label(self) -> str:
        return self.name.lower()


class VirtCpuInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cpu_time: int = Field(default=0, alias="cpu_time")
    system_time: int = Field(default=0, alias="system_time")
    user_time: int = Field(default=0, alias="user_time")

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero(cls, value: object) -> object:
        return 0 if value is None else value


class VirtDomInfo(BaseModel):
    """Instantánea del dominio.

    `status` admite códigos fuera de `DomainStatus` y también `null`; ninguno
    de los dos cuenta como "running". Los contadores `null` valen 0.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: int | None = Field(default=DomainStatus.NOSTATE, alias="status")
    used_memory: int = Field(default=0, alias="usedMemory")
    max_memory: int = Field(default=0, alias="maxMemory")
    cpu_time: int = Field(default=0, alias="cpuTime")
    virt_cpu: int = Field(default=0, alias="virtCpu")

    @field_validator("used_memory", "max_memory", "cpu_time", "virt_cpu", mode="before")
    @classmethod
    def _null_is_zero(cls, value: object) -> object:
        return 0 if value is None else value

    @property
    def domain_status(self) -> DomainStatus | None:
        if self.status is None:
            return None
        try:
            return DomainStatus(self.status)
        except ValueError:
            return None

    @property
    def is_running(self) -> bool:
        return self.status == DomainStatus.RUNNING


class VirtContainerConfig(BaseModel):
    """Payload de creación (`POST /containers`)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(default="", alias="name")
    memory: int = Field(default=0, alias="memory", description="Memoria en bytes.")
    vcpu: int = Field(default=0, alias="vcpu")
    disk_source: str = Field(default="", alias="disk_source")
    cdrom_source: str = Field(default="", alias="cdrom_source")
    bridge: str = Field(default="", alias="bridge")
    boot: str = Field(default="", alias="boot", description="'hd' o 'cdrom'.")
    container_config: ContainerConfig | None = Field(default=None, alias="ContainerConfig")


class VirtContainerInfo(BaseModel):
    """Respuesta de inspección (`GET /containers/{id}`)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(
        default="",
        validation_alias=AliasChoices("Id", "id", "ID"),
        serialization_alias="Id",
    )
    name: str = Field(
        default="",
        validation_alias=AliasChoices("Name", "name"),
        serialization_alias="Name",
    )
    cpu_info: VirtCpuInfo | None = Field(
        default=None,
        validation_alias=AliasChoices("CpuInfo", "cpuInfo", "cpuinfo"),
        serialization_alias="CpuInfo",
    )
    dom_info: VirtDomInfo | None = Field(
        default=None,
        validation_alias=AliasChoices("DomInfo", "domInfo", "dominfo"),
        serialization_alias="DomInfo",
    )
    container_config: ContainerConfig | None = Field(
        default=None,
        validation_alias=AliasChoices("ContainerConfig", "containerConfig", "containerconfig"),
        serialization_alias="ContainerConfig",
    )
