"""Contratos del cliente de contenedores.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El código llamador puede depender de `ContainerClient` y recibir el cliente
  HTTP real o un doble de test.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from core.domain.models import Container, ContainerConfig, ContainerInfo
from core.domain.virt import VirtCpuInfo, VirtDomInfo


@runtime_checkable
class ContainerClient(Protocol):
    """Operaciones síncronas sobre los contenedores de un daemon."""

    def list_containers(self) -> list[Container]:
        ...

    def inspect_container(self, container_id: str) -> ContainerInfo:
        ...

    def create_container(self, config: ContainerConfig, name: str = "") -> str:
        ...

    def remove_container(self, container_id: str) -> None:
        ...


StatsCallback = Callable[[str, VirtCpuInfo | None, VirtDomInfo | None], None]


@runtime_checkable
class ContainerMonitor(Protocol):
    """Capacidad opcional de monitorización de estadísticas.

    Todavía no la implementa ningún cliente; los llamadores deben comprobarla
    con `isinstance(client, ContainerMonitor)` antes de usarla.
    """

    def start_monitor_stats(self, callback: StatsCallback) -> None:
        ...

    def stop_all_monitor_stats(self) -> None:
        ...
