"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Container, ContainerInfo
from core.services.schema_translator import STATUS_RUNNING, status_label


def build_containers_table(containers: Iterable[Container]) -> Table:
    """Tabla Rich para el listado de contenedores."""

    table = Table(title="Containers")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Image", style="magenta")
    table.add_column("Status")

    for container in containers:
        status_style = "green" if container.status == STATUS_RUNNING else "red"
        table.add_row(
            container.id,
            ", ".join(container.names),
            container.image,
            Text(container.status, style=status_style),
        )
    return table


def build_inspect_panel(info: ContainerInfo) -> Panel:
    """Panel para presentar el resultado de `inspect`."""

    title = Text(info.name or info.id, style="bold cyan")
    body = Text()
    body.append("ID: ", style="bold")
    body.append(f"{info.id}\n")
    body.append("Image: ", style="bold")
    body.append(f"{info.image or '-'}\n")

    status = status_label(info.state.running)
    body.append("Status: ", style="bold")
    body.append(status + "\n", style="green" if info.state.running else "red")
    if info.state.status:
        body.append("Domain: ", style="bold")
        body.append(f"{info.state.status}\n")

    if info.config is not None:
        host = info.config.host_config
        if info.config.cmd:
            body.append("Boot: ", style="bold")
            body.append(f"{info.config.cmd[0]}\n")
        body.append("Memory: ", style="bold")
        body.append(f"{host.memory}\n")
        body.append("vCPU: ", style="bold")
        body.append(f"{host.cpu_quota}\n")
        if host.network_mode:
            body.append("Bridge: ", style="bold")
            body.append(f"{host.network_mode}\n")

    return Panel(body, title=title, border_style="cyan")
