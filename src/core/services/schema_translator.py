"""Traducción entre el formato de cable del daemon y el modelo genérico.

Por qué funciones puras:
- El daemon describe cada máquina virtual como un contenedor; aquí solo se
  mapean campos, sin red ni efectos secundarios.
- Nunca fallan por un modo de arranque o un código de dominio inesperado:
  eso se deja pasar tal cual.
"""

from __future__ import annotations

from core.domain.models import Container, ContainerConfig, ContainerInfo, State
from core.domain.virt import BootDevice, VirtContainerConfig, VirtContainerInfo

STATUS_RUNNING = "Running"
STATUS_NOT_RUNNING = "Not Running"


def boot_device_of(config: ContainerConfig) -> str:
    """Primer token de `Cmd`, o cadena vacía si no hay comando."""

    if not config.cmd:
        return ""
    return config.cmd[0]


def to_virt_config(config: ContainerConfig, name: str = "") -> VirtContainerConfig:
    """Construye el payload de `POST /containers`.

    Con `hd` o `cdrom` exactamente uno de `disk_source`/`cdrom_source` lleva
    la imagen. Cualquier otro modo deja ambos vacíos.
    """

    host = config.host_config
    boot = boot_device_of(config)

    virt = VirtContainerConfig(
        name=name,
        memory=host.memory,
        vcpu=host.cpu_quota,
        bridge=host.network_mode,
        boot=boot,
        container_config=config,
    )
    if boot == BootDevice.HD.value:
        virt.disk_source = config.image
    elif boot == BootDevice.CDROM.value:
        virt.cdrom_source = config.image
    return virt


def is_running(info: VirtContainerInfo) -> bool:
    # Sin DomInfo cuenta como parado.
    return info.dom_info is not None and info.dom_info.is_running


def domain_state_label(info: VirtContainerInfo) -> str:
    if info.dom_info is None or info.dom_info.domain_status is None:
        return ""
    return info.dom_info.domain_status.label


def to_container_info(info: VirtContainerInfo) -> ContainerInfo:
    image = ""
    if info.container_config is not None:
        image = info.container_config.image

    return ContainerInfo(
        id=info.id,
        name=info.name,
        image=image,
        config=info.container_config,
        state=State(running=is_running(info), status=domain_state_label(info)),
    )


def status_label(running: bool) -> str:
    return STATUS_RUNNING if running else STATUS_NOT_RUNNING


def to_container(info: ContainerInfo) -> Container:
    """Reduce un contenedor inspeccionado a una entrada de listado."""

    command = ""
    if info.config is not None and info.config.cmd:
        command = " ".join(info.config.cmd)

    return Container(
        id=info.id,
        names=[info.name],
        image=info.image,
        command=command,
        status=status_label(info.state.running),
    )
