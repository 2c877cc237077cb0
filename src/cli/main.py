"""CLI del cliente libvirtplus (Typer + Rich).

Comandos:
- `ps`, `inspect`, `create`, `rm`: operaciones sobre el daemon.
- `doctor`: diagnóstico y configuración (ver `cli.doctor`).
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.libvirtplus_client import LibvirtplusClient
from cli import doctor
from cli.ui_components import build_containers_table, build_inspect_panel
from core.config import AppSettings
from core.domain.models import ContainerConfig, HostConfig
from core.domain.virt import BootDevice
from core.errors import LibvirtplusError

app = typer.Typer(no_args_is_help=True, help="Remote control for a libvirtplus daemon.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
    )


def _settings(ctx: typer.Context) -> AppSettings:
    settings = ctx.obj
    if not isinstance(settings, AppSettings):
        settings = AppSettings()
        ctx.obj = settings
    return settings


def build_client(settings: AppSettings) -> LibvirtplusClient:
    return LibvirtplusClient.from_settings(settings)


def _fail(exc: Exception) -> NoReturn:
    _err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


def _print_json(payload: Any) -> None:
    _console.print_json(data=payload)


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, "--url", "-H", help="Daemon address (host:port or URL)."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    overrides: dict[str, Any] = {}
    if url is not None:
        overrides["daemon_url"] = url
    if timeout is not None:
        overrides["http_timeout_seconds"] = timeout
    if log_level is not None:
        overrides["log_level"] = log_level

    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(settings.log_level)
    ctx.obj = settings


@app.command()
def ps(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """List containers known to the daemon."""

    try:
        with build_client(_settings(ctx)) as client:
            containers = client.list_containers()
    except (LibvirtplusError, OSError) as exc:
        _fail(exc)

    if as_json:
        _print_json([c.model_dump(mode="json", by_alias=True) for c in containers])
        return
    _console.print(build_containers_table(containers))


@app.command()
def inspect(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., help="Container id."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Show details for one container."""

    try:
        with build_client(_settings(ctx)) as client:
            info = client.inspect_container(container_id)
    except (LibvirtplusError, OSError) as exc:
        _fail(exc)

    if as_json:
        _print_json(info.model_dump(mode="json", by_alias=True))
        return
    _console.print(build_inspect_panel(info))


@app.command()
def create(
    ctx: typer.Context,
    image: str = typer.Option(..., "--image", "-i", help="Disk image or ISO path on the daemon host."),
    boot: BootDevice = typer.Option(BootDevice.HD, "--boot", "-b", help="Boot device."),
    name: str = typer.Option("", "--name", "-n", help="Container name."),
    memory: int = typer.Option(1048576, "--memory", "-m", min=0, help="Memory in bytes."),
    vcpu: int = typer.Option(1, "--vcpu", min=1, help="Virtual CPU count."),
    bridge: str = typer.Option("virbr0", "--bridge", help="Bridge/network name."),
) -> None:
    """Create a container and print its id."""

    config = ContainerConfig(
        cmd=[boot.value],
        image=image,
        host_config=HostConfig(memory=memory, cpu_quota=vcpu, network_mode=bridge),
    )
    try:
        with build_client(_settings(ctx)) as client:
            container_id = client.create_container(config, name)
    except (LibvirtplusError, OSError) as exc:
        _fail(exc)
    _console.print(container_id)


@app.command()
def rm(
    ctx: typer.Context,
    container_ids: list[str] = typer.Argument(..., help="Container ids."),
) -> None:
    """Remove one or more containers."""

    try:
        client = build_client(_settings(ctx))
    except (LibvirtplusError, OSError) as exc:
        _fail(exc)

    failed = False
    with client:
        for container_id in container_ids:
            try:
                client.remove_container(container_id)
            except LibvirtplusError as exc:
                _err_console.print(f"[red]Error:[/red] {container_id}: {exc}")
                failed = True
                continue
            _console.print(container_id)
    if failed:
        raise typer.Exit(code=1)


def run() -> None:
    app()
