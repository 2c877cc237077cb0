"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.libvirtplus_client import LibvirtplusClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import LibvirtplusError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_daemon(settings: AppSettings) -> tuple[bool, str]:
    try:
        with LibvirtplusClient.from_settings(settings) as client:
            client.ping()
            return True, str(client.base_url)
    except (LibvirtplusError, OSError) as exc:
        return False, str(exc)


def _check_file(path: Path | None) -> tuple[str, str]:
    if path is None:
        return "OPTIONAL", "not set"
    if path.is_file():
        return "OK", str(path)
    return "FAIL", f"{path} does not exist"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()

    table = Table(title="libvirtplus Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Daemon URL", "OK", settings.daemon_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    tls = settings.tls_config()
    table.add_row("TLS", "ON" if tls else "OFF", "verify" if tls and tls.verify else "-")
    for label, path in (
        ("TLS CA", settings.tls_ca_cert),
        ("TLS cert", settings.tls_client_cert),
        ("TLS key", settings.tls_client_key),
    ):
        status, detail = _check_file(path)
        table.add_row(label, status, detail)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    # Connectivity
    ok_daemon, detail_daemon = _check_daemon(settings)
    table.add_row("Daemon connectivity", "OK" if ok_daemon else "FAIL", detail_daemon)

    _console.print(table)

    if not ok_daemon:
        _console.print(
            "\n[yellow]Note:[/yellow] Check the address with `--url` or run `libvirtplus doctor setup`."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive daemon setup (stores config in the user config .env)."""

    daemon_url = typer.prompt("Daemon address", default="127.0.0.1:2376", show_default=True).strip()
    use_tls = typer.confirm("Use TLS?", default=False)

    values: dict[str, str | None] = {"LIBVIRTPLUS_DAEMON_URL": daemon_url}
    if use_tls:
        values["LIBVIRTPLUS_TLS_ENABLED"] = "true"
        ca_cert = typer.prompt("CA certificate path (empty to use system store)", default="", show_default=False).strip()
        client_cert = typer.prompt("Client certificate path (empty to skip)", default="", show_default=False).strip()
        client_key = ""
        if client_cert:
            client_key = typer.prompt("Client key path", default="", show_default=False).strip()
        values["LIBVIRTPLUS_TLS_CA_CERT"] = ca_cert or None
        values["LIBVIRTPLUS_TLS_CLIENT_CERT"] = client_cert or None
        values["LIBVIRTPLUS_TLS_CLIENT_KEY"] = client_key or None

    if not daemon_url:
        raise typer.BadParameter("daemon address is required")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved daemon config to:[/green] {env_path}")
