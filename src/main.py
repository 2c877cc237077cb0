"""Script de ejecución de la CLI `libvirtplus` desde `src/`.

Uso (con `src/` como directorio actual):
- `python -m main ps --json`
- `python -m main --url tcp://192.168.11.51:2376 create -i /var/lib/libvirt/images/centos_65.qcow2 -n centos`
- `python -m main doctor run`

Instalado el paquete, el script de consola `libvirtplus` llama al mismo `run`.
"""

from __future__ import annotations

import sys

# Consolas Windows (cp1252): los paneles Rich necesitan utf-8.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
