"""Excepciones del cliente.

Taxonomía:
- `DaemonConnectionError`: fallo de transporte (red, conexión rechazada, TLS).
- `NotFoundError` / `ImageNotFoundError`: 404 genérico y 404 de imagen.
- `APIError`: cualquier otro status >= 400, con status y cuerpo crudos.
- `ResponseDecodeError`: JSON inválido en cualquiera de los dos sentidos.
"""

from __future__ import annotations


class LibvirtplusError(Exception):
    """Base de todos los errores del cliente.

    También se usa tal cual para un 404 cuyo cuerpo no es reconocible: el
    mensaje es el texto del cuerpo.
    """


class InvalidAddressError(LibvirtplusError, ValueError):
    """La dirección del daemon no se puede interpretar como endpoint."""


class DaemonConnectionError(LibvirtplusError):
    """Error de transporte al hablar con el daemon."""


class NotFoundError(LibvirtplusError):
    """El recurso no existe (404 sin cuerpo)."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class ImageNotFoundError(LibvirtplusError):
    """La imagen referenciada no existe (404 con 'No such image')."""

    def __init__(self, message: str = "Image not found") -> None:
        super().__init__(message)


class APIError(LibvirtplusError):
    """Respuesta HTTP de error (status >= 400, distinto de 404)."""

    def __init__(self, status_code: int, status: str, body: str) -> None:
        super().__init__(f"{status}: {body}")
        self.status_code = status_code
        self.status = status
        self.body = body


class ResponseDecodeError(LibvirtplusError):
    """No se pudo codificar el payload o decodificar la respuesta."""
