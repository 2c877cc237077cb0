"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza resolución del endpoint, TLS y timeouts para el daemon.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import ssl

import httpx

from core.config import DEFAULT_TIMEOUT_SECONDS
from core.domain.tls import TLSConfig
from core.errors import InvalidAddressError

_SUPPORTED_SCHEMES = {"tcp", "http", "https"}


def resolve_base_url(address: str, tls_config: TLSConfig | None = None) -> httpx.URL:
    """Convierte la dirección del daemon en una URL base.

    Sin esquema (o con `tcp://`) se usa `http`, salvo que haya configuración
    TLS, en cuyo caso se usa `https`. `http://` y `https://` se respetan.
    """

    raw = address.strip()
    if not raw:
        raise InvalidAddressError("empty daemon address")
    if "://" not in raw:
        raw = f"tcp://{raw}"

    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise InvalidAddressError(f"invalid daemon address {address!r}: {exc}") from exc

    if url.scheme not in _SUPPORTED_SCHEMES:
        raise InvalidAddressError(f"unsupported scheme {url.scheme!r} in {address!r}")
    if not url.host:
        raise InvalidAddressError(f"missing host in daemon address {address!r}")

    if url.scheme == "tcp":
        url = url.copy_with(scheme="https" if tls_config is not None else "http")
    return url


def build_ssl_context(tls_config: TLSConfig) -> ssl.SSLContext:
    """Crea el `SSLContext` a partir de los ficheros configurados."""

    cafile = str(tls_config.ca_cert) if tls_config.ca_cert else None
    context = ssl.create_default_context(cafile=cafile)
    if not tls_config.verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    if tls_config.client_cert is not None:
        context.load_cert_chain(
            certfile=str(tls_config.client_cert),
            keyfile=str(tls_config.client_key) if tls_config.client_key else None,
        )
    return context


def build_client(
    base_url: httpx.URL,
    tls_config: TLSConfig | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Por qué un builder:
    - Centraliza timeout/TLS para que todas las operaciones se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    verify: ssl.SSLContext | bool = True
    if tls_config is not None:
        verify = build_ssl_context(tls_config)

    return httpx.Client(
        base_url=base_url,
        timeout=httpx.Timeout(timeout),
        verify=verify,
        transport=transport,
    )
