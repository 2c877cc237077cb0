"""Cliente HTTP del daemon libvirtplus.

Pipeline por operación:
- construir la request (siempre `Content-Type: application/json`),
- enviarla por el `httpx.Client` compartido,
- clasificar la respuesta por status code (ver `core.errors`),
- entregar el cuerpo al traductor de esquema.

El handle es de solo lectura tras construirse, así que se puede compartir
entre hilos: `httpx.Client` gestiona el pool de conexiones.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from adapters.http_client import build_client, resolve_base_url
from core.config import DEFAULT_TIMEOUT_SECONDS, AppSettings
from core.domain.models import Container, ContainerConfig, ContainerInfo
from core.domain.tls import TLSConfig
from core.domain.virt import VirtContainerInfo
from core.errors import (
    APIError,
    DaemonConnectionError,
    ImageNotFoundError,
    LibvirtplusError,
    NotFoundError,
    ResponseDecodeError,
)
from core.services.schema_translator import to_container, to_container_info, to_virt_config

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = DEFAULT_TIMEOUT_SECONDS

IMAGE_NOT_FOUND_MARKER = "No such image"
TLS_HINT = "Are you trying to connect to a TLS-enabled daemon without TLS?"

_ID_LIST = TypeAdapter(list[str])
_ID = TypeAdapter(str)


def _container_path(container_id: str) -> str:
    return f"/containers/{quote(container_id, safe='')}"


class LibvirtplusClient:
    """Cliente síncrono para un único endpoint del daemon."""

    def __init__(
        self,
        daemon_url: str,
        tls_config: TLSConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = resolve_base_url(daemon_url, tls_config)
        self._tls_config = tls_config
        self._timeout = timeout
        self._http = build_client(
            self._base_url,
            tls_config,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "LibvirtplusClient":
        settings = settings or AppSettings()
        return cls(
            settings.daemon_url,
            settings.tls_config(),
            settings.http_timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def tls_config(self) -> TLSConfig | None:
        return self._tls_config

    @property
    def timeout(self) -> float:
        return self._timeout

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "LibvirtplusClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------

    def _connection_error(self, exc: httpx.TransportError) -> DaemonConnectionError:
        message = str(exc) or exc.__class__.__name__
        if self._tls_config is None and "connection refused" not in message.lower():
            message = f"{message}. {TLS_HINT}"
        return DaemonConnectionError(message)

    @staticmethod
    def _read_and_close(response: httpx.Response) -> bytes:
        try:
            return response.read()
        finally:
            response.close()

    def _do_stream_request(
        self,
        method: str,
        path: str,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Envía la request y devuelve la respuesta abierta (streaming).

        Solo se devuelve la respuesta si el status es < 400; el llamador
        debe cerrarla. En cualquier error el cuerpo ya está cerrado.
        """

        if method in ("POST", "PUT") and body is None:
            body = b""

        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        request = self._http.build_request(
            method,
            path,
            content=body,
            headers=request_headers,
            params=params,
        )
        logger.debug("%s %s", method, request.url)

        try:
            response = self._http.send(request, stream=True)
        except httpx.TransportError as exc:
            raise self._connection_error(exc) from exc

        if response.status_code == 404:
            try:
                data = self._read_and_close(response)
            except httpx.HTTPError as exc:
                raise NotFoundError() from exc
            if not data:
                raise NotFoundError()
            text = data.decode("utf-8", errors="replace")
            if IMAGE_NOT_FOUND_MARKER in text:
                raise ImageNotFoundError()
            raise LibvirtplusError(text)

        if response.status_code >= 400:
            try:
                data = self._read_and_close(response)
            except httpx.HTTPError as exc:
                raise DaemonConnectionError(f"failed to read error response: {exc}") from exc
            raise APIError(
                status_code=response.status_code,
                status=f"{response.status_code} {response.reason_phrase}".strip(),
                body=data.decode("utf-8", errors="replace"),
            )

        return response

    def _do_request(
        self,
        method: str,
        path: str,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> bytes:
        response = self._do_stream_request(method, path, body, headers, params)
        try:
            return self._read_and_close(response)
        except httpx.TransportError as exc:
            raise self._connection_error(exc) from exc

    # ------------------------------------------------------------------
    # High-level operations
    # ------------------------------------------------------------------

    def ping(self) -> bool:
        """Comprueba que el daemon responde en `GET /containers`."""

        self._do_request("GET", "/containers")
        return True

    def list_containers(self) -> list[Container]:
        """Lista los contenedores inspeccionando cada id.

        Un id que falla al inspeccionarse se registra y se omite; no hace
        fallar el listado completo.
        """

        data = self._do_request("GET", "/containers")
        try:
            ids = _ID_LIST.validate_json(data)
        except ValidationError as exc:
            raise ResponseDecodeError(f"invalid container list: {exc}") from exc
        logger.debug("daemon reported %d container(s)", len(ids))

        containers: list[Container] = []
        for container_id in ids:
            try:
                info = self.inspect_container(container_id)
            except LibvirtplusError as exc:
                logger.warning("Skipping container %s: %s", container_id, exc)
                continue
            containers.append(to_container(info))
        return containers

    def inspect_container(self, container_id: str) -> ContainerInfo:
        data = self._do_request("GET", _container_path(container_id))
        try:
            virt_info = VirtContainerInfo.model_validate_json(data)
        except ValidationError as exc:
            raise ResponseDecodeError(f"invalid container info for {container_id}: {exc}") from exc
        return to_container_info(virt_info)

    def create_container(self, config: ContainerConfig, name: str = "") -> str:
        """Crea el contenedor y devuelve el id asignado por el daemon."""

        virt_config = to_virt_config(config, name)
        try:
            payload = virt_config.model_dump_json(by_alias=True).encode("utf-8")
        except PydanticSerializationError as exc:
            raise ResponseDecodeError(f"cannot encode container config: {exc}") from exc

        params = {"name": name} if name else None
        data = self._do_request("POST", "/containers", payload, params=params)
        try:
            container_id = _ID.validate_json(data)
        except ValidationError as exc:
            raise ResponseDecodeError(f"invalid container id in response: {exc}") from exc
        logger.info("created container %s", container_id)
        return container_id

    def remove_container(self, container_id: str) -> None:
        self._do_request("DELETE", _container_path(container_id))
