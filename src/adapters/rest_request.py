"""Constructor genérico de peticiones REST.

`RestRequest` describe una llamada HTTP completa antes de ejecutarla (método,
URL, tipos MIME, query, cabeceras, cuerpo y credenciales). Es inmutable: se
construye, se ejecuta una vez y se descarta.

Reglas:
- Cabeceras: Accept/Content-Type primero, luego las del llamador (ganan en
  conflicto, sin distinguir mayúsculas).
- Query: los parámetros del llamador se añaden, en orden, tras la query que
  ya tuviera la URL.
- Una URL sin scheme u host es un error de configuración: se lanza
  `InvalidURLError` antes de tocar la red.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.errors import BadResponseError, HTTPStatusError, InvalidURLError, TransportError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Method(str, Enum):
    OPTIONS = "OPTIONS"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


@dataclass(frozen=True)
class RestRequest:
    method: Method
    url: str
    accept_type: str | None = None
    content_type: str | None = None
    query_parameters: Sequence[tuple[str, str]] = ()
    header_parameters: Mapping[str, str] | None = None
    message_body: bytes | None = None
    username: str | None = None
    password: str | None = None
    # Partes multipart (formato `files` de httpx); excluyente con message_body.
    files: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        # Copias de solo lectura de los contenedores del llamador.
        object.__setattr__(self, "query_parameters", tuple((name, value) for name, value in self.query_parameters))
        if self.header_parameters is not None:
            object.__setattr__(self, "header_parameters", MappingProxyType(dict(self.header_parameters)))
        if self.files is not None:
            object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def build_url(self) -> httpx.URL:
        try:
            url = httpx.URL(self.url)
        except httpx.InvalidURL as exc:
            logger.warning("Invalid url %r: %s", self.url, exc)
            raise InvalidURLError(f"Cannot execute request. Invalid url {self.url!r}: {exc}") from exc

        if not url.scheme:
            logger.warning("Url %r has no scheme", self.url)
            raise InvalidURLError(
                'Cannot execute request. Please add a scheme to the url (e.g. "https://").'
            )
        if not url.host:
            logger.warning("Url %r has no hostname", self.url)
            raise InvalidURLError(
                'Cannot execute request. Please add a hostname to the url (e.g. "www.ibm.com").'
            )

        if self.query_parameters:
            params = list(url.params.multi_items())
            params.extend((name, value) for name, value in self.query_parameters)
            url = url.copy_with(params=httpx.QueryParams(params))
        return url

    def build_headers(self) -> httpx.Headers:
        headers = httpx.Headers()
        if self.accept_type is not None:
            headers["Accept"] = self.accept_type
        if self.content_type is not None:
            headers["Content-Type"] = self.content_type
        for key, value in (self.header_parameters or {}).items():
            headers[key] = value
        return headers

    def build_auth(self) -> httpx.BasicAuth | None:
        if self.username is None:
            return None
        return httpx.BasicAuth(self.username, self.password or "")

    async def execute(self, client: httpx.AsyncClient) -> httpx.Response:
        """Envía la petición por `client` y devuelve la respuesta sin interpretar."""

        url = self.build_url()
        request = client.build_request(
            self.method.value,
            url,
            headers=self.build_headers(),
            content=self.message_body,
            files=self.files,
        )

        logger.debug("%s %s", self.method.value, url)
        try:
            return await client.send(request, auth=self.build_auth())
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", self.method.value, url, exc)
            raise TransportError(f"Request to {url} failed: {exc}") from exc

    async def response_json(self, client: httpx.AsyncClient) -> Any:
        """Ejecuta la petición y devuelve el cuerpo JSON ya parseado.

        Un cuerpo vacío con status 2xx se interpreta como `{}`.
        """

        response = await self.execute(client)
        if not response.is_success:
            message = _error_message(response)
            logger.warning("%s %s -> %s", self.method.value, response.request.url, message)
            raise HTTPStatusError(message, status_code=response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body", self.method.value, response.request.url)
            raise BadResponseError("Response body could not be parsed as JSON.") from exc


def decode_model(model: type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Response could not be decoded as %s: %s", model.__name__, exc)
        raise BadResponseError(
            f"Response could not be decoded as {model.__name__} ({exc.error_count()} errors)."
        ) from exc


def _error_message(response: httpx.Response) -> str:
    # Watson: {"code": 404, "error": "Not found", "description": "..."}
    reason = response.reason_phrase or "HTTP error"
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        description = payload.get("description")
        if isinstance(error, str) and error:
            reason = error
        if isinstance(description, str) and description:
            reason = f"{reason}: {description}"

    return f"HTTP {response.status_code}: {reason}"
