"""Errores de los clientes REST.

Todos los fallos (locales o remotos) llegan al llamador como una subclase de
`RestError`, de modo que hay un único canal de error:

- `BadDataError`: el input no se pudo codificar/serializar (antes de la red).
- `InvalidURLError`: la URL configurada no tiene scheme u host.
- `TransportError`: httpx no pudo completar la petición.
- `HTTPStatusError`: el servicio respondió con un status fuera de 2xx.
- `BadResponseError`: el cuerpo no es JSON o no encaja con el modelo.
"""

from __future__ import annotations


class RestError(Exception):
    """Base de todos los errores de los clientes de servicio."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadDataError(RestError):
    pass


class InvalidURLError(RestError):
    pass


class TransportError(RestError):
    pass


class HTTPStatusError(RestError):
    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class BadResponseError(RestError):
    pass
