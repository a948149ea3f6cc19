"""Cliente: Watson Personality Insights v2.

Extrae un perfil de personalidad (Big Five, necesidades, valores) a partir
del texto que genera una persona: blogs, tweets, posts...

Endpoint:
- POST `<service_url>/v2/profile`
  - `text/plain`, `text/html` o `application/json` (`{"contentItems": [...]}`)
  - query opcional `include_raw=true|false`
  - cabeceras opcionales `Accept-Language` / `Content-Language`
"""

from __future__ import annotations

import json
import logging
from typing import Sequence

import httpx

from adapters.http_client import build_async_client
from adapters.rest_request import Method, RestRequest, decode_model
from core.config import AppSettings
from core.domain.models import ContentItem, Profile, ProfileOptions
from core.errors import BadDataError
from core.interfaces.services import PersonalityAnalyzer

logger = logging.getLogger(__name__)


def _encode_utf8(value: str, *, what: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        logger.warning("%s is not valid UTF-8: %s", what, exc)
        raise BadDataError(f"{what} could not be encoded as UTF-8.") from exc


def serialize_content_items(items: Sequence[ContentItem]) -> bytes:
    """Serializa los items como `{"contentItems":[...]}` respetando el orden."""

    if not items:
        logger.warning("Empty content item list")
        raise BadDataError("At least one content item is required.")
    try:
        payload = {"contentItems": [item.to_json() for item in items]}
        text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        logger.warning("Content items are not JSON serializable: %s", exc)
        raise BadDataError("Content items could not be serialized to JSON.") from exc
    return _encode_utf8(text, what="Content items")


class PersonalityInsights(PersonalityAnalyzer):
    """Cliente del servicio Personality Insights.

    Credenciales y URL base salen de los argumentos o, si faltan, de
    `AppSettings` (`WATSONKIT_PERSONALITY_INSIGHTS_*`).
    """

    _profile_path = "/v2/profile"

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        service_url: str | None = None,
        *,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._username = username if username is not None else self._settings.personality_insights_username
        self._password = password if password is not None else self._settings.personality_insights_password
        self._service_url = (service_url or self._settings.personality_insights_url).rstrip("/")
        self._transport = transport

    @property
    def service_url(self) -> str:
        return self._service_url

    async def get_profile_from_text(self, text: str, options: ProfileOptions | None = None) -> Profile:
        """Analiza texto plano."""

        content = _encode_utf8(text, what="Text")
        return await self._get_profile(content, "text/plain", options)

    async def get_profile_from_html(self, html: str, options: ProfileOptions | None = None) -> Profile:
        """Analiza el texto de una página web; el servicio elimina las etiquetas HTML."""

        content = _encode_utf8(html, what="HTML")
        return await self._get_profile(content, "text/html", options)

    async def get_profile_from_content_items(
        self,
        items: Sequence[ContentItem],
        options: ProfileOptions | None = None,
    ) -> Profile:
        """Analiza una lista de `ContentItem`."""

        content = serialize_content_items(items)
        return await self._get_profile(content, "application/json", options)

    def build_profile_request(
        self,
        content: bytes,
        content_type: str,
        options: ProfileOptions | None = None,
    ) -> RestRequest:
        options = options or ProfileOptions()

        query_parameters: list[tuple[str, str]] = []
        if options.include_raw is not None:
            query_parameters.append(("include_raw", "true" if options.include_raw else "false"))

        header_parameters: dict[str, str] = {}
        if options.accept_language is not None:
            header_parameters["Accept-Language"] = options.accept_language.value
        if options.content_language is not None:
            header_parameters["Content-Language"] = options.content_language.value

        return RestRequest(
            method=Method.POST,
            url=self._service_url + self._profile_path,
            accept_type="application/json",
            content_type=content_type,
            query_parameters=tuple(query_parameters),
            header_parameters=header_parameters,
            message_body=content,
            username=self._username,
            password=self._password,
        )

    async def _get_profile(
        self,
        content: bytes,
        content_type: str,
        options: ProfileOptions | None,
    ) -> Profile:
        request = self.build_profile_request(content, content_type, options)

        async with build_async_client(self._settings, transport=self._transport) as client:
            payload = await request.response_json(client)

        profile = decode_model(Profile, payload)
        logger.info("Profile generated (%s words, lang=%s)", profile.word_count, profile.processed_lang)
        return profile
