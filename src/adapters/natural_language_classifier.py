"""Cliente: Watson Natural Language Classifier v1.

Endpoints (`<service_url>/v1/classifiers`):
- GET    /v1/classifiers                 -> {"classifiers": [...]}
- POST   /v1/classifiers                 (multipart: training_metadata + training_data)
- GET    /v1/classifiers/{id}            -> detalle con estado de entrenamiento
- DELETE /v1/classifiers/{id}
- POST   /v1/classifiers/{id}/classify   {"text": "..."}
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client
from adapters.rest_request import Method, RestRequest, decode_model
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import Classification, ClassifierDetails, ClassifierModel
from core.errors import BadDataError, BadResponseError
from core.interfaces.services import ClassifierService

logger = logging.getLogger(__name__)


class NaturalLanguageClassifier(ClassifierService):
    """Cliente del servicio Natural Language Classifier.

    Credenciales y URL base salen de los argumentos o, si faltan, de
    `AppSettings` (`WATSONKIT_NATURAL_LANGUAGE_CLASSIFIER_*`).
    """

    _classifiers_path = "/v1/classifiers"

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
        self._username = (
            username if username is not None else self._settings.natural_language_classifier_username
        )
        self._password = (
            password if password is not None else self._settings.natural_language_classifier_password
        )
        self._service_url = (service_url or self._settings.natural_language_classifier_url).rstrip("/")
        self._transport = transport

    @property
    def service_url(self) -> str:
        return self._service_url

    async def list_classifiers(self) -> list[ClassifierModel]:
        payload = await self._send(self._request(Method.GET, self._classifiers_path))

        raw = payload.get("classifiers", []) if isinstance(payload, dict) else None
        if not isinstance(raw, list):
            logger.warning("GET %s: unexpected classifiers payload", self._classifiers_path)
            raise BadResponseError("Response does not contain a 'classifiers' list.")
        return [decode_model(ClassifierModel, item) for item in raw]

    async def create_classifier(
        self,
        training_data: bytes,
        name: str | None = None,
        language: Language = Language.ENGLISH,
    ) -> ClassifierDetails:
        """Entrena un clasificador nuevo a partir de un CSV (`texto,clase`)."""

        if not training_data:
            logger.warning("Empty training data")
            raise BadDataError("Training data must not be empty.")

        metadata: dict[str, Any] = {"language": language.value}
        if name:
            metadata["name"] = name
        try:
            metadata_json = json.dumps(metadata, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError, UnicodeEncodeError) as exc:
            logger.warning("Training metadata is not serializable: %s", exc)
            raise BadDataError("Training metadata could not be serialized to JSON.") from exc

        files = {
            "training_metadata": ("training_metadata.json", metadata_json, "application/json"),
            "training_data": ("training_data.csv", training_data, "text/csv"),
        }
        request = self._request(Method.POST, self._classifiers_path, files=files)
        details = decode_model(ClassifierDetails, await self._send(request))
        logger.info("Classifier %s created (status=%s)", details.classifier_id, details.status)
        return details

    async def get_classifier(self, classifier_id: str) -> ClassifierDetails:
        path = self._classifier_path(classifier_id)
        return decode_model(ClassifierDetails, await self._send(self._request(Method.GET, path)))

    async def delete_classifier(self, classifier_id: str) -> None:
        path = self._classifier_path(classifier_id)
        await self._send(self._request(Method.DELETE, path))
        logger.info("Classifier %s deleted", classifier_id)

    async def classify(self, classifier_id: str, text: str) -> Classification:
        path = self._classifier_path(classifier_id) + "/classify"
        try:
            body = json.dumps({"text": text}, ensure_ascii=False).encode("utf-8")
        except UnicodeEncodeError as exc:
            logger.warning("Text to classify is not valid UTF-8: %s", exc)
            raise BadDataError("Text could not be encoded as UTF-8.") from exc

        request = self._request(Method.POST, path, content_type="application/json", body=body)
        return decode_model(Classification, await self._send(request))

    def _classifier_path(self, classifier_id: str) -> str:
        if not classifier_id:
            logger.warning("Empty classifier id")
            raise BadDataError("A classifier id is required.")
        return f"{self._classifiers_path}/{quote(classifier_id, safe='')}"

    def _request(
        self,
        method: Method,
        path: str,
        *,
        content_type: str | None = None,
        body: bytes | None = None,
        files: dict[str, Any] | None = None,
    ) -> RestRequest:
        return RestRequest(
            method=method,
            url=self._service_url + path,
            accept_type="application/json",
            content_type=content_type,
            message_body=body,
            files=files,
            username=self._username,
            password=self._password,
        )

    async def _send(self, request: RestRequest) -> Any:
        async with build_async_client(self._settings, transport=self._transport) as client:
            return await request.response_json(client)
