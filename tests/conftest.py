"""Pytest fixtures: settings aislados, transporte HTTP simulado y payloads de ejemplo."""

from __future__ import annotations

import copy
import os
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

PROFILE_PAYLOAD: dict[str, Any] = {
    "id": "*UNKNOWN*",
    "source": "*UNKNOWN*",
    "word_count": 1365,
    "word_count_message": "There were 1,365 words in the input. We need a minimum of 3,500 words.",
    "processed_lang": "en",
    "tree": {
        "id": "r",
        "name": "root",
        "children": [
            {
                "id": "personality",
                "name": "Big 5",
                "children": [
                    {
                        "id": "Openness_parent",
                        "name": "Openness",
                        "category": "personality",
                        "percentage": 0.7,
                        "children": [
                            {
                                "id": "Openness",
                                "name": "Openness",
                                "category": "personality",
                                "percentage": 0.77,
                                "sampling_error": 0.05,
                                "raw_score": 0.79,
                                "raw_sampling_error": 0.05,
                                "children": [
                                    {
                                        "id": "Adventurousness",
                                        "name": "Adventurousness",
                                        "category": "personality",
                                        "percentage": 0.83,
                                        "sampling_error": 0.04,
                                    }
                                ],
                            }
                        ],
                    }
                ],
            },
            {
                "id": "needs",
                "name": "Needs",
                "children": [
                    {
                        "id": "Challenge",
                        "name": "Challenge",
                        "category": "needs",
                        "percentage": 0.67,
                        "sampling_error": 0.08,
                    }
                ],
            },
        ],
    },
    "warnings": [
        {"id": "WORD_COUNT_MESSAGE", "message": "Not enough words for a significant estimate."}
    ],
}

CLASSIFIER_PAYLOAD: dict[str, Any] = {
    "classifier_id": "10D41B-nlc-1",
    "url": "https://gateway.watsonplatform.net/natural-language-classifier/api/v1/classifiers/10D41B-nlc-1",
    "name": "weather",
    "language": "en",
    "created": "2016-05-02T18:49:11.000Z",
}


class RecordingTransport:
    """`httpx.MockTransport` que guarda cada petición y responde con `handler`."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def reply(self, status_code: int = 200, **kwargs: Any) -> None:
        self._handler = lambda request: httpx.Response(status_code, **kwargs)

    def fail_with(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        personality_insights_url="https://pi.example.com/personality-insights/api",
        personality_insights_username="pi-user",
        personality_insights_password="pi-pass",
        natural_language_classifier_url="https://nlc.example.com/natural-language-classifier/api",
        natural_language_classifier_username="nlc-user",
        natural_language_classifier_password="nlc-pass",
    )


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def profile_payload() -> dict[str, Any]:
    return copy.deepcopy(PROFILE_PAYLOAD)


@pytest.fixture
def classifier_payload() -> dict[str, Any]:
    return copy.deepcopy(CLASSIFIER_PAYLOAD)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Ni el `.env` del usuario, ni el del cwd, ni variables WATSONKIT_* del shell."""

    for name in list(os.environ):
        if name.upper().startswith("WATSONKIT_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setitem(AppSettings.model_config, "env_file", None)
    monkeypatch.chdir(tmp_path)
