"""Contratos de los clientes de servicio Watson.

Reglas de diseño:
- Todas las operaciones son asíncronas porque hacen I/O (HTTP).
- Devuelven modelos del dominio; cualquier fallo se propaga como `RestError`.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.language import Language
from core.domain.models import (
    Classification,
    ClassifierDetails,
    ClassifierModel,
    ContentItem,
    Profile,
    ProfileOptions,
)


@runtime_checkable
class PersonalityAnalyzer(Protocol):
    """Genera perfiles de personalidad a partir de contenido."""

    async def get_profile_from_text(self, text: str, options: ProfileOptions | None = None) -> Profile:
        ...

    async def get_profile_from_html(self, html: str, options: ProfileOptions | None = None) -> Profile:
        ...

    async def get_profile_from_content_items(
        self,
        items: Sequence[ContentItem],
        options: ProfileOptions | None = None,
    ) -> Profile:
        ...


@runtime_checkable
class ClassifierService(Protocol):
    """Gestiona y consulta clasificadores de lenguaje natural."""

    async def list_classifiers(self) -> list[ClassifierModel]:
        ...

    async def create_classifier(
        self,
        training_data: bytes,
        name: str | None = None,
        language: Language = Language.ENGLISH,
    ) -> ClassifierDetails:
        ...

    async def get_classifier(self, classifier_id: str) -> ClassifierDetails:
        ...

    async def delete_classifier(self, classifier_id: str) -> None:
        ...

    async def classify(self, classifier_id: str, text: str) -> Classification:
        ...
