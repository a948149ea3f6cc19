"""Modelos del dominio (Pydantic v2).

Representan las respuestas JSON de los servicios Watson y los parámetros
estructurados que envían los clientes. Son estructuras de solo lectura: se
pueblan directamente desde el JSON parseado y no conocen HTTP.

Nota:
- `extra="ignore"` en las respuestas: el servicio puede añadir campos nuevos
  sin romper el decodificado.
"""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.language import Language


# ---------------------------------------------------------------------------
# Natural Language Classifier
# ---------------------------------------------------------------------------


class ClassifierModel(BaseModel):
    """Un clasificador soportado por Natural Language Classifier."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    classifier_id: str = Field(
        default="",
        description="Identificador único del clasificador.",
    )
    url: str = Field(
        default="",
        description="Enlace al clasificador.",
    )
    name: str | None = Field(
        default=None,
        description="Nombre asignado por el usuario (si existe).",
    )
    language: str = Field(
        default="",
        description="Idioma del clasificador.",
    )
    created: str = Field(
        default="",
        description="Fecha y hora (UTC) de creación.",
    )

    @field_validator("classifier_id", "url", "language", "created", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        # El servicio envía `null` en campos que aquí son cadenas vacías.
        return "" if value is None else value


class ClassifierDetails(ClassifierModel):
    """Metadata de un clasificador con su estado de entrenamiento."""

    status: str = Field(
        default="",
        description="Estado: Non Existent, Training, Failed, Available, Unavailable.",
    )
    status_description: str | None = Field(
        default=None,
        description="Explicación legible del estado.",
    )

    @field_validator("status", mode="before")
    @classmethod
    def _null_status_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ClassifiedClass(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    class_name: str = ""
    confidence: float = 0.0


class Classification(BaseModel):
    """Resultado de clasificar un texto."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    classifier_id: str = ""
    url: str = ""
    text: str = ""
    top_class: str = ""
    classes: list[ClassifiedClass] = Field(default_factory=list)

    @field_validator("classifier_id", "url", "text", "top_class", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


# ---------------------------------------------------------------------------
# Personality Insights
# ---------------------------------------------------------------------------


class TraitTreeNode(BaseModel):
    """Nodo del árbol de características de un perfil.

    Las hojas llevan el percentil (`percentage`) y, si se pidió
    `include_raw`, la puntuación cruda y su error de muestreo.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    name: str = ""
    category: str | None = None
    percentage: float | None = None
    sampling_error: float | None = None
    raw_score: float | None = None
    raw_sampling_error: float | None = None
    children: list[TraitTreeNode] = Field(default_factory=list)

    def iter_traits(self) -> Iterator[TraitTreeNode]:
        """Recorre el subárbol en profundidad (pre-orden), incluyendo este nodo."""

        yield self
        for child in self.children:
            yield from child.iter_traits()


class ProfileWarning(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    message: str = ""


class Profile(BaseModel):
    """Perfil de personalidad devuelto por `/v2/profile`."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    source: str = ""
    word_count: int = 0
    word_count_message: str | None = None
    processed_lang: str = ""
    tree: TraitTreeNode = Field(default_factory=TraitTreeNode)
    warnings: list[ProfileWarning] = Field(default_factory=list)

    def find_trait(self, trait_id: str) -> TraitTreeNode | None:
        for node in self.tree.iter_traits():
            if node.id == trait_id:
                return node
        return None


class ContentItem(BaseModel):
    """Unidad de contenido a analizar (p.ej. un tweet o un post)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: str = Field(
        ...,
        description="Texto a analizar.",
    )
    id: str | None = Field(
        default=None,
        description="Identificador único del item.",
    )
    userid: str | None = None
    sourceid: str | None = Field(
        default=None,
        description="Origen del contenido (p.ej. 'twitter').",
    )
    created: int | None = Field(
        default=None,
        description="Timestamp de creación (ms desde epoch).",
    )
    updated: int | None = None
    contenttype: str | None = Field(
        default=None,
        description="'text/plain' o 'text/html'.",
    )
    charset: str | None = None
    language: Language | None = None
    parentid: str | None = None
    reply: bool | None = None
    forward: bool | None = None

    def to_json(self) -> dict[str, Any]:
        """Representación JSON del item, sin los campos no informados."""

        return self.model_dump(mode="json", exclude_none=True)


class ProfileOptions(BaseModel):
    """Opciones reconocidas para una petición de perfil.

    - accept_language: idioma de la respuesta (cabecera Accept-Language).
    - content_language: idioma del texto (cabecera Content-Language).
    - include_raw: añade puntuaciones crudas (query `include_raw`).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    accept_language: Language | None = None
    content_language: Language | None = None
    include_raw: bool | None = None
