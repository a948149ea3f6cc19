"""CLI principal (Typer).

Comandos:
- `profile`: genera un perfil de personalidad (texto, HTML o content items).
- `classifiers ...`: lista/crea/consulta/borra clasificadores y clasifica texto.
- `doctor ...`: diagnóstico de configuración y conectividad.

Los comandos solo parsean input y pintan resultados; el I/O HTTP vive en
`adapters/`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Coroutine, Optional, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_model_json
from adapters.natural_language_classifier import NaturalLanguageClassifier
from adapters.personality_insights import PersonalityInsights
from cli import doctor
from cli.ui_components import (
    build_classification_panel,
    build_classifier_panel,
    build_classifiers_table,
    build_traits_table,
)
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import ContentItem, ProfileOptions
from core.errors import RestError
from core.interfaces.services import ClassifierService, PersonalityAnalyzer

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Watson Personality Insights and Natural Language Classifier client.")
classifiers_app = typer.Typer(no_args_is_help=True, help="Manage and query Natural Language Classifier instances.")
app.add_typer(classifiers_app, name="classifiers")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _build_personality_insights(settings: AppSettings) -> PersonalityAnalyzer:
    return PersonalityInsights(settings=settings)


def _build_classifier(settings: AppSettings) -> ClassifierService:
    return NaturalLanguageClassifier(settings=settings)


def _configure_logging(settings: AppSettings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except RestError as exc:
        _console.print(f"[red]Error:[/red] {exc.message}")
        raise typer.Exit(code=1) from exc


def _load_content_items(path: Path) -> list[ContentItem]:
    """Lee una lista JSON de items, o un objeto `{"contentItems": [...]}`."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Cannot read content items from {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("contentItems")
    if not isinstance(data, list):
        raise typer.BadParameter("Content items file must hold a JSON list or {\"contentItems\": [...]}.")

    try:
        return [ContentItem.model_validate(item) for item in data]
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid content item: {exc}") from exc


@app.callback()
def main() -> None:
    """Configura logging antes de cualquier comando."""

    _configure_logging(AppSettings())


@app.command()
def profile(
    text: Optional[str] = typer.Argument(None, help="Text to analyze."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read the text (or HTML) from a file."),
    html: bool = typer.Option(False, "--html", help="Treat the input as HTML."),
    content_items: Optional[Path] = typer.Option(
        None, "--content-items", help="JSON file with a list of content items."
    ),
    accept_language: Optional[Language] = typer.Option(None, "--accept-language", help="Language of the response."),
    content_language: Optional[Language] = typer.Option(None, "--content-language", help="Language of the input."),
    include_raw: Optional[bool] = typer.Option(
        None, "--include-raw/--no-include-raw", help="Ask for raw scores (sent only when given)."
    ),
    json_output: Optional[Path] = typer.Option(None, "--json-output", help="Write the profile as JSON."),
) -> None:
    """Generate a personality profile."""

    sources = [value for value in (text, file, content_items) if value is not None]
    if len(sources) != 1:
        raise typer.BadParameter("Provide exactly one of TEXT, --file or --content-items.")

    settings = AppSettings()
    service = _build_personality_insights(settings)
    options = ProfileOptions(
        accept_language=accept_language,
        content_language=content_language,
        include_raw=include_raw,
    )

    if content_items is not None:
        items = _load_content_items(content_items)
        result = _run(service.get_profile_from_content_items(items, options))
    else:
        if file is not None:
            try:
                content = file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise typer.BadParameter(f"Cannot read {file}: {exc}") from exc
        else:
            content = text or ""
        if html:
            result = _run(service.get_profile_from_html(content, options))
        else:
            result = _run(service.get_profile_from_text(content, options))

    _console.print(build_traits_table(result))
    if result.word_count_message:
        _console.print(f"[dim]{result.word_count_message}[/dim]")
    for warning in result.warnings:
        _console.print(f"[yellow]Warning ({warning.id}):[/yellow] {warning.message}")

    if json_output is not None:
        path = export_model_json(model=result, output_path=json_output)
        _console.print(f"[green]Saved profile to:[/green] {path}")


@classifiers_app.command("list")
def list_classifiers() -> None:
    """List the classifiers available to the configured credentials."""

    service = _build_classifier(AppSettings())
    classifiers = _run(service.list_classifiers())
    _console.print(build_classifiers_table(classifiers))


@classifiers_app.command("show")
def show_classifier(classifier_id: str = typer.Argument(..., help="Classifier ID.")) -> None:
    """Show a classifier and its training status."""

    service = _build_classifier(AppSettings())
    details = _run(service.get_classifier(classifier_id))
    _console.print(build_classifier_panel(details))


@classifiers_app.command("classify")
def classify(
    classifier_id: str = typer.Argument(..., help="Classifier ID."),
    text: str = typer.Argument(..., help="Text to classify."),
    json_output: Optional[Path] = typer.Option(None, "--json-output", help="Write the classification as JSON."),
) -> None:
    """Classify a phrase with a trained classifier."""

    service = _build_classifier(AppSettings())
    classification = _run(service.classify(classifier_id, text))
    _console.print(build_classification_panel(classification))

    if json_output is not None:
        path = export_model_json(model=classification, output_path=json_output)
        _console.print(f"[green]Saved classification to:[/green] {path}")


@classifiers_app.command("delete")
def delete_classifier(
    classifier_id: str = typer.Argument(..., help="Classifier ID."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete a classifier."""

    if not yes:
        typer.confirm(f"Delete classifier {classifier_id}?", abort=True)

    service = _build_classifier(AppSettings())
    _run(service.delete_classifier(classifier_id))
    _console.print(f"[green]Deleted classifier:[/green] {classifier_id}")


@classifiers_app.command("create")
def create_classifier(
    training_data: Path = typer.Argument(..., help="CSV file with text,class rows."),
    name: Optional[str] = typer.Option(None, "--name", help="Classifier name."),
    language: Optional[Language] = typer.Option(None, "--language", help="Classifier language."),
) -> None:
    """Train a new classifier from a CSV file."""

    try:
        data = training_data.read_bytes()
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {training_data}: {exc}") from exc

    settings = AppSettings()
    service = _build_classifier(settings)
    details = _run(service.create_classifier(data, name=name, language=language or settings.default_language))
    _console.print(build_classifier_panel(details))


def run() -> None:
    app()
