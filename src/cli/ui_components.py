"""Componentes de UI para CLI (Rich).

Tablas y paneles para presentar perfiles y clasificadores, separados de la
lógica de los comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Classification, ClassifierDetails, ClassifierModel, Profile


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("watsonkit", style="bold cyan")
    subtitle = Text("Personality Insights • Natural Language Classifier", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _pct(value: float | None) -> str:
    return "-" if value is None else f"{value * 100:.1f}%"


def build_traits_table(profile: Profile) -> Table:
    """Tabla con cada característica puntuada del perfil (las que tienen percentil)."""

    table = Table(title=f"Personality profile ({profile.word_count} words)")
    table.add_column("Trait", style="cyan", no_wrap=True)
    table.add_column("Category", style="white")
    table.add_column("Percentile", style="green", justify="right")
    table.add_column("Sampling error", style="dim", justify="right")
    table.add_column("Raw score", style="magenta", justify="right")

    for node in profile.tree.iter_traits():
        if node.percentage is None:
            continue
        raw = "-" if node.raw_score is None else f"{node.raw_score:.4f}"
        table.add_row(node.name, node.category or "", _pct(node.percentage), _pct(node.sampling_error), raw)
    return table


def build_classifiers_table(classifiers: Iterable[ClassifierModel]) -> Table:
    table = Table(title="Classifiers")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Language", style="green")
    table.add_column("Created", style="dim")
    for classifier in classifiers:
        table.add_row(classifier.classifier_id, classifier.name or "", classifier.language, classifier.created)
    return table


def build_classifier_panel(details: ClassifierDetails) -> Panel:
    body = Text()
    body.append(f"ID: {details.classifier_id}\n")
    body.append(f"Name: {details.name or '-'}\n")
    body.append(f"Language: {details.language}\n")
    body.append(f"Created: {details.created}\n")
    body.append(f"Status: {details.status}", style="bold")
    if details.status_description:
        body.append(f"\n{details.status_description}", style="dim")
    return Panel(body, title=Text("Classifier", style="bold yellow"), border_style="yellow")


def build_classification_panel(classification: Classification) -> Panel:
    """Panel con la clase ganadora y la confianza de cada clase."""

    body = Text()
    body.append(classification.text.strip() + "\n\n")
    body.append(f"Top class: {classification.top_class}\n", style="bold")
    for item in classification.classes:
        body.append(f"- {item.class_name}: {item.confidence:.3f}\n")
    return Panel(body, title=Text("Classification", style="bold yellow"), border_style="yellow")
