"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_SERVICES: dict[str, str] = {
    "personality-insights": "PERSONALITY_INSIGHTS",
    "natural-language-classifier": "NATURAL_LANGUAGE_CLASSIFIER",
}


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip connectivity checks."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="watsonkit Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    missing = False
    for service, prefix in _SERVICES.items():
        field = prefix.lower()
        url = getattr(settings, f"{field}_url")
        username = getattr(settings, f"{field}_username")
        password = getattr(settings, f"{field}_password")

        if username and password:
            table.add_row(f"{service} credentials", "OK", f"user {username}")
        else:
            missing = True
            table.add_row(f"{service} credentials", "MISSING", f"Set WATSONKIT_{prefix}_USERNAME/PASSWORD")

        if offline:
            table.add_row(f"{service} endpoint", "SKIPPED", url)
        else:
            ok_http, detail_http = asyncio.run(_check_http(url, settings))
            table.add_row(f"{service} endpoint", "OK" if ok_http else "FAIL", f"{url} ({detail_http})")

    _console.print(table)

    if missing:
        _console.print(
            "\n[yellow]Note:[/yellow] Run `watsonkit doctor setup-credentials` to store service credentials."
        )


@app.command(name="setup-credentials")
def setup_credentials() -> None:
    """Interactive credentials setup (stores config in the user config .env)."""

    service = typer.prompt(
        "Service (" + ", ".join(_SERVICES) + ")",
        default="personality-insights",
        show_default=True,
    ).strip().lower()

    prefix = _SERVICES.get(service)
    if prefix is None:
        raise typer.BadParameter(f"Unknown service: {service}")

    settings = AppSettings()
    default_url = getattr(settings, f"{prefix.lower()}_url")

    url = typer.prompt("Service URL", default=default_url, show_default=True).strip()
    username = typer.prompt("Username").strip()
    password = typer.prompt("Password", hide_input=True, confirmation_prompt=False).strip()

    if not url or not username or not password:
        raise typer.BadParameter("url, username and password are required")

    env_path = write_user_env_vars(
        {
            f"WATSONKIT_{prefix}_URL": url,
            f"WATSONKIT_{prefix}_USERNAME": username,
            f"WATSONKIT_{prefix}_PASSWORD": password,
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
