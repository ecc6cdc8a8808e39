"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from prefect_tf.adapters.http_client import build_client
from prefect_tf.core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: AppSettings) -> tuple[bool, str]:
    """GET `<api_url>/health` with the configured headers."""

    url = f"{settings.api_url}/health"
    try:
        with build_client(settings) as client:
            response = client.get(url)
        return response.is_success, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Show the effective configuration and check connectivity."""

    settings = AppSettings()

    table = Table(title="prefect-tf Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API URL", "OK", settings.api_url)
    if settings.api_key is not None:
        table.add_row("API key", "OK", "Bearer token configured")
    else:
        table.add_row("API key", "OPTIONAL", "No key set -> unauthenticated (self-hosted only)")
    table.add_row(
        "Account ID",
        "OK" if settings.cloud_account_id else "OPTIONAL",
        str(settings.cloud_account_id or "-"),
    )
    table.add_row(
        "Workspace ID",
        "OK" if settings.cloud_workspace_id else "OPTIONAL",
        str(settings.cloud_workspace_id or "-"),
    )
    if settings.cloud_account_id and not settings.cloud_workspace_id:
        table.add_row("Scope", "WARN", "Account set without a workspace: workspace resources must set workspace_id")

    ok_http, detail_http = _check_http(settings)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="configure")
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()
    api_url = typer.prompt("Prefect API URL", default=settings.api_url, show_default=True).strip()
    api_key = typer.prompt("Prefect API key (blank for none)", default="", hide_input=True, show_default=False).strip()
    account_id = typer.prompt(
        "Default account ID (blank for none)",
        default=str(settings.cloud_account_id or ""),
        show_default=False,
    ).strip()
    workspace_id = typer.prompt(
        "Default workspace ID (blank for none)",
        default=str(settings.cloud_workspace_id or ""),
        show_default=False,
    ).strip()

    if not api_url:
        raise typer.BadParameter("the API URL is required")

    env_path = write_user_env_vars(
        {
            "PREFECT_API_URL": api_url,
            "PREFECT_API_KEY": api_key or None,
            "PREFECT_CLOUD_ACCOUNT_ID": account_id or None,
            "PREFECT_CLOUD_WORKSPACE_ID": workspace_id or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
