"""prefect-tf command-line interface.

Each command loads JSON config/state files, runs one lifecycle pipeline from
`core.services.lifecycle` and writes the resulting state back.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from prefect_tf.adapters.state_store import StateFileError, export_state_json, load_json_object, load_state
from prefect_tf.cli import doctor
from prefect_tf.cli.ui_components import (
    build_diagnostics_table,
    build_schema_table,
    build_state_panel,
    build_types_table,
    print_banner,
)
from prefect_tf.core.config import AppSettings
from prefect_tf.core.logging_setup import setup_logging
from prefect_tf.core.services import lifecycle
from prefect_tf.core.services.lifecycle import Action, LifecycleResult
from prefect_tf.core.services.provider import Provider, UnknownTypeError

app = typer.Typer(no_args_is_help=True, help="Manage Prefect resources declaratively.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    setup_logging(log_level)


def _provider() -> Provider:
    provider = Provider(AppSettings())
    diags = provider.configure()
    if len(diags):
        _console.print(build_diagnostics_table(diags))
    return provider


def _default_state_path(type_name: str) -> Path:
    return Path(f"{type_name}.tfstate.json")


def _report(result: LifecycleResult) -> None:
    if len(result.diagnostics):
        _console.print(build_diagnostics_table(result.diagnostics))
    if not result.ok:
        raise typer.Exit(code=1)


def _load(loader, *args):
    try:
        return loader(*args)
    except StateFileError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2) from exc


@app.command()
def schema(type_name: Optional[str] = typer.Argument(None, help="e.g. prefect_deployment")) -> None:
    """List registered types, or describe the attributes of one."""

    provider = Provider(AppSettings())
    if type_name is None:
        print_banner(_console)
        _console.print(build_types_table(provider.resource_types(), provider.data_source_types()))
        return
    try:
        target = provider.resource(type_name)
    except UnknownTypeError:
        try:
            target = provider.data_source(type_name)
        except UnknownTypeError as exc:
            raise typer.BadParameter(str(exc)) from exc
    _console.print(build_schema_table(type_name, target.schema()))


@app.command()
def apply(
    type_name: str = typer.Argument(..., help="Resource type, e.g. prefect_deployment"),
    config_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON object of attributes"),
    state_path: Optional[Path] = typer.Option(None, "--state", help="State file (read if present, then written)"),
) -> None:
    """Create the resource, or update it to match CONFIG when a state exists."""

    state_path = state_path or _default_state_path(type_name)
    config = _load(load_json_object, config_path)
    prior = _load(load_state, state_path, type_name) if state_path.exists() else None

    provider = _provider()
    try:
        resource = provider.resource(type_name)
        result = lifecycle.apply(resource, config, prior)
    except UnknownTypeError as exc:
        raise typer.BadParameter(str(exc)) from exc
    finally:
        provider.close()

    if result.action is Action.NOOP:
        _console.print("[green]No changes.[/green] Remote object matches the configuration.")
        return
    _report(result)
    assert result.state is not None
    export_state_json(type_name=type_name, state=result.state, output_path=state_path)
    changed = f" ({', '.join(result.changed)})" if result.changed else ""
    _console.print(build_state_panel(type_name, result.state, title=f"{type_name}: {result.action.value}{changed}"))
    _console.print(f"[green]State written to:[/green] {state_path}")


@app.command()
def refresh(
    type_name: str = typer.Argument(...),
    state_path: Path = typer.Argument(..., exists=True, dir_okay=False),
) -> None:
    """Read the remote object and rewrite the state file."""

    state = _load(load_state, state_path, type_name)
    provider = _provider()
    try:
        result = lifecycle.refresh(provider.resource(type_name), state)
    except UnknownTypeError as exc:
        raise typer.BadParameter(str(exc)) from exc
    finally:
        provider.close()

    _report(result)
    assert result.state is not None
    export_state_json(type_name=type_name, state=result.state, output_path=state_path)
    _console.print(build_state_panel(type_name, result.state))


@app.command()
def destroy(
    type_name: str = typer.Argument(...),
    state_path: Path = typer.Argument(..., exists=True, dir_okay=False),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete the remote object and remove the state file."""

    state = _load(load_state, state_path, type_name)
    if not yes:
        typer.confirm(f"Destroy {type_name} {state.get('id') or state.get('name')}?", abort=True)

    provider = _provider()
    try:
        result = lifecycle.destroy(provider.resource(type_name), state)
    except UnknownTypeError as exc:
        raise typer.BadParameter(str(exc)) from exc
    finally:
        provider.close()

    _report(result)
    state_path.unlink(missing_ok=True)
    _console.print(f"[green]Destroyed.[/green] Removed {state_path}")


@app.command(name="import")
def import_(
    type_name: str = typer.Argument(...),
    identifier: str = typer.Argument(..., help="`id` or `id,workspace_id`"),
    out: Optional[Path] = typer.Option(None, "--out", help="State file to write"),
) -> None:
    """Adopt an existing remote object into a new state file."""

    out = out or _default_state_path(type_name)
    provider = _provider()
    try:
        result = lifecycle.import_resource(provider.resource(type_name), identifier)
    except UnknownTypeError as exc:
        raise typer.BadParameter(str(exc)) from exc
    finally:
        provider.close()

    _report(result)
    assert result.state is not None
    export_state_json(type_name=type_name, state=result.state, output_path=out)
    _console.print(build_state_panel(type_name, result.state, title=f"{type_name}: imported"))
    _console.print(f"[green]State written to:[/green] {out}")


@app.command()
def data(
    type_name: str = typer.Argument(..., help="Data source type, e.g. prefect_workspace"),
    config_path: Path = typer.Argument(..., exists=True, dir_okay=False),
) -> None:
    """Read a data source and print the result."""

    config = _load(load_json_object, config_path)
    provider = _provider()
    try:
        result = lifecycle.read_data_source(provider.data_source(type_name), config)
    except UnknownTypeError as exc:
        raise typer.BadParameter(str(exc)) from exc
    finally:
        provider.close()

    _report(result)
    assert result.state is not None
    _console.print(build_state_panel(type_name, result.state))


def run() -> None:
    app()
