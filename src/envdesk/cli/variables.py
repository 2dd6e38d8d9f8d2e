"""CLI commands that read and edit individual variables."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from envdesk.cli.utils import (
    FILE_HELP,
    PROFILE_HELP,
    ROOT_HELP,
    console,
    fail,
    load_service,
    output_json,
    target_file,
)
from envdesk.core.mutator import EnvMutator
from envdesk.utils.errors import VariableNotFoundError


def list_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    group: Optional[str] = typer.Option(None, "--group", "-g", help="Only show this group"),
    reveal: bool = typer.Option(False, "--reveal", help="Show secret values"),
    format: str = typer.Option("terminal", "--format", help="Output format (terminal, json)"),
) -> None:
    """
    List the variables of an env file.

    Secret values are masked unless --reveal is given.

    Example:
        envdesk list --group database
    """
    service = load_service(root, profile)
    path = target_file(service, file)
    variables = service.variables(path)
    if group:
        variables = [v for v in variables if v.group == group]

    if format == "json":
        output_json(
            [
                {
                    "name": v.name,
                    "value": v.raw_value if reveal else v.display_value,
                    "group": v.group,
                    "secret": v.secret,
                }
                for v in variables
            ]
        )
        return

    table = Table(title=f"{path.name} ({service.active_profile.name})")
    table.add_column("Variable", style="bold")
    table.add_column("Value")
    table.add_column("Group", style="cyan")
    table.add_column("Description", max_width=40)
    for v in variables:
        definition = service.registry.definition_for(v.name)
        value = v.raw_value if reveal else v.display_value
        if v.secret:
            value = f"[yellow]{value}[/yellow]"
        table.add_row(v.name, value, v.group, definition.description if definition else "-")
    console.print(table)

    if not variables:
        console.print("[yellow]No variables found.[/yellow]")


def get_cmd(
    key: str = typer.Argument(..., help="Variable name"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    raw: bool = typer.Option(False, "--raw", help="Print the value exactly as written, quotes included"),
) -> None:
    """Print the value of one variable."""
    service = load_service(root)
    path = target_file(service, file)
    if raw:
        value = service.get_variable(key, path)
    else:
        value = next((v.raw_value for v in service.variables(path) if v.name == key), None)
    if value is None:
        fail(VariableNotFoundError(key, path.name).message)
    # Plain print so the value can be piped
    typer.echo(value)


def set_cmd(
    key: str = typer.Argument(..., help="Variable name"),
    value: str = typer.Argument(..., help="New value"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    quote: bool = typer.Option(False, "--quote", help="Quote the value if it needs quoting"),
    backup: bool = typer.Option(False, "--backup", help="Back up the file first"),
) -> None:
    """
    Set a variable, adding it if it does not exist.

    Example:
        envdesk set APP_DEBUG false
    """
    service = load_service(root)
    path = target_file(service, file)
    if not service.is_editable(path) and service.definition_for_file(path) is not None:
        fail(f"{path.name} is not editable")
    if quote:
        value = EnvMutator.format_value(value)
    exists = service.get_variable(key, path) is not None
    if backup:
        backup_path = service.safe_set(key, value, path)
        if backup_path is None:
            fail(f"Could not back up and set {key}")
        console.print(f"[dim]Backed up to {backup_path.name}[/dim]")
    else:
        ok = service.set_variable(key, value, path) if exists else service.add_variable(key, value, path)
        if not ok:
            fail(f"Could not set {key}")
    name = key if exists else service.last_updated_variable
    console.print(f"[green]{'Updated' if exists else 'Added'}[/green] {name} in {path.name}")


def unset_cmd(
    key: str = typer.Argument(..., help="Variable name"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
) -> None:
    """Remove a variable."""
    service = load_service(root)
    path = target_file(service, file)
    if not service.remove_variable(key, path):
        fail(VariableNotFoundError(key, path.name).message)
    console.print(f"[green]Removed[/green] {key} from {path.name}")


def rename_cmd(
    old: str = typer.Argument(..., help="Current name"),
    new: str = typer.Argument(..., help="New name"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
) -> None:
    """Rename a variable, keeping its value."""
    service = load_service(root)
    path = target_file(service, file)
    if not service.rename_variable(old, new, path):
        fail(f"Could not rename {old}")
    console.print(f"[green]Renamed[/green] {old} to {service.last_updated_variable}")


def _toggle(key: str, root: Optional[Path], file: Optional[Path], comment_out: bool) -> None:
    service = load_service(root)
    path = target_file(service, file)
    if not service.toggle_comment(key, comment_out, path):
        state = "active" if comment_out else "commented-out"
        fail(f"No {state} line for {key}")
    console.print(f"[green]{'Commented out' if comment_out else 'Uncommented'}[/green] {key}")


def comment_cmd(
    key: str = typer.Argument(..., help="Variable name"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
) -> None:
    """Comment out a variable."""
    _toggle(key, root, file, comment_out=True)


def uncomment_cmd(
    key: str = typer.Argument(..., help="Variable name"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
) -> None:
    """Restore a commented-out variable."""
    _toggle(key, root, file, comment_out=False)


def generate_secret_cmd(
    length: Optional[int] = typer.Option(None, "--length", "-l", min=1, help="Number of characters"),
) -> None:
    """Print a random value suitable for a development secret."""
    from envdesk.utils.config import get_config

    mutator = EnvMutator(secret_length=get_config().editor.secret_length)
    typer.echo(mutator.generate_secret_value(length))
