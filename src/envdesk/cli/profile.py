"""CLI command for project profiles."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from envdesk.cli.utils import ROOT_HELP, console, fail, load_service, output_json
from envdesk.utils.errors import ProfileNotFoundError


def profile_cmd(
    name: Optional[str] = typer.Argument(None, help="Show this profile's variables"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    format: str = typer.Option("terminal", "--format", help="Output format (terminal, json)"),
) -> None:
    """
    Show the detected profile, or the variables a profile defines.

    Example:
        envdesk profile laravel
    """
    service = load_service(root)

    if name is None:
        detected = service.active_profile
        profiles = service.catalog.all_profiles()
        if format == "json":
            output_json(
                {
                    "detected": detected.name,
                    "available": [p.name for p in profiles],
                }
            )
            return
        table = Table(title="Profiles")
        table.add_column("Profile", style="bold")
        table.add_column("Description")
        table.add_column("Variables", justify="right")
        for p in profiles:
            label = f"{p.name} [green](detected)[/green]" if p.name == detected.name else p.name
            table.add_row(label, p.description, str(len(p.definitions)))
        console.print(table)
        return

    try:
        chosen = service.catalog.require(name)
    except ProfileNotFoundError as e:
        fail(e.message)

    if format == "json":
        output_json(
            {
                "name": chosen.name,
                "files": [f.model_dump(mode="json") for f in chosen.file_definitions],
                "variables": [d.model_dump(mode="json") for d in chosen.definitions.values()],
            }
        )
        return

    table = Table(title=f"{chosen.name} variables")
    table.add_column("Variable", style="bold")
    table.add_column("Type")
    table.add_column("Group", style="cyan")
    table.add_column("Secret")
    table.add_column("Description", max_width=50)
    for d in sorted(chosen.definitions.values(), key=lambda d: (d.group, d.name)):
        table.add_row(d.name, d.type.value, d.group, "yes" if d.secret else "", d.description)
    console.print(table)
