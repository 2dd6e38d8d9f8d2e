"""CLI commands that work on whole env files."""

import time
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from envdesk.cli.utils import (
    FILE_HELP,
    PROFILE_HELP,
    ROOT_HELP,
    console,
    fail,
    load_service,
    output_json,
    status_icon,
    target_file,
)
from envdesk.utils.errors import DocumentError


def validate_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    format: str = typer.Option("terminal", "--format", help="Output format (terminal, json)"),
) -> None:
    """
    Check an env file for malformed lines.

    Exits with status 1 when problems are found.

    Example:
        envdesk validate --file .env.production
    """
    service = load_service(root)
    path = target_file(service, file)
    problems = service.validate(path)

    if format == "json":
        output_json({"file": str(path), "valid": not problems, "problems": problems})
    else:
        console.print(
            Panel(
                f"[bold]File:[/bold] {path}\n[bold]Status:[/bold] {status_icon(not problems)}",
                title="Env File Validation",
            )
        )
        for problem in problems:
            console.print(f"  [yellow]{problem}[/yellow]")
        if not problems:
            console.print("[green]No issues found![/green]")

    if problems:
        raise typer.Exit(1)


def sections_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    format: str = typer.Option("terminal", "--format", help="Output format (terminal, json)"),
) -> None:
    """Show the variables under each ``# heading`` of an env file."""
    service = load_service(root)
    path = target_file(service, file)
    sections = service.extract_sections(path)

    if format == "json":
        output_json(sections)
        return

    table = Table(title=f"Sections of {path.name}")
    table.add_column("Section", style="bold")
    table.add_column("Variables")
    for name, keys in sections.items():
        table.add_row(name, ", ".join(keys))
    console.print(table)


def organize_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    by_group: bool = typer.Option(False, "--by-group", help="Group by profile groups instead of existing headings"),
    backup: bool = typer.Option(True, "--backup/--no-backup", help="Back up the file first"),
) -> None:
    """
    Rewrite an env file as one block per section.

    Comments other than section headings are not kept.

    Example:
        envdesk organize --by-group
    """
    service = load_service(root, profile)
    path = target_file(service, file)
    if not service.organize(by_group=by_group, file=path, create_backup=backup):
        fail(f"Could not organize {path.name}")
    console.print(f"[green]Organized[/green] {path.name}")


def sync_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    template: Optional[Path] = typer.Option(None, "--template", "-t", help="Template file (default: the profile's template)"),
) -> None:
    """
    Add variables that the template has and the env file lacks.

    Existing values are never changed.
    """
    service = load_service(root)
    path = target_file(service, file)
    added = service.sync_with_template(template, path)
    if added is None:
        fail("No template to sync from")
    if not added:
        console.print(f"{path.name} already has every template variable")
        return
    console.print(f"[green]Added[/green] {len(added)} variable(s) to {path.name}:")
    for key in added:
        console.print(f"  {key}")


def backup_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
) -> None:
    """Copy an env file to a timestamped backup next to it."""
    service = load_service(root)
    path = target_file(service, file)
    backup_path = service.backup(path)
    if backup_path is None:
        fail(f"Could not back up {path.name}")
    console.print(f"Backup written to {backup_path}")


def restore_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    target: Optional[str] = typer.Option(None, "--target", help="File name to restore (default: the active file)"),
) -> None:
    """Restore the most recent backup."""
    service = load_service(root)
    if not service.restore(target):
        fail("No backup to restore")
    console.print(f"[green]Restored[/green] {target or (service.active_file.name if service.active_file else '.env')}")


def files_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help=PROFILE_HELP),
    format: str = typer.Option("terminal", "--format", help="Output format (terminal, json)"),
) -> None:
    """List the env files the active profile expects."""
    service = load_service(root, profile)
    definitions = service.file_definitions_for_active_profile()
    active = service.active_file.name if service.active_file else None

    rows = [
        {
            "name": d.name,
            "type": d.file_type.value,
            "priority": d.priority,
            "present": service.files.exists(d.name),
            "active": d.name == active,
            "editable": d.is_editable,
            "template": d.is_template,
            "description": d.description,
        }
        for d in definitions
    ]

    if format == "json":
        output_json({"profile": service.active_profile.name, "active": active, "files": rows})
        return

    table = Table(title=f"Env files ({service.active_profile.name})")
    table.add_column("File", style="bold")
    table.add_column("Type")
    table.add_column("Priority", justify="right")
    table.add_column("Present")
    table.add_column("Description", max_width=50)
    for row in rows:
        name = f"{row['name']} [green](active)[/green]" if row["active"] else row["name"]
        present = "[green]yes[/green]" if row["present"] else "[dim]no[/dim]"
        table.add_row(name, row["type"], str(row["priority"]), present, row["description"])
    console.print(table)


def init_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    template: Optional[Path] = typer.Option(None, "--template", "-t", help="Template file (default: the profile's template)"),
    target: str = typer.Option(".env", "--target", help="File to create"),
    empty: bool = typer.Option(False, "--empty", help="Create an empty file instead of copying a template"),
) -> None:
    """
    Create an env file from a template.

    Secret and blank values get freshly generated values. An existing
    file is never overwritten.
    """
    service = load_service(root)
    if service.files.exists(target):
        fail(f"{target} already exists")
    if empty:
        try:
            created = service.mutator.create_empty_file(service.root, target)
        except DocumentError as e:
            fail(e.message)
    else:
        created = service.create_from_template(template, target)
    if created is None:
        fail("No template found; use --template or --empty")
    console.print(f"[green]Created[/green] {created}")


def watch_cmd(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", help="Seconds between handling queued events"
    ),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Stop after this many intervals"),
) -> None:
    """
    Report env files appearing and disappearing until interrupted.

    Events come from a file system observer thread; each one queues a
    rescan that runs here, between intervals.
    """
    service = load_service(root)
    watcher = service.watcher(
        on_event=lambda event: console.print(f"{event.kind.value}: {Path(event.path).name}")
    )
    delay = interval or service.config.watch.drain_interval
    console.print(f"Watching {service.root} for {watcher.pattern}* files (Ctrl+C to stop)")

    watcher.start()
    ticks = 0
    try:
        while count is None or ticks < count:
            time.sleep(delay)
            service.coordinator.drain()
            ticks += 1
    except KeyboardInterrupt:
        console.print("Stopped")
    finally:
        watcher.stop()
        service.coordinator.drain()
