"""Main CLI entry point for envdesk."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from envdesk.cli import files, profile, variables

app = typer.Typer(
    name="envdesk",
    help="Inspect and edit project env files without disturbing their layout.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="list")(variables.list_cmd)
app.command(name="get")(variables.get_cmd)
app.command(name="set")(variables.set_cmd)
app.command(name="unset")(variables.unset_cmd)
app.command(name="rename")(variables.rename_cmd)
app.command(name="comment")(variables.comment_cmd)
app.command(name="uncomment")(variables.uncomment_cmd)
app.command(name="generate-secret")(variables.generate_secret_cmd)
app.command(name="validate")(files.validate_cmd)
app.command(name="sections")(files.sections_cmd)
app.command(name="organize")(files.organize_cmd)
app.command(name="sync")(files.sync_cmd)
app.command(name="backup")(files.backup_cmd)
app.command(name="restore")(files.restore_cmd)
app.command(name="files")(files.files_cmd)
app.command(name="init")(files.init_cmd)
app.command(name="watch")(files.watch_cmd)
app.command(name="profile")(profile.profile_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a config file"),
) -> None:
    """
    envdesk: Inspect and edit project env files without disturbing their layout.

    - [bold]list/get/set/unset/rename[/bold]: Work with single variables
    - [bold]validate/sections/organize[/bold]: Check and restructure a file
    - [bold]sync/init[/bold]: Fill env files from a template
    - [bold]files/profile[/bold]: Show what the detected project type expects
    """
    from envdesk.utils.config import load_config, set_config
    from envdesk.utils.errors import ConfigurationError
    from envdesk.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging(level="INFO")

    try:
        set_config(load_config(config))
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the envdesk version."""
    from envdesk import __version__

    console.print(f"envdesk version {__version__}")


if __name__ == "__main__":
    app()
