"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from pydantic import BaseModel
from rich.console import Console

from envdesk.core.service import EnvFileService
from envdesk.utils.config import get_config

# Shared console instance
console = Console()

ROOT_HELP = "Project root directory"
FILE_HELP = "Env file to work on (default: the active file)"
PROFILE_HELP = "Profile to use instead of detecting one"


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def load_service(root: Path | None, profile: str | None = None) -> EnvFileService:
    """Build the service for a project root and scan its env files.

    Args:
        root: Project root, defaults to the current directory
        profile: Optional profile name overriding detection

    Returns:
        Scanned EnvFileService
    """
    root = (root or Path.cwd()).resolve()
    if not root.is_dir():
        fail(f"Not a directory: {root}")
    config = get_config()
    service = EnvFileService(root, config=config)
    if profile:
        service.registry.set_active_profile(service.catalog.profile_by_name(profile))
    service.rescan()
    return service


def target_file(service: EnvFileService, file: Path | None) -> Path:
    """Resolve --file against the root, falling back to the active file."""
    if file is not None:
        path = service.resolve_path(file)
        if not path.is_file():
            fail(f"File not found: {path}")
        return path
    if service.active_file is None:
        fail("No active env file found; pass --file")
    return service.active_file


def output_json(data: dict[str, Any] | list[Any] | BaseModel) -> None:
    """Print data as JSON.

    Args:
        data: Data to output (dict, list or Pydantic model)
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    console.print_json(json.dumps(data, default=str))


def status_icon(success: bool) -> str:
    """Get a colored status icon.

    Args:
        success: Whether the status is successful

    Returns:
        Formatted status string
    """
    return "[green]OK[/green]" if success else "[red]FAIL[/red]"
