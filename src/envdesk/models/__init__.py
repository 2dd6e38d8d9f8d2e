"""Data models for envdesk."""

from envdesk.models.common import OperationError
from envdesk.models.env import (
    EnvLine,
    FileDefinition,
    FileEvent,
    FileEventKind,
    FileType,
    LineKind,
    Variable,
    VariableDefinition,
    VariableType,
)

__all__ = [
    "OperationError",
    "EnvLine",
    "FileDefinition",
    "FileEvent",
    "FileEventKind",
    "FileType",
    "LineKind",
    "Variable",
    "VariableDefinition",
    "VariableType",
]
