"""Error types raised by the envdesk engine."""

from __future__ import annotations

import re
from typing import Any

from envdesk.models.common import OperationError

_VALID_KEY = re.compile(r"^[A-Za-z0-9_]+$")


class EnvDeskError(Exception):
    """Base exception for envdesk."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_error_model(self) -> OperationError:
        """Convert to OperationError model."""
        return OperationError(code=self.code, message=self.message, details=self.details)


class DocumentError(EnvDeskError):
    """An env file could not be read or written."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, code="DOCUMENT_ERROR", details=details)


class VariableNotFoundError(EnvDeskError):
    """A variable required by an operation is absent."""

    def __init__(self, key: str, path: str | None = None):
        details: dict[str, Any] = {"key": key}
        if path:
            details["path"] = path
        super().__init__(f"Variable not found: {key}", code="VARIABLE_NOT_FOUND", details=details)


class ValidationError(EnvDeskError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(EnvDeskError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ProfileNotFoundError(EnvDeskError):
    """No profile is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(
            f"Profile not found: {name}",
            code="PROFILE_NOT_FOUND",
            details={"name": name},
        )


def validate_env_var_name(name: str) -> None:
    """Validate an environment variable name.

    Args:
        name: Environment variable name to validate

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        raise ValidationError("Environment variable name cannot be empty", field="name")

    if "=" in name or "#" in name:
        raise ValidationError(
            "Environment variable name cannot contain '=' or '#'",
            field="name",
        )

    if not _VALID_KEY.match(name):
        for char in name:
            if not (char.isalnum() or char == "_"):
                raise ValidationError(
                    f"Environment variable name contains invalid character: {char!r}",
                    field="name",
                )
        raise ValidationError("Environment variable name must be ASCII", field="name")
