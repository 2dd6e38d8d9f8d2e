"""Utility functions for envdesk."""

from envdesk.utils.hashing import compute_hash, text_fingerprint
from envdesk.utils.logging import configure_logging, get_logger, get_logger_with_context
from envdesk.utils.errors import (
    EnvDeskError,
    DocumentError,
    VariableNotFoundError,
    ValidationError,
    ConfigurationError,
    ProfileNotFoundError,
    validate_env_var_name,
)
from envdesk.utils.config import (
    EnvDeskConfig,
    EditorConfig,
    DetectionConfig,
    WatchConfig,
    OutputConfig,
    load_config,
    save_config,
    get_config,
    set_config,
)

__all__ = [
    # Hashing
    "compute_hash",
    "text_fingerprint",
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "EnvDeskError",
    "DocumentError",
    "VariableNotFoundError",
    "ValidationError",
    "ConfigurationError",
    "ProfileNotFoundError",
    "validate_env_var_name",
    # Config
    "EnvDeskConfig",
    "EditorConfig",
    "DetectionConfig",
    "WatchConfig",
    "OutputConfig",
    "load_config",
    "save_config",
    "get_config",
    "set_config",
]
