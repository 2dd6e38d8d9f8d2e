"""Configuration file support for envdesk."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from envdesk.utils.errors import ConfigurationError


class EditorConfig(BaseModel):
    """Settings for interactive edits and file mutations."""

    debounce_ms: int = Field(default=500, ge=0, description="Quiescence window before an edit is committed")
    backup_prefix: str = Field(default=".env.backup.", description="Name prefix of backup files")
    backup_before_organize: bool = Field(default=True, description="Back up a file before reorganizing it")
    secret_length: int = Field(default=32, ge=1, description="Length of generated secret values")


class DetectionConfig(BaseModel):
    """Project type detection settings."""

    directory_threshold: int = Field(
        default=4,
        ge=1,
        description="Number of framework directories needed for a directory-shape match",
    )
    forced_profile: str | None = Field(default=None, description="Skip detection and use this profile")


class WatchConfig(BaseModel):
    """File watching settings."""

    pattern: str = Field(default=".env", description="File name prefix of watched files")
    drain_interval: float = Field(default=0.5, gt=0, description="Seconds between handling queued watch events")


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Verbose output")


class EnvDeskConfig(BaseModel):
    """Main configuration for envdesk."""

    editor: EditorConfig = Field(default_factory=EditorConfig)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = []

    paths.append(Path.cwd() / ".envdesk.yaml")
    paths.append(Path.cwd() / ".envdesk.yml")

    home = Path.home()
    paths.append(home / ".envdesk.yaml")
    paths.append(home / ".config" / "envdesk" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "envdesk" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> EnvDeskConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If an explicit path is missing or a file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return EnvDeskConfig()


def _load_config_file(path: Path) -> EnvDeskConfig:
    """Load configuration from a specific file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file: {e}") from e

    if data is None:
        return EnvDeskConfig()
    if not isinstance(data, dict):
        raise ConfigurationError("Config file must contain a mapping")
    try:
        return EnvDeskConfig.model_validate(data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def save_config(config: EnvDeskConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.config/envdesk/config.yaml

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = Path.home() / ".config" / "envdesk" / "config.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8")

    return config_path


# Global config instance
_config: EnvDeskConfig | None = None


def get_config() -> EnvDeskConfig:
    """Get the global configuration instance, loading it on first call."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: EnvDeskConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
