"""Unit tests for the config module."""

import os

import pytest

from envdesk.utils.config import (
    DetectionConfig,
    EditorConfig,
    EnvDeskConfig,
    OutputConfig,
    WatchConfig,
    get_config,
    get_config_paths,
    load_config,
    save_config,
    set_config,
)
from envdesk.utils.errors import ConfigurationError


class TestEditorConfig:
    """Tests for EditorConfig model."""

    def test_default_values(self):
        """Test default values."""
        config = EditorConfig()
        assert config.debounce_ms == 500
        assert config.backup_prefix == ".env.backup."
        assert config.backup_before_organize is True
        assert config.secret_length == 32

    def test_rejects_bad_length(self):
        """Test that a zero secret length is refused."""
        with pytest.raises(ValueError):
            EditorConfig(secret_length=0)


class TestDetectionConfig:
    """Tests for DetectionConfig model."""

    def test_default_values(self):
        """Test default values."""
        config = DetectionConfig()
        assert config.directory_threshold == 4
        assert config.forced_profile is None


class TestWatchConfig:
    """Tests for WatchConfig model."""

    def test_default_values(self):
        """Test default values."""
        config = WatchConfig()
        assert config.pattern == ".env"
        assert config.drain_interval == 0.5


class TestEnvDeskConfig:
    """Tests for EnvDeskConfig model."""

    def test_default_values(self):
        """Test that all defaults are properly set."""
        config = EnvDeskConfig()
        assert isinstance(config.editor, EditorConfig)
        assert isinstance(config.detection, DetectionConfig)
        assert isinstance(config.watch, WatchConfig)
        assert isinstance(config.output, OutputConfig)

    def test_nested_config(self):
        """Test nested configuration."""
        config = EnvDeskConfig(
            editor=EditorConfig(debounce_ms=100),
            output=OutputConfig(color=False),
        )
        assert config.editor.debounce_ms == 100
        assert config.output.color is False


class TestConfigPaths:
    """Tests for config path functions."""

    def test_get_config_paths_includes_expected(self):
        """Test that expected config paths are included."""
        path_strs = [str(p) for p in get_config_paths()]

        assert any(".envdesk.yaml" in p for p in path_strs)
        assert any(".envdesk.yml" in p for p in path_strs)

        home = os.path.expanduser("~")
        assert any(home in p for p in path_strs)

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        """Test that XDG_CONFIG_HOME is honoured."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert tmp_path / "envdesk" / "config.yaml" in get_config_paths()


class TestLoadSaveConfig:
    """Tests for loading and saving configuration."""

    def test_load_config_default(self, tmp_path, monkeypatch):
        """Test loading default config when no file exists."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert load_config() == EnvDeskConfig()

    def test_load_config_from_cwd(self, tmp_path, monkeypatch):
        """Test that a project-local config file is found."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".envdesk.yaml").write_text("editor:\n  debounce_ms: 50\n")
        assert load_config().editor.debounce_ms == 50

    def test_load_config_from_file(self, tmp_path):
        """Test loading config from a specific file."""
        config_path = tmp_path / "test-config.yaml"
        config_path.write_text("""
editor:
  debounce_ms: 250
  secret_length: 48
detection:
  forced_profile: laravel
""")

        config = load_config(config_path)
        assert config.editor.debounce_ms == 250
        assert config.editor.secret_length == 48
        assert config.detection.forced_profile == "laravel"

    def test_load_config_file_not_found(self, tmp_path):
        """Test that loading nonexistent config raises error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "nonexistent.yaml")

    def test_load_config_invalid_yaml(self, tmp_path):
        """Test that invalid YAML raises error."""
        config_path = tmp_path / "invalid.yaml"
        config_path.write_text("invalid: yaml: content: :")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(config_path)

    def test_load_config_not_a_mapping(self, tmp_path):
        """Test that a top-level list is refused."""
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(config_path)

    def test_load_config_invalid_value(self, tmp_path):
        """Test that schema violations are reported as configuration errors."""
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("editor:\n  debounce_ms: -1\n")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(config_path)

    def test_load_config_empty_file(self, tmp_path):
        """Test loading empty config file returns default."""
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")
        assert load_config(config_path) == EnvDeskConfig()

    def test_save_config(self, tmp_path):
        """Test saving configuration to file."""
        config = EnvDeskConfig(editor=EditorConfig(debounce_ms=1800))
        config_path = tmp_path / "saved-config.yaml"

        assert save_config(config, config_path) == config_path
        assert load_config(config_path).editor.debounce_ms == 1800

    def test_save_config_creates_directory(self, tmp_path):
        """Test that save_config creates parent directories."""
        config_path = tmp_path / "subdir" / "nested" / "config.yaml"
        save_config(EnvDeskConfig(), config_path)
        assert config_path.exists()


class TestGlobalConfig:
    """Tests for global config functions."""

    def test_set_and_get_config(self):
        """Test setting and getting global config."""
        set_config(EnvDeskConfig(editor=EditorConfig(debounce_ms=9999)))
        assert get_config().editor.debounce_ms == 9999
