"""Unit tests for the profile catalogues."""

import pytest

from envdesk.models.env import FileType, VariableType
from envdesk.profiles import (
    build_profile,
    define,
    django_profile,
    generic_profile,
    laravel_profile,
    nodejs_profile,
)


class TestProfileModel:
    """Tests for the Profile model helpers."""

    def test_later_definition_wins(self):
        """Test that redefining a name replaces the earlier definition."""
        profile = build_profile(
            name="Test",
            description="",
            variables=[define("A", "first", "one"), define("A", "second", "two")],
            files=[],
            common_files=[],
        )
        assert profile.definition_for("A").description == "second"
        assert profile.all_groups() == {"two"}

    def test_frozen(self):
        """Test that profiles are immutable."""
        profile = generic_profile()
        with pytest.raises(Exception):
            profile.name = "Changed"


class TestLaravelProfile:
    """Tests for the Laravel profile."""

    def test_metadata(self):
        """Test name and capabilities."""
        profile = laravel_profile()
        assert profile.name == "Laravel"
        assert profile.supports_cli_actions is True
        assert profile.supports_template_files is True
        assert profile.common_file_names == (".env", ".env.example", ".env.testing")

    def test_file_definitions(self):
        """Test expected files and their classification."""
        profile = laravel_profile()
        names = [f.name for f in profile.file_definitions]
        assert names == [".env", ".env.example", ".env.testing", ".env.local", ".env.production"]

        example = profile.file_definition(".env.example")
        assert example.is_template is True
        assert example.is_editable is False
        assert example.file_type == FileType.TEMPLATE
        assert profile.file_definition(".env").is_primary

    def test_variable_types(self):
        """Test a sample of typed variables."""
        profile = laravel_profile()
        assert profile.definition_for("APP_DEBUG").type == VariableType.BOOLEAN
        assert profile.definition_for("DB_PORT").type == VariableType.INTEGER
        assert profile.definition_for("DB_CONNECTION").possible_values == ("mysql", "pgsql", "sqlite", "sqlsrv")
        assert profile.definition_for("APP_KEY").secret is True
        assert profile.definition_for("PUSHER_APP_KEY").secret is False
        assert profile.definition_for("VITE_PUSHER_APP_KEY").secret is True


class TestOtherProfiles:
    """Tests for the Node.js, Django and generic profiles."""

    def test_nodejs(self):
        """Test Node.js specifics."""
        profile = nodejs_profile()
        test_file = profile.file_definition(".env.test")
        assert test_file.file_type == FileType.TESTING
        assert test_file.priority == 5
        assert profile.definition_for("JWT_SECRET").secret is True
        assert profile.supports_cli_actions is False

    def test_django(self):
        """Test Django specifics."""
        profile = django_profile()
        assert profile.definition_for("SECRET_KEY").group == "security"
        assert profile.definition_for("DEBUG").possible_values == ("True", "False")
        assert profile.file_definition(".env.py").priority == 6

    def test_generic(self):
        """Test the generic profile."""
        profile = generic_profile()
        assert [f.name for f in profile.file_definitions] == [".env", ".env.local"]
        assert profile.definition_for("DB_PASSWORD").secret is True
        assert profile.is_variable_predefined("PORT")

    def test_same_name_different_metadata(self):
        """Test that profiles describe shared names independently."""
        assert laravel_profile().definition_for("DB_PORT").group == "database"
        assert generic_profile().definition_for("DEBUG").type == VariableType.BOOLEAN
        assert django_profile().definition_for("DEBUG").type == VariableType.DROPDOWN
