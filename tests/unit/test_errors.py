"""Unit tests for the errors module."""

import pytest

from envdesk.models.common import OperationError
from envdesk.utils.errors import (
    ConfigurationError,
    DocumentError,
    EnvDeskError,
    ProfileNotFoundError,
    ValidationError,
    VariableNotFoundError,
    validate_env_var_name,
)


class TestEnvDeskError:
    """Tests for base EnvDeskError."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = EnvDeskError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "UNKNOWN_ERROR"
        assert error.details == {}

    def test_error_with_code_and_details(self):
        """Test error with custom code and details."""
        error = EnvDeskError("Test error", code="TEST_ERROR", details={"key": "value"})
        assert error.code == "TEST_ERROR"
        assert error.details == {"key": "value"}

    def test_to_error_model(self):
        """Test conversion to OperationError model."""
        error = EnvDeskError("Test error", code="TEST_ERROR", details={"key": "value"})
        model = error.to_error_model()

        assert isinstance(model, OperationError)
        assert model.code == "TEST_ERROR"
        assert model.message == "Test error"
        assert model.details == {"key": "value"}
        assert str(model) == "[TEST_ERROR] Test error"


class TestDocumentError:
    """Tests for DocumentError."""

    def test_with_path(self):
        """Test that the path lands in details."""
        error = DocumentError("Cannot read", path="/tmp/.env")
        assert error.code == "DOCUMENT_ERROR"
        assert error.details["path"] == "/tmp/.env"

    def test_without_path(self):
        """Test the bare form."""
        assert DocumentError("Cannot read").details == {}


class TestVariableNotFoundError:
    """Tests for VariableNotFoundError."""

    def test_error_message(self):
        """Test message and details."""
        error = VariableNotFoundError("APP_KEY", path=".env")
        assert "APP_KEY" in str(error)
        assert error.code == "VARIABLE_NOT_FOUND"
        assert error.details == {"key": "APP_KEY", "path": ".env"}


class TestValidationError:
    """Tests for ValidationError."""

    def test_basic_error(self):
        """Test basic validation error."""
        error = ValidationError("Invalid value")
        assert str(error) == "Invalid value"
        assert error.code == "VALIDATION_ERROR"

    def test_error_with_field(self):
        """Test validation error with field."""
        error = ValidationError("Must be positive", field="count")
        assert error.details["field"] == "count"


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_basic_error(self):
        """Test basic configuration error."""
        assert ConfigurationError("Invalid setting").code == "CONFIG_ERROR"

    def test_error_with_config_key(self):
        """Test error with config key."""
        error = ConfigurationError("Invalid value", config_key="editor.debounce_ms")
        assert error.details["config_key"] == "editor.debounce_ms"


class TestProfileNotFoundError:
    """Tests for ProfileNotFoundError."""

    def test_error_message(self):
        """Test message and details."""
        error = ProfileNotFoundError("Rails")
        assert str(error) == "Profile not found: Rails"
        assert error.code == "PROFILE_NOT_FOUND"
        assert isinstance(error, EnvDeskError)


class TestValidateEnvVarName:
    """Tests for validate_env_var_name."""

    @pytest.mark.parametrize("name", ["FOO", "BAR_BAZ", "_PRIVATE", "MY_VAR_123", "a", "1VAR"])
    def test_valid_names(self, name):
        """Test valid environment variable names."""
        validate_env_var_name(name)

    def test_empty_name(self):
        """Test empty name raises error."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_env_var_name("")

    @pytest.mark.parametrize("name", ["FOO=BAR", "#FOO"])
    def test_name_with_separator(self, name):
        """Test that '=' and '#' are rejected."""
        with pytest.raises(ValidationError, match="cannot contain"):
            validate_env_var_name(name)

    @pytest.mark.parametrize("name", ["FOO-BAR", "FOO.BAR", "FOO BAR", "FOO@BAR"])
    def test_name_with_invalid_chars(self, name):
        """Test name with invalid characters raises error."""
        with pytest.raises(ValidationError, match="invalid character"):
            validate_env_var_name(name)

    def test_non_ascii_name(self):
        """Test that non-ASCII letters are rejected."""
        with pytest.raises(ValidationError, match="ASCII"):
            validate_env_var_name("ÄPP")
