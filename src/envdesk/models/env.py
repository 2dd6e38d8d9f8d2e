"""Env file data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class VariableType(str, Enum):
    """Kind of value a known variable holds.

    Presentation layers pick an input control from this value.
    """

    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    DROPDOWN = "DROPDOWN"
    INTEGER = "INTEGER"


class FileType(str, Enum):
    """Purpose of an expected env file."""

    PRIMARY = "PRIMARY"
    TEMPLATE = "TEMPLATE"
    TESTING = "TESTING"
    PRODUCTION = "PRODUCTION"
    LOCAL_OVERRIDE = "LOCAL_OVERRIDE"
    STAGING = "STAGING"
    DEVELOPMENT = "DEVELOPMENT"
    CUSTOM = "CUSTOM"


class LineKind(str, Enum):
    """Classification of one physical line of an env file."""

    BLANK = "blank"
    COMMENT = "comment"
    ASSIGNMENT = "assignment"
    INVALID = "invalid"


class Variable(BaseModel):
    """A variable assignment read from an env file."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1, pattern=r"^[^=]+$", description="Variable name")
    raw_value: str = Field(description="Value with outer quotes removed")
    source_file: str = Field(description="Path of the file the variable was read from")
    secret: bool = Field(default=False, description="Whether the value should be masked")
    group: str = Field(default="other", description="Group from the active profile")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_value(self) -> str:
        """Value for display; secrets are masked with one asterisk per character."""
        if self.secret:
            return "*" * len(self.raw_value)
        return self.raw_value

    def __str__(self) -> str:
        return f"{self.name}={self.display_value}"


class VariableDefinition(BaseModel):
    """Static metadata for a known variable name."""

    model_config = {"frozen": True}

    name: str = Field(description="Variable name")
    description: str = Field(default="", description="Human-readable description")
    type: VariableType = Field(default=VariableType.STRING, description="Value kind")
    possible_values: tuple[str, ...] = Field(
        default=(), description="Allowed values, used for DROPDOWN and BOOLEAN"
    )
    group: str = Field(default="other", description="Display group")
    secret: bool = Field(default=False, description="Whether the value is sensitive")

    def __str__(self) -> str:
        return f"{self.name} ({self.type.value})"


class FileDefinition(BaseModel):
    """An env file a profile expects to find in the project root."""

    model_config = {"frozen": True}

    name: str = Field(description="File name, e.g. .env or .env.example")
    description: str = Field(default="", description="Purpose of the file")
    is_template: bool = Field(default=False, description="Holds placeholder values")
    is_editable: bool = Field(default=True, description="May be edited")
    priority: int = Field(default=20, description="Lower number means higher priority")
    file_type: FileType = Field(default=FileType.CUSTOM, description="File classification")

    @property
    def is_primary(self) -> bool:
        return self.file_type == FileType.PRIMARY

    @classmethod
    def primary(cls) -> "FileDefinition":
        return cls(
            name=".env",
            description="Primary environment file with actual values",
            is_template=False,
            is_editable=True,
            priority=1,
            file_type=FileType.PRIMARY,
        )

    @classmethod
    def example(cls) -> "FileDefinition":
        return cls(
            name=".env.example",
            description="Template environment file with placeholder values",
            is_template=True,
            is_editable=False,
            priority=10,
            file_type=FileType.TEMPLATE,
        )

    @classmethod
    def testing(cls, name: str = ".env.testing") -> "FileDefinition":
        return cls(
            name=name,
            description="Environment file for testing",
            is_template=False,
            is_editable=True,
            priority=5,
            file_type=FileType.TESTING,
        )

    @classmethod
    def local(cls) -> "FileDefinition":
        return cls(
            name=".env.local",
            description="Local environment overrides (not committed to version control)",
            is_template=False,
            is_editable=True,
            priority=2,
            file_type=FileType.LOCAL_OVERRIDE,
        )

    @classmethod
    def production(cls) -> "FileDefinition":
        return cls(
            name=".env.production",
            description="Environment file for production deployment",
            is_template=False,
            is_editable=True,
            priority=4,
            file_type=FileType.PRODUCTION,
        )

    @classmethod
    def development(cls) -> "FileDefinition":
        return cls(
            name=".env.development",
            description="Environment file for development",
            is_template=False,
            is_editable=True,
            priority=3,
            file_type=FileType.DEVELOPMENT,
        )

    @classmethod
    def custom(cls, name: str) -> "FileDefinition":
        return cls(
            name=name,
            description="Custom environment file",
            is_template=False,
            is_editable=True,
            priority=20,
            file_type=FileType.CUSTOM,
        )


class EnvLine(BaseModel):
    """One physical line of an env file."""

    model_config = {"frozen": True}

    number: int = Field(description="1-based line number")
    raw: str = Field(description="Line text without its terminator")
    kind: LineKind = Field(description="Line classification")
    key: str | None = Field(default=None, description="Variable name for assignments")
    value: str | None = Field(default=None, description="Extracted value for assignments")


class FileEventKind(str, Enum):
    """File system change kinds the watcher reacts to."""

    CREATED = "created"
    DELETED = "deleted"


class FileEvent(BaseModel):
    """A create or delete notification for one file."""

    model_config = {"frozen": True}

    kind: FileEventKind = Field(description="What happened")
    path: str = Field(description="Absolute path of the affected file")
