"""Profile model shared by all project archetypes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from envdesk.models.env import FileDefinition, VariableDefinition, VariableType


class Profile(BaseModel):
    """Variable and file metadata for one kind of project.

    A profile is an immutable catalogue. Only the active profile is ever
    consulted; two profiles may describe the same variable differently.
    """

    model_config = {"frozen": True}

    name: str = Field(description="Display name, e.g. Laravel")
    description: str = Field(default="", description="What kind of project the profile covers")
    definitions: dict[str, VariableDefinition] = Field(
        default_factory=dict, description="Variable definitions by name"
    )
    file_definitions: tuple[FileDefinition, ...] = Field(
        default=(), description="Env files the project is expected to have"
    )
    common_file_names: tuple[str, ...] = Field(
        default=(), description="File names commonly found in such projects"
    )
    supports_cli_actions: bool = Field(
        default=False, description="Whether framework CLI actions are available"
    )
    supports_template_files: bool = Field(
        default=False, description="Whether the project ships template env files"
    )

    def definition_for(self, name: str) -> VariableDefinition | None:
        return self.definitions.get(name)

    def definitions_for_group(self, group: str) -> list[VariableDefinition]:
        return [d for d in self.definitions.values() if d.group == group]

    def all_groups(self) -> set[str]:
        return {d.group for d in self.definitions.values()}

    def is_variable_predefined(self, name: str) -> bool:
        return name in self.definitions

    def file_definition(self, file_name: str) -> FileDefinition | None:
        """Find the file definition with exactly this name."""
        for definition in self.file_definitions:
            if definition.name == file_name:
                return definition
        return None


def define(
    name: str,
    description: str,
    group: str,
    type: VariableType = VariableType.STRING,
    values: Sequence[str] = (),
    secret: bool = False,
) -> VariableDefinition:
    """Shorthand used by the profile catalogues."""
    return VariableDefinition(
        name=name,
        description=description,
        type=type,
        possible_values=tuple(values),
        group=group,
        secret=secret,
    )


def build_profile(
    name: str,
    description: str,
    variables: Iterable[VariableDefinition],
    files: Iterable[FileDefinition],
    common_files: Iterable[str],
    supports_cli_actions: bool = False,
    supports_template_files: bool = False,
) -> Profile:
    """Assemble a profile; later definitions of a name replace earlier ones."""
    definitions: dict[str, VariableDefinition] = {}
    for definition in variables:
        definitions[definition.name] = definition
    return Profile(
        name=name,
        description=description,
        definitions=definitions,
        file_definitions=tuple(files),
        common_file_names=tuple(common_files),
        supports_cli_actions=supports_cli_actions,
        supports_template_files=supports_template_files,
    )
