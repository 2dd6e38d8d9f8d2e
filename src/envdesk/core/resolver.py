"""Choosing the active env file among the expected ones."""

from __future__ import annotations

from collections.abc import Iterable

from envdesk.models.env import FileDefinition


def sort_by_priority(definitions: Iterable[FileDefinition]) -> list[FileDefinition]:
    """Order definitions by priority, lowest number first."""
    return sorted(definitions, key=lambda d: d.priority)


class FileSetResolver:
    """Matches file definitions against the files present on disk."""

    def present_definitions(
        self,
        definitions: Iterable[FileDefinition],
        present_names: Iterable[str],
    ) -> list[FileDefinition]:
        """Definitions whose name is present, in priority order."""
        present = set(present_names)
        return sort_by_priority(d for d in definitions if d.name in present)

    def resolve_active(
        self,
        definitions: Iterable[FileDefinition],
        present_names: Iterable[str],
    ) -> FileDefinition | None:
        """Return the present PRIMARY definition.

        When no present file is typed PRIMARY there is no active file;
        callers that want a fallback pick one from present_definitions.
        """
        for definition in self.present_definitions(definitions, present_names):
            if definition.is_primary:
                return definition
        return None
