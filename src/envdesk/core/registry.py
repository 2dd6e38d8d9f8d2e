"""Variable classification backed by the active profile."""

from __future__ import annotations

import threading

from envdesk.models.env import VariableDefinition
from envdesk.profiles.base import Profile
from envdesk.profiles.generic import generic_profile
from envdesk.utils.logging import get_logger

logger = get_logger("core.registry")

DEFAULT_GROUP = "other"

# Substrings that mark an unknown variable as sensitive
SECRET_MARKERS = ("PASSWORD", "SECRET", "KEY", "TOKEN", "PRIVATE", "AUTH")


def looks_secret(name: str) -> bool:
    """Name-based secrecy check used for variables no profile defines."""
    upper = name.upper()
    return any(marker in upper for marker in SECRET_MARKERS)


class VariableRegistry:
    """Looks up variable metadata in the active profile.

    Callers hold one registry; switching its profile is visible to every
    later lookup without re-registration.
    """

    def __init__(self, profile: Profile | None = None) -> None:
        self._lock = threading.RLock()
        self._profile = profile or generic_profile()

    @property
    def active_profile(self) -> Profile:
        with self._lock:
            return self._profile

    def set_active_profile(self, profile: Profile) -> None:
        with self._lock:
            if profile.name != self._profile.name:
                logger.info(f"Switching profile from {self._profile.name} to {profile.name}")
            self._profile = profile

    def definition_for(self, name: str) -> VariableDefinition | None:
        return self.active_profile.definition_for(name)

    def definitions_for_group(self, group: str) -> list[VariableDefinition]:
        return self.active_profile.definitions_for_group(group)

    def all_groups(self) -> set[str]:
        return self.active_profile.all_groups()

    def is_predefined(self, name: str) -> bool:
        return self.active_profile.is_variable_predefined(name)

    def is_secret(self, name: str) -> bool:
        """An explicit definition wins over the name heuristic."""
        definition = self.definition_for(name)
        if definition is not None:
            return definition.secret
        return looks_secret(name)

    def group_for(self, name: str) -> str:
        definition = self.definition_for(name)
        return definition.group if definition is not None else DEFAULT_GROUP
