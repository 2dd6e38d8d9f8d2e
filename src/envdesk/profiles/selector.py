"""Project type detection and profile lookup."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field

from envdesk.profiles.base import Profile
from envdesk.profiles.django import django_profile
from envdesk.profiles.generic import generic_profile
from envdesk.profiles.laravel import laravel_profile
from envdesk.profiles.nodejs import nodejs_profile
from envdesk.utils.errors import ProfileNotFoundError
from envdesk.utils.logging import get_logger

logger = get_logger("profiles.selector")

GENERIC = "Generic"

MANIFEST_FILES = ("composer.json", "package.json", "requirements.txt", "pyproject.toml")
LARAVEL_DIRECTORIES = ("app", "bootstrap", "config", "database", "resources", "routes")
LARAVEL_PACKAGES = ("laravel/framework", "laravel/laravel")


class ProjectSnapshot(BaseModel):
    """What detection needs to know about a project root.

    Holds the names of the immediate child files and directories plus the
    text of the known manifest files. Detection never touches the disk
    itself, so a snapshot can be built by hand in tests.
    """

    model_config = {"frozen": True}

    files: frozenset[str] = Field(default_factory=frozenset, description="Names of child files")
    directories: frozenset[str] = Field(
        default_factory=frozenset, description="Names of child directories"
    )
    manifests: dict[str, str] = Field(default_factory=dict, description="Manifest text by file name")

    @classmethod
    def from_directory(cls, root: Path | str) -> "ProjectSnapshot":
        root = Path(root)
        files: set[str] = set()
        directories: set[str] = set()
        if root.is_dir():
            for child in root.iterdir():
                if child.is_dir():
                    directories.add(child.name)
                else:
                    files.add(child.name)

        manifests: dict[str, str] = {}
        for name in MANIFEST_FILES:
            if name not in files:
                continue
            try:
                manifests[name] = (root / name).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read {name}: {e}")

        return cls(files=frozenset(files), directories=frozenset(directories), manifests=manifests)

    def has_file(self, name: str) -> bool:
        return name in self.files

    def manifest_contains(self, name: str, needle: str) -> bool:
        return needle in self.manifests.get(name, "")


class ProfileCatalog:
    """The set of profiles known to the application.

    Built explicitly and passed to whoever needs it. The generic profile
    is always present.
    """

    def __init__(self, profiles: list[Profile] | None = None) -> None:
        if profiles is None:
            profiles = [laravel_profile(), nodejs_profile(), django_profile(), generic_profile()]
        self._profiles: dict[str, Profile] = {p.name.lower(): p for p in profiles}
        if GENERIC.lower() not in self._profiles:
            self._profiles[GENERIC.lower()] = generic_profile()

    def all_profiles(self) -> list[Profile]:
        return list(self._profiles.values())

    @property
    def generic(self) -> Profile:
        return self._profiles[GENERIC.lower()]

    def profile_by_name(self, name: str | None) -> Profile:
        """Look up a profile case-insensitively, falling back to the generic profile."""
        if name:
            profile = self._profiles.get(name.strip().lower())
            if profile is not None:
                return profile
            logger.debug(f"Unknown profile {name!r}, using {GENERIC}")
        return self.generic

    def require(self, name: str) -> Profile:
        """Look up a profile by name.

        Raises:
            ProfileNotFoundError: If no profile has this name
        """
        profile = self._profiles.get(name.strip().lower())
        if profile is None:
            raise ProfileNotFoundError(name)
        return profile


Detector = Callable[[ProjectSnapshot], bool]


class ProfileSelector:
    """Picks the profile that best matches a project.

    Detectors run in a fixed order and the first match wins. The
    directory-shape check is a heuristic and can misclassify projects
    that happen to share Laravel's directory names.
    """

    def __init__(self, catalog: ProfileCatalog | None = None, directory_threshold: int = 4) -> None:
        self.catalog = catalog or ProfileCatalog()
        self.directory_threshold = directory_threshold
        self._detectors: list[tuple[str, Detector]] = [
            ("Laravel", self._has_artisan),
            ("Laravel", self._composer_requires_laravel),
            ("Laravel", self._has_laravel_shape),
            ("NodeJS", self._has_package_json),
            ("Django", self._looks_like_django),
        ]

    def detect(self, snapshot: ProjectSnapshot) -> str | None:
        """Return the name of the first matching profile, or None."""
        for name, detector in self._detectors:
            if detector(snapshot):
                return name
        return None

    def select_for(self, snapshot: ProjectSnapshot) -> Profile:
        name = self.detect(snapshot)
        profile = self.catalog.profile_by_name(name)
        logger.debug(f"Selected profile {profile.name}")
        return profile

    def select_for_directory(self, root: Path | str) -> Profile:
        return self.select_for(ProjectSnapshot.from_directory(root))

    @staticmethod
    def _has_artisan(snapshot: ProjectSnapshot) -> bool:
        return snapshot.has_file("artisan")

    @staticmethod
    def _composer_requires_laravel(snapshot: ProjectSnapshot) -> bool:
        return any(snapshot.manifest_contains("composer.json", p) for p in LARAVEL_PACKAGES)

    def _has_laravel_shape(self, snapshot: ProjectSnapshot) -> bool:
        # Only consulted when there is no composer.json to decide definitively
        if snapshot.has_file("composer.json"):
            return False
        present = sum(1 for d in LARAVEL_DIRECTORIES if d in snapshot.directories)
        return present >= self.directory_threshold

    @staticmethod
    def _has_package_json(snapshot: ProjectSnapshot) -> bool:
        return snapshot.has_file("package.json")

    @staticmethod
    def _looks_like_django(snapshot: ProjectSnapshot) -> bool:
        if snapshot.has_file("manage.py"):
            return True
        return any(
            "django" in snapshot.manifests.get(name, "").lower()
            for name in ("requirements.txt", "pyproject.toml")
        )
