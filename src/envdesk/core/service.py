"""Project-level facade over parsing, classification and editing."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Callable, TypeVar

from envdesk.core.cache import EnvCache
from envdesk.core.debounce import Coordinator, Debouncer
from envdesk.core.document import FileDocument, ProjectFiles, read_text, write_text_atomic
from envdesk.core.mutator import EnvMutator
from envdesk.core.parser import EnvLineParser
from envdesk.core.registry import VariableRegistry
from envdesk.core.resolver import FileSetResolver, sort_by_priority
from envdesk.core.watcher import EnvFileWatcher
from envdesk.models.env import FileDefinition, FileEvent, Variable
from envdesk.profiles.base import Profile
from envdesk.profiles.selector import ProfileCatalog, ProfileSelector
from envdesk.utils.config import EnvDeskConfig
from envdesk.utils.errors import DocumentError, EnvDeskError, validate_env_var_name
from envdesk.utils.logging import get_logger

logger = get_logger("core.service")

T = TypeVar("T")


def normalize_key(key: str) -> str:
    """Turn user input into a conventional variable name."""
    key = re.sub(r"\s+", "_", key.strip())
    key = re.sub(r"[^a-zA-Z0-9_]", "_", key)
    return key.upper()


class EnvFileService:
    """Env files of one project seen through its active profile.

    Failures at this level never raise: I/O and engine errors are logged
    and reported as False, None or an empty result.
    """

    def __init__(
        self,
        root: Path | str,
        profile: Profile | None = None,
        config: EnvDeskConfig | None = None,
        catalog: ProfileCatalog | None = None,
        mutator: EnvMutator | None = None,
        coordinator: Coordinator | None = None,
    ) -> None:
        self.config = config or EnvDeskConfig()
        self.files = ProjectFiles(root)
        self.catalog = catalog or ProfileCatalog()
        self.selector = ProfileSelector(self.catalog, self.config.detection.directory_threshold)
        if profile is None:
            forced = self.config.detection.forced_profile
            if forced:
                profile = self.catalog.profile_by_name(forced)
            else:
                profile = self.selector.select_for_directory(self.files.root)

        self.registry = VariableRegistry(profile)
        self.parser = EnvLineParser(self.registry)
        self.resolver = FileSetResolver()
        self.mutator = mutator or EnvMutator(
            backup_prefix=self.config.editor.backup_prefix,
            secret_length=self.config.editor.secret_length,
        )
        self.cache = EnvCache()
        self.debouncer = Debouncer(self.config.editor.debounce_ms)
        self.coordinator = coordinator or Coordinator()

        self._active_file: Path | None = None
        self._open_document: FileDocument | None = None
        self._last_updated: str | None = None

    @property
    def root(self) -> Path:
        return self.files.root

    # Profile

    @property
    def active_profile(self) -> Profile:
        return self.registry.active_profile

    def set_active_profile(self, profile: Profile) -> None:
        """Switch profiles; everything derived from the old one is dropped."""
        self.registry.set_active_profile(profile)
        self.cache.clear()
        self.rescan()

    def file_definitions_for_active_profile(self) -> list[FileDefinition]:
        return sort_by_priority(self.active_profile.file_definitions)

    def definition_for_file(self, file: Path | str | None) -> FileDefinition | None:
        if file is None:
            return None
        return self.active_profile.file_definition(Path(file).name)

    def is_editable(self, file: Path | str | None) -> bool:
        definition = self.definition_for_file(file)
        return definition is not None and definition.is_editable

    def is_template(self, file: Path | str | None) -> bool:
        definition = self.definition_for_file(file)
        return definition is not None and definition.is_template

    # Discovery and parsing

    @property
    def active_file(self) -> Path | None:
        return self._active_file

    def present_definitions(self) -> list[FileDefinition]:
        return self.resolver.present_definitions(
            self.active_profile.file_definitions, self.files.list_names()
        )

    def rescan(self) -> list[Path]:
        """Re-match expected files against the disk and rebuild the cache."""
        self.cache.clear()
        present_names = self.files.list_names()
        found: list[Path] = []
        for definition in self.resolver.present_definitions(
            self.active_profile.file_definitions, present_names
        ):
            path = self.files.path(definition.name)
            self.parse(path)
            found.append(path)

        active = self.resolver.resolve_active(self.active_profile.file_definitions, present_names)
        self._active_file = self.files.path(active.name) if active else None
        logger.info(
            f"Found {len(found)} env file(s) for {self.active_profile.name} profile"
            + (f", active: {active.name}" if active else "")
        )
        return found

    def parse(self, file: Path | str) -> list[Variable]:
        """Parse a file and cache the result; unreadable files give []."""
        path = self.resolve_path(file)
        try:
            text = read_text(path)
        except DocumentError as e:
            logger.error(e.message)
            return []
        return self._parse_text(path, text)

    def _parse_text(self, path: Path, text: str) -> list[Variable]:
        variables = self.parser.parse(text, source_file=str(path))
        self.cache.put(path, variables, text)
        return variables

    def variables(self, file: Path | str | None = None) -> list[Variable]:
        """Variables of a file, re-parsing when the text on disk has changed.

        A cache entry is only reused while the file still holds the text
        it was parsed from, so changes nobody reported are picked up too.
        """
        path = self._target(file)
        if path is None:
            return []
        cached = self.cache.get(path)
        if cached is None:
            return self.parse(path)
        try:
            text = read_text(path)
        except DocumentError as e:
            logger.error(e.message)
            self.cache.invalidate(path)
            return []
        if self.cache.is_fresh(path, text):
            return cached
        logger.debug(f"{path.name} changed on disk, re-parsing")
        return self._parse_text(path, text)

    def all_file_variables(self) -> dict[str, list[Variable]]:
        return {
            definition.name: self.variables(self.files.path(definition.name))
            for definition in self.present_definitions()
        }

    def resolve_path(self, file: Path | str) -> Path:
        path = Path(file)
        return path if path.is_absolute() else self.root / path

    def _target(self, file: Path | str | None) -> Path | None:
        return self.resolve_path(file) if file is not None else self._active_file

    # Edits

    def _read(self, path: Path) -> FileDocument:
        """Snapshot of a file taken while no edit of it is in progress."""
        with self.mutator.lock_for_path(path):
            return FileDocument(path)

    def _edit(self, file: Path | str | None, action: Callable[[FileDocument], T], failed: T) -> T:
        """Read, edit and commit a file as one step.

        The file's lock is held from the read to the commit. Debounced
        updates run on timer threads and go through here as well.
        """
        path = self._target(file)
        if path is None:
            logger.error("No env file to edit")
            return failed
        with self.mutator.lock_for_path(path):
            try:
                doc = FileDocument(path)
                result = action(doc)
            except (EnvDeskError, OSError) as e:
                logger.error(f"Editing {path.name} failed: {e}")
                return failed
            finally:
                self.cache.invalidate(path)
            self.parse(path)
            if self._open_document is not None and self._open_document.path == path:
                try:
                    self._open_document.reload()
                except DocumentError as e:
                    logger.error(e.message)
        return result

    def set_variable(self, key: str, value: str, file: Path | str | None = None) -> bool:
        def action(doc: FileDocument) -> bool:
            self.mutator.set_variable(doc, key, value)
            return True

        ok = self._edit(file, action, False)
        if ok:
            self._last_updated = key
        return ok

    def add_variable(self, key: str, value: str, file: Path | str | None = None) -> bool:
        key = normalize_key(key)
        try:
            validate_env_var_name(key)
        except EnvDeskError as e:
            logger.error(e.message)
            return False
        return self.set_variable(key, value, file)

    def remove_variable(self, key: str, file: Path | str | None = None) -> bool:
        return self._edit(file, lambda doc: self.mutator.remove_variable(doc, key), False)

    def rename_variable(self, old_key: str, new_key: str, file: Path | str | None = None) -> bool:
        new_key = normalize_key(new_key)
        try:
            validate_env_var_name(new_key)
        except EnvDeskError as e:
            logger.error(e.message)
            return False
        ok = self._edit(file, lambda doc: self.mutator.rename_variable(doc, old_key, new_key), False)
        if ok:
            self._last_updated = new_key
        return ok

    def toggle_comment(self, key: str, comment_out: bool, file: Path | str | None = None) -> bool:
        return self._edit(file, lambda doc: self.mutator.toggle_comment(doc, key, comment_out), False)

    def set_multiple(self, values: Mapping[str, str], file: Path | str | None = None) -> bool:
        def action(doc: FileDocument) -> bool:
            self.mutator.set_multiple(doc, values)
            return True

        return self._edit(file, action, False)

    def safe_set(self, key: str, value: str, file: Path | str | None = None) -> Path | None:
        """Back the file up, then set or add a variable.

        New keys are normalized like add_variable. Returns the backup
        path, or None if nothing was written.
        """
        path = self._target(file)
        if path is not None and self.get_variable(key, path) is None:
            key = normalize_key(key)
            try:
                validate_env_var_name(key)
            except EnvDeskError as e:
                logger.error(e.message)
                return None

        backup_path = self._edit(file, lambda doc: self.mutator.safe_set(doc, key, value), None)
        if backup_path is not None:
            self._last_updated = key
        return backup_path

    def get_variable(self, key: str, file: Path | str | None = None) -> str | None:
        """Raw value as written in the file, quotes included."""
        path = self._target(file)
        if path is None:
            return None
        try:
            return self.mutator.get_variable(self._read(path), key)
        except DocumentError as e:
            logger.error(e.message)
            return None

    def find_template(self) -> Path | None:
        for definition in self.present_definitions():
            if definition.is_template:
                return self.files.path(definition.name)
        return None

    def sync_with_template(
        self, template: Path | str | None = None, file: Path | str | None = None
    ) -> list[str] | None:
        """Add the template's missing keys; None if there is nothing to sync from."""
        template_path = self.resolve_path(template) if template else self.find_template()
        if template_path is None:
            logger.error("No template file found")
            return None
        try:
            template_text = read_text(template_path)
        except DocumentError as e:
            logger.error(e.message)
            return None
        return self._edit(file, lambda doc: self.mutator.sync_with_template(doc, template_text), None)

    def extract_sections(self, file: Path | str | None = None) -> dict[str, list[str]]:
        path = self._target(file)
        if path is None:
            return {}
        try:
            return self.mutator.extract_sections(self._read(path))
        except DocumentError as e:
            logger.error(e.message)
            return {}

    def group_sections(self, file: Path | str | None = None) -> dict[str, list[str]]:
        """Keys grouped by their profile group, groups in order of first appearance."""
        sections: dict[str, list[str]] = {}
        seen: set[str] = set()
        for variable in self.variables(file):
            if variable.name in seen:
                continue
            seen.add(variable.name)
            sections.setdefault(variable.group, []).append(variable.name)
        return sections

    def organize(
        self,
        sections: Mapping[str, Sequence[str]] | None = None,
        by_group: bool = False,
        file: Path | str | None = None,
        create_backup: bool | None = None,
    ) -> bool:
        if sections is None:
            sections = self.group_sections(file) if by_group else self.extract_sections(file)
        if create_backup is None:
            create_backup = self.config.editor.backup_before_organize

        def action(doc: FileDocument) -> bool:
            self.mutator.organize(doc, sections, create_backup=create_backup)
            return True

        return self._edit(file, action, False)

    def validate(self, file: Path | str | None = None) -> list[str]:
        path = self._target(file)
        if path is None:
            return []
        try:
            return self.mutator.validate(self._read(path))
        except DocumentError as e:
            logger.error(e.message)
            return [f"Could not read file: {path.name}"]

    def backup(self, file: Path | str | None = None) -> Path | None:
        path = self._target(file)
        if path is None:
            return None
        try:
            return self.mutator.backup(self._read(path))
        except (EnvDeskError, OSError) as e:
            logger.error(f"Backup of {path.name} failed: {e}")
            return None

    def restore(self, target_name: str | None = None) -> bool:
        if target_name is None:
            target_name = self._active_file.name if self._active_file else ".env"
        try:
            ok = self.mutator.restore_latest_backup(self.root, target_name)
        except (EnvDeskError, OSError) as e:
            logger.error(f"Restore of {target_name} failed: {e}")
            return False
        if ok:
            self.cache.invalidate(self.files.path(target_name))
        return ok

    def generate_secret_value(self) -> str:
        return self.mutator.generate_secret_value()

    def _needs_generated_value(self, key: str, value: str) -> bool:
        if self.registry.is_predefined(key) and self.registry.is_secret(key):
            return True
        lower = key.lower()
        return value in ("", "null") or ("key" in lower and "keyboard" not in lower)

    def create_from_template(self, template: Path | str | None = None, target: str = ".env") -> Path | None:
        """Create target from a template, generating values for secrets and blanks.

        An existing target is never overwritten.
        """
        template_path = self.resolve_path(template) if template else self.find_template()
        if template_path is None:
            logger.error("No template file found")
            return None
        target_path = self.files.path(target)
        if target_path.exists():
            logger.info(f"{target} already exists, not overwriting")
            return None

        try:
            text = read_text(template_path)
        except DocumentError as e:
            logger.error(e.message)
            return None

        lines: list[str] = []
        for line in text.split("\n"):
            stripped = line.strip()
            position = line.find("=")
            if not stripped or stripped.startswith("#") or position <= 0:
                lines.append(line)
                continue
            key = line[:position].strip()
            value = line[position + 1 :].strip()
            if self._needs_generated_value(key, value):
                value = self.generate_secret_value()
            lines.append(f"{key}={value}")
        content = "\n".join(lines)
        if not content.endswith("\n"):
            content += "\n"

        try:
            write_text_atomic(target_path, content)
        except DocumentError as e:
            logger.error(e.message)
            return None
        self.parse(target_path)
        if self.is_primary_name(target):
            self._active_file = target_path
        logger.info(f"Created {target} from {template_path.name}")
        return target_path

    def is_primary_name(self, name: str) -> bool:
        definition = self.active_profile.file_definition(name)
        return definition is not None and definition.is_primary

    # Events

    @property
    def last_updated_variable(self) -> str | None:
        return self._last_updated

    def open_file(self, file: Path | str) -> FileDocument | None:
        """Make a file the one currently shown for editing."""
        path = self.resolve_path(file)
        try:
            self._open_document = FileDocument(path)
        except DocumentError as e:
            logger.error(e.message)
            return None
        return self._open_document

    @property
    def open_document(self) -> FileDocument | None:
        return self._open_document

    def schedule_update(self, key: str, value: str, file: Path | str | None = None) -> None:
        """Commit an edit once typing on this key has paused."""
        path = self._target(file)
        self.debouncer.schedule(f"{path}:{key}", lambda: self.set_variable(key, value, path))

    def handle_external_save(self, file: Path | str, open_path: Path | str | None = None) -> list[Variable]:
        """Refresh a file changed by another tool.

        If it is the file currently open for editing, the open view is
        reloaded too; otherwise only the cache entry is refreshed.
        """
        path = self.resolve_path(file)
        self.cache.invalidate(path)
        variables = self.parse(path)
        if open_path is None and self._open_document is not None:
            open_path = self._open_document.path
        if open_path is not None and self.resolve_path(open_path).resolve() == path.resolve():
            if self._open_document is not None and self._open_document.path == path:
                try:
                    self._open_document.reload()
                except DocumentError as e:
                    logger.error(e.message)
            else:
                self.open_file(path)
        return variables

    def watcher(self, on_event: Callable[[FileEvent], Any] | None = None) -> EnvFileWatcher:
        """Watcher that queues rescan() on this service's coordinator."""
        return EnvFileWatcher(
            self.root,
            on_change=self.rescan,
            coordinator=self.coordinator,
            pattern=self.config.watch.pattern,
            on_event=on_event,
        )

