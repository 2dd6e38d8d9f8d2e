"""Structure-preserving edits of env file text.

Every edit is a regex-anchored replacement of one range of the buffer.
Operations that need several edits (rename, organize, bulk set, import)
stage them on a working copy of the text first and then apply them to
the buffer in one go, under the document's lock, followed by a single
commit. If anything fails while applying, the buffer gets its previous
text back.

Two ways of reading a value exist on purpose. ``EnvMutator.get_variable``
returns the raw text after ``=``, quotes included, while
``EnvLineParser.parse`` strips one pair of outer quotes. Code that edits
text works with raw values; code that displays values uses the parser.
"""

from __future__ import annotations

import random
import re
import string
import threading
import time
import weakref
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from envdesk.core.document import TextBuffer, list_file_names, read_text, write_text_atomic
from envdesk.utils.errors import DocumentError
from envdesk.utils.logging import get_logger_with_context

BACKUP_PREFIX = ".env.backup."
DEFAULT_SECTION = "General"
OTHER_SECTION = "Other"
SECRET_LENGTH = 32
SECRET_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "!@#$%^&*()"

_VALID_KEY_RE = re.compile(r"^[a-zA-Z0-9_]+$")
_ALL_VARIABLES_RE = re.compile(r"^([^#=\s][^=\s]*)=([^\r\n]*)", re.MULTILINE)
_COMMENTED_RE = re.compile(r"^#[ \t]*([^#=\s][^=\s]*)=([^\r\n]*)", re.MULTILINE)
_SECTION_VARIABLE_RE = re.compile(r"^[^#=\s][^=]*=.*$")
_VALID_LINE_RE = re.compile(r"^[^=\s][^=]*=.*$")


class TextEdit(BaseModel):
    """Replacement of text[start:end] with new text."""

    model_config = {"frozen": True}

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    text: str = ""


def _line_re(key: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(key)}=[^\r\n]*", re.MULTILINE)


def _commented_line_re(key: str) -> re.Pattern[str]:
    return re.compile(rf"^# ({re.escape(key)}=[^\r\n]*)", re.MULTILINE)


def set_edit(text: str, key: str, value: str) -> TextEdit:
    """Edit that replaces the first KEY= line, or appends one."""
    line = f"{key}={value}"
    match = _line_re(key).search(text)
    if match:
        return TextEdit(start=match.start(), end=match.end(), text=line)
    prefix = "\n" if text and not text.endswith("\n") else ""
    return TextEdit(start=len(text), end=len(text), text=f"{prefix}{line}\n")


def remove_edit(text: str, key: str) -> TextEdit | None:
    match = re.search(rf"^{re.escape(key)}=[^\r\n]*(?:\r?\n)?", text, re.MULTILINE)
    if not match:
        return None
    return TextEdit(start=match.start(), end=match.end())


def toggle_edit(text: str, key: str, comment_out: bool) -> TextEdit | None:
    if comment_out:
        match = _line_re(key).search(text)
        if not match:
            return None
        return TextEdit(start=match.start(), end=match.end(), text=f"# {match.group(0)}")
    match = _commented_line_re(key).search(text)
    if not match:
        return None
    return TextEdit(start=match.start(), end=match.end(), text=match.group(1))


def raw_value(text: str, key: str) -> str | None:
    """Trimmed text after ``=`` on the first KEY= line, quotes kept."""
    match = re.search(rf"^{re.escape(key)}=([^\r\n]*)", text, re.MULTILINE)
    return match.group(1).strip() if match else None


def all_variables_in(text: str) -> dict[str, str]:
    """Raw values by key in file order; the first occurrence of a key wins."""
    result: dict[str, str] = {}
    for match in _ALL_VARIABLES_RE.finditer(text):
        result.setdefault(match.group(1), match.group(2).strip())
    return result


def section_variable(line: str) -> tuple[str, str] | None:
    """Key and raw value of a line that counts as a variable inside a section."""
    line = line.strip()
    if not _SECTION_VARIABLE_RE.match(line):
        return None
    key, value = line.split("=", 1)
    return key.strip(), value.strip()


def section_variables_in(text: str) -> dict[str, str]:
    """Like all_variables_in, but also accepts indented lines and spaces around ``=``."""
    result: dict[str, str] = {}
    for line in text.splitlines():
        found = section_variable(line)
        if found:
            result.setdefault(*found)
    return result


class EditBatch:
    """Edits staged against a working copy of a document's text.

    Each staged edit is computed against the text as left by the edits
    before it, so applying them in order to the original text reproduces
    the working copy exactly.
    """

    def __init__(self, text: str) -> None:
        self.original = text
        self.working = text
        self.edits: list[TextEdit] = []

    def stage(self, edit: TextEdit | None) -> bool:
        if edit is None:
            return False
        if not edit.start <= edit.end <= len(self.working):
            raise DocumentError(f"Edit {edit.start}:{edit.end} outside staged text")
        self.working = self.working[: edit.start] + edit.text + self.working[edit.end :]
        self.edits.append(edit)
        return True

    def set(self, key: str, value: str) -> None:
        self.stage(set_edit(self.working, key, value))

    def remove(self, key: str) -> bool:
        return self.stage(remove_edit(self.working, key))

    def replace_all(self, text: str) -> None:
        self.stage(TextEdit(start=0, end=len(self.working), text=text))

    @property
    def changed(self) -> bool:
        return self.working != self.original


class EnvMutator:
    """Applies edits to env file buffers.

    Edits to one document are serialized with a per-document lock. A
    document is identified by its resolved path, or by the buffer object
    itself when it has no path.
    """

    def __init__(
        self,
        backup_prefix: str = BACKUP_PREFIX,
        secret_length: int = SECRET_LENGTH,
        rng: random.Random | None = None,
    ) -> None:
        self.backup_prefix = backup_prefix
        self.secret_length = secret_length
        self._rng = rng or random.Random()
        # Locks live only while someone holds them or the buffer exists
        self._path_locks: weakref.WeakValueDictionary[Path, threading.RLock] = (
            weakref.WeakValueDictionary()
        )
        self._buffer_locks: weakref.WeakKeyDictionary[TextBuffer, threading.RLock] = (
            weakref.WeakKeyDictionary()
        )
        self._locks_guard = threading.Lock()

    def lock_for_path(self, path: Path | str) -> threading.RLock:
        """Lock shared by every buffer of the file at path.

        Hold it across reading, editing and committing a file so that
        concurrent writers cannot overwrite each other's changes.
        """
        key = Path(path).resolve()
        with self._locks_guard:
            lock = self._path_locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._path_locks[key] = lock
            return lock

    def lock_for(self, doc: TextBuffer) -> threading.RLock:
        if doc.path is not None:
            return self.lock_for_path(doc.path)
        with self._locks_guard:
            lock = self._buffer_locks.get(doc)
            if lock is None:
                lock = threading.RLock()
                self._buffer_locks[doc] = lock
            return lock

    def _logger(self, doc: TextBuffer):
        return get_logger_with_context("core.mutator", file=doc.name)

    def _apply(self, doc: TextBuffer, batch: EditBatch) -> bool:
        """Apply a staged batch and commit it. Caller holds the document lock."""
        if not batch.changed:
            return False
        snapshot = doc.get_text()
        if snapshot != batch.original:
            raise DocumentError("Document changed while edits were staged", path=_path_str(doc))
        try:
            for edit in batch.edits:
                doc.replace_range(edit.start, edit.end, edit.text)
            doc.commit()
        except Exception:
            doc.set_text(snapshot)
            self._logger(doc).error("Edit failed, document restored")
            raise
        self._logger(doc).debug(f"Applied {len(batch.edits)} edit(s)")
        return True

    # Reads

    def get_variable(self, doc: TextBuffer, key: str) -> str | None:
        """Raw value of the first KEY= line, trimmed, without quote stripping."""
        return raw_value(doc.get_text(), key)

    def has_variable(self, doc: TextBuffer, key: str) -> bool:
        return _line_re(key).search(doc.get_text()) is not None

    def all_variables(self, doc: TextBuffer) -> dict[str, str]:
        return all_variables_in(doc.get_text())

    def commented_variables(self, doc: TextBuffer) -> dict[str, str]:
        """Variables that are present but commented out."""
        result: dict[str, str] = {}
        for match in _COMMENTED_RE.finditer(doc.get_text()):
            result.setdefault(match.group(1), match.group(2).strip())
        return result

    def find_by_key_pattern(self, doc: TextBuffer, pattern: str) -> dict[str, str]:
        """Variables whose key contains a match for the regex pattern."""
        compiled = re.compile(pattern)
        return {k: v for k, v in self.all_variables(doc).items() if compiled.search(k)}

    def extract_sections(self, doc: TextBuffer) -> dict[str, list[str]]:
        """Keys grouped under the ``# heading`` comment that precedes them.

        Keys before any heading belong to "General". A section appears
        only if it holds at least one key; repeated headings are merged.
        """
        sections: dict[str, list[str]] = {}
        current = DEFAULT_SECTION
        keys: list[str] = []

        def close() -> None:
            if keys:
                sections.setdefault(current, []).extend(keys)

        for line in doc.get_text().splitlines():
            line = line.strip()
            if line.startswith("# "):
                close()
                current = line[2:].strip()
                keys = []
                continue
            found = section_variable(line)
            if found:
                keys.append(found[0])
        close()
        return sections

    def validate(self, doc: TextBuffer) -> list[str]:
        """Report suspicious lines; the document is not changed."""
        errors: list[str] = []
        for number, line in enumerate(doc.get_text().split("\n"), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if not _VALID_LINE_RE.match(line):
                errors.append(f"Line {number}: Invalid format, expected KEY=VALUE")
            if " = " in line:
                errors.append(f"Line {number}: Spaces around equals sign may cause issues")
            if line.endswith("\\"):
                errors.append(f"Line {number}: Line ending with backslash may cause parsing issues")
        return errors

    # Single edits

    def set_variable(self, doc: TextBuffer, key: str, value: str) -> None:
        """Replace the first KEY= line, or append ``KEY=value``."""
        with self.lock_for(doc):
            batch = EditBatch(doc.get_text())
            batch.set(key, value)
            self._apply(doc, batch)

    def remove_variable(self, doc: TextBuffer, key: str) -> bool:
        """Delete the first KEY= line; returns False if there was none."""
        with self.lock_for(doc):
            batch = EditBatch(doc.get_text())
            if not batch.remove(key):
                return False
            return self._apply(doc, batch)

    def toggle_comment(self, doc: TextBuffer, key: str, comment_out: bool) -> bool:
        with self.lock_for(doc):
            batch = EditBatch(doc.get_text())
            if not batch.stage(toggle_edit(batch.working, key, comment_out)):
                return False
            return self._apply(doc, batch)

    def add_comment(self, doc: TextBuffer, key: str, comment: str) -> bool:
        """Insert ``# comment`` above the first KEY= line."""
        with self.lock_for(doc):
            batch = EditBatch(doc.get_text())
            match = _line_re(key).search(batch.working)
            if not match:
                return False
            batch.stage(TextEdit(start=match.start(), end=match.start(), text=f"# {comment}\n"))
            return self._apply(doc, batch)

    def add_to_section(self, doc: TextBuffer, section: str, key: str, value: str) -> None:
        """Add a variable right after a ``# section`` header, creating the section if needed."""
        with self.lock_for(doc):
            batch = EditBatch(doc.get_text())
            header = re.search(rf"^# {re.escape(section)}[^\r\n]*", batch.working, re.MULTILINE)
            if header:
                edit = TextEdit(start=header.end(), end=header.end(), text=f"\n{key}={value}")
            else:
                end = len(batch.working)
                edit = TextEdit(start=end, end=end, text=f"\n# {section}\n{key}={value}\n")
            batch.stage(edit)
            self._apply(doc, batch)

    def safe_set(self, doc: TextBuffer, key: str, value: str, create_backup: bool = True) -> Path | None:
        """Set a variable after optionally backing the file up."""
        with self.lock_for(doc):
            backup_path = self.backup(doc) if create_backup else None
            self.set_variable(doc, key, value)
            return backup_path

    # Multi-step edits

    def rename_variable(self, doc: TextBuffer, old_key: str, new_key: str) -> bool:
        """Move the value of old_key to new_key in one batch.

        Returns False, leaving the document untouched, if old_key is absent.
        """
        with self.lock_for(doc):
            value = self.get_variable(doc, old_key)
            if value is None:
                return False
            if old_key == new_key:
                return True
            batch = EditBatch(doc.get_text())
            batch.remove(old_key)
            batch.set(new_key, value)
            self._apply(doc, batch)
            return True

    def set_multiple(self, doc: TextBuffer, values: Mapping[str, str]) -> None:
        with self.lock_for(doc):
            batch = EditBatch(doc.get_text())
            for key, value in values.items():
                batch.set(key, value)
            self._apply(doc, batch)

    def organize(
        self,
        doc: TextBuffer,
        sections: Mapping[str, Sequence[str]],
        create_backup: bool = True,
    ) -> Path | None:
        """Rewrite the document as ``# section`` blocks in the given order.

        Variables claimed by no section go under "# Other". Comments and
        commented-out variables are not kept. Returns the backup path when
        one was made.
        """
        with self.lock_for(doc):
            backup_path = self.backup(doc) if create_backup and doc.path else None
            remaining = section_variables_in(doc.get_text())
            parts: list[str] = []
            for section, keys in sections.items():
                if not keys:
                    continue
                parts.append(f"# {section}\n")
                for key in keys:
                    if key in remaining:
                        parts.append(f"{key}={remaining.pop(key)}\n")
                parts.append("\n")
            if remaining:
                parts.append(f"# {OTHER_SECTION}\n")
                parts.extend(f"{key}={value}\n" for key, value in remaining.items())

            batch = EditBatch(doc.get_text())
            batch.replace_all("".join(parts))
            self._apply(doc, batch)
            return backup_path

    def sync_with_template(self, doc: TextBuffer, template: TextBuffer | str) -> list[str]:
        """Append the template's keys that the document lacks.

        Existing keys are never overwritten. Returns the added keys.
        """
        template_text = template if isinstance(template, str) else template.get_text()
        with self.lock_for(doc):
            present = self.all_variables(doc)
            missing = {k: v for k, v in all_variables_in(template_text).items() if k not in present}
            if missing:
                self.set_multiple(doc, missing)
            return list(missing)

    def import_from(
        self,
        doc: TextBuffer,
        source: TextBuffer | str,
        overwrite: bool = False,
        create_backup: bool = True,
    ) -> list[str]:
        """Copy variables from another env file. Returns the keys written."""
        source_text = source if isinstance(source, str) else source.get_text()
        with self.lock_for(doc):
            present = self.all_variables(doc)
            incoming = {
                k: v for k, v in all_variables_in(source_text).items() if overwrite or k not in present
            }
            if not incoming:
                return []
            if create_backup and doc.path:
                self.backup(doc)
            self.set_multiple(doc, incoming)
            return list(incoming)

    # Backups and files

    def backup(self, doc: TextBuffer) -> Path:
        """Write a byte-for-byte copy of the document next to it."""
        if doc.path is None:
            raise DocumentError("Cannot back up a document without a path")
        directory = doc.path.parent
        token = int(time.time() * 1000)
        target = directory / f"{self.backup_prefix}{token:013d}"
        while target.exists():
            token += 1
            target = directory / f"{self.backup_prefix}{token:013d}"
        write_text_atomic(target, doc.get_text())
        self._logger(doc).info(f"Backed up to {target.name}")
        return target

    def list_backups(self, directory: Path | str) -> list[str]:
        return [n for n in list_file_names(directory) if n.startswith(self.backup_prefix)]

    def restore_latest_backup(self, directory: Path | str, target_name: str) -> bool:
        """Overwrite (or create) target_name with the newest backup's content."""
        backups = self.list_backups(directory)
        if not backups:
            return False
        latest = Path(directory) / max(backups)
        write_text_atomic(Path(directory) / target_name, read_text(latest))
        get_logger_with_context("core.mutator", file=target_name).info(f"Restored from {latest.name}")
        return True

    def create_empty_file(self, directory: Path | str, name: str = ".env") -> Path:
        """Create an env file holding only a short banner."""
        target = Path(directory) / name
        if target.exists():
            raise DocumentError(f"File already exists: {target}", path=str(target))
        banner = f"# Environment file created by envdesk\n# {datetime.now():%Y-%m-%d %H:%M:%S}\n\n"
        write_text_atomic(target, banner)
        return target

    # Values

    def generate_secret_value(self, length: int | None = None) -> str:
        # Uses a general-purpose random source, so tests can seed it
        length = length or self.secret_length
        return "".join(self._rng.choice(SECRET_ALPHABET) for _ in range(length))

    @staticmethod
    def format_value(value: str | None) -> str:
        """Quote a value that contains spaces, ``#`` or quotes."""
        if value is None:
            return ""
        if any(c in value for c in (" ", "#", "'", '"')):
            escaped = value.replace('"', '\\"')
            return f'"{escaped}"'
        return value

    @staticmethod
    def is_valid_key(key: str | None) -> bool:
        return bool(key) and _VALID_KEY_RE.match(key) is not None


def _path_str(doc: TextBuffer) -> str | None:
    return str(doc.path) if doc.path else None

