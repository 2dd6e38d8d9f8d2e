"""Mutable text buffers for env files and project file access."""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from envdesk.utils.errors import DocumentError
from envdesk.utils.logging import get_logger

logger = get_logger("core.document")


class TextBuffer(ABC):
    """Editable text of one env file.

    Edits change the in-memory text only; commit() persists it. Offsets
    are character offsets into the current text.
    """

    path: Path | None = None

    @abstractmethod
    def get_text(self) -> str:
        ...

    @abstractmethod
    def set_text(self, text: str) -> None:
        ...

    def insert_at(self, offset: int, text: str) -> None:
        self.replace_range(offset, offset, text)

    def delete_range(self, start: int, end: int) -> None:
        self.replace_range(start, end, "")

    def replace_range(self, start: int, end: int, text: str) -> None:
        current = self.get_text()
        if not 0 <= start <= end <= len(current):
            raise DocumentError(
                f"Range {start}:{end} outside document of length {len(current)}",
                path=str(self.path) if self.path else None,
            )
        self.set_text(current[:start] + text + current[end:])

    @abstractmethod
    def commit(self) -> None:
        """Persist the current text."""
        ...

    @property
    def name(self) -> str:
        return self.path.name if self.path else "<memory>"


class MemoryDocument(TextBuffer):
    """In-memory buffer for testing."""

    def __init__(self, text: str = "", path: Path | str | None = None) -> None:
        self._text = text
        self.path = Path(path) if path else None
        self.commits = 0

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text

    def commit(self) -> None:
        self.commits += 1


class FileDocument(TextBuffer):
    """Buffer backed by a file on disk."""

    def __init__(self, path: Path | str, create: bool = False) -> None:
        self.path = Path(path)
        if not self.path.exists() and create:
            self._text = ""
        else:
            self._text = read_text(self.path)

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text

    def reload(self) -> None:
        self._text = read_text(self.path)

    def commit(self) -> None:
        write_text_atomic(self.path, self._text)
        logger.debug(f"Committed {self.path}")


def read_text(path: Path) -> str:
    """Read a UTF-8 file, raising DocumentError on failure."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Cannot read {path}: {e}", path=str(path)) from e


def write_text_atomic(path: Path, text: str) -> None:
    """Write through a temporary sibling file so readers never see half a write."""
    path = Path(path)
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise DocumentError(f"Cannot write {path}: {e}", path=str(path)) from e


def open_document(path: Path | str, create: bool = False) -> FileDocument:
    return FileDocument(path, create=create)


class ProjectFiles:
    """File existence and listing relative to a project root."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()

    def path(self, name: str) -> Path:
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path(name).is_file()

    def resolve(self, name: str) -> Path | None:
        """Path of the named file if it is present."""
        candidate = self.path(name)
        return candidate if candidate.is_file() else None

    def list_names(self) -> list[str]:
        """Names of the files directly under the root."""
        return list_file_names(self.root)


def list_file_names(directory: Path | str) -> list[str]:
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(child.name for child in directory.iterdir() if child.is_file())
