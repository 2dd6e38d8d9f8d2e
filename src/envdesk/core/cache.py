"""In-memory cache of parsed env files."""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Any

from envdesk.models.env import Variable
from envdesk.utils.hashing import text_fingerprint


class CacheEntry:
    """Parsed variables of one file plus the fingerprint of the text they came from."""

    def __init__(self, variables: list[Variable], fingerprint: str | None = None) -> None:
        self.variables = variables
        self.fingerprint = fingerprint
        self.created_at = time.time()


class EnvCache:
    """Most recently parsed variable list per file.

    Entries are dropped whenever the file is edited, changes on disk or
    the active profile changes; readers then re-parse.

    Example:
        cache = EnvCache()
        cache.put(path, variables, text)
        cache.get(path)          # the stored list
        cache.invalidate(path)
        cache.get(path)          # None
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _key(path: Path | str) -> str:
        return str(Path(path).resolve())

    def get(self, path: Path | str) -> list[Variable] | None:
        with self._lock:
            entry = self._entries.get(self._key(path))
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return list(entry.variables)

    def put(self, path: Path | str, variables: list[Variable], text: str | None = None) -> None:
        fingerprint = text_fingerprint(text) if text is not None else None
        with self._lock:
            self._entries[self._key(path)] = CacheEntry(list(variables), fingerprint)

    def is_fresh(self, path: Path | str, text: str) -> bool:
        """Whether the cached entry was parsed from exactly this text."""
        with self._lock:
            entry = self._entries.get(self._key(path))
            return entry is not None and entry.fingerprint == text_fingerprint(text)

    def invalidate(self, path: Path | str) -> None:
        with self._lock:
            self._entries.pop(self._key(path), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def paths(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, path: Path | str) -> bool:
        with self._lock:
            return self._key(path) in self._entries

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        with self._lock:
            return {
                "entries": len(self._entries),
                "variables": sum(len(e.variables) for e in self._entries.values()),
                "hits": self._hits,
                "misses": self._misses,
            }
