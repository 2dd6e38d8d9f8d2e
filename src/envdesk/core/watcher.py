"""Reacting to env files appearing and disappearing."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from envdesk.core.debounce import Coordinator
from envdesk.models.env import FileEvent, FileEventKind
from envdesk.utils.logging import get_logger

logger = get_logger("core.watcher")


class EnvFileWatcher:
    """Filters file events for a project and defers the rescan.

    Events may arrive on any thread; notify() only queues the rescan on
    the coordinator and returns immediately.

    Example:
        watcher = EnvFileWatcher(root, on_change=service.rescan, coordinator=coordinator)
        watcher.start()
        ...
        coordinator.drain()
        watcher.stop()
    """

    def __init__(
        self,
        root: Path | str,
        on_change: Callable[[], Any],
        coordinator: Coordinator,
        pattern: str = ".env",
        on_event: Callable[[FileEvent], Any] | None = None,
    ) -> None:
        self.root = Path(root).resolve()
        self.on_change = on_change
        self.coordinator = coordinator
        self.pattern = pattern
        self.on_event = on_event
        self.handler = EnvFileEventHandler(self)
        self._observer: Any = None

    def is_relevant(self, event: FileEvent) -> bool:
        path = Path(event.path)
        if not path.name.startswith(self.pattern):
            return False
        try:
            path.resolve().relative_to(self.root)
        except ValueError:
            return False
        return True

    def notify(self, event: FileEvent) -> bool:
        """Queue a rescan if the event concerns a watched file."""
        if not self.is_relevant(event):
            return False
        logger.debug(f"{event.kind.value}: {event.path}")
        if self.on_event is not None:
            self.on_event(event)
        self.coordinator.submit(self.on_change)
        return True

    @property
    def is_running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        """Start delivering events from a watchdog observer thread."""
        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(self.handler, str(self.root), recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info(f"Watching {self.root} for {self.pattern}* files")

    def stop(self, timeout: float | None = 5.0) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout)
        self._observer = None
        logger.info(f"Stopped watching {self.root}")


class EnvFileEventHandler(FileSystemEventHandler):
    """Turns watchdog create, delete and move events into FileEvents."""

    def __init__(self, watcher: EnvFileWatcher) -> None:
        super().__init__()
        self.watcher = watcher

    def _forward(self, kind: FileEventKind, path: str | bytes) -> bool:
        return self.watcher.notify(FileEvent(kind=kind, path=os.fsdecode(path)))

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(FileEventKind.CREATED, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(FileEventKind.DELETED, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors often save by renaming a temporary file over the target
        if event.is_directory:
            return
        self._forward(FileEventKind.DELETED, event.src_path)
        self._forward(FileEventKind.CREATED, event.dest_path)
