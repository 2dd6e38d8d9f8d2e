"""Unit tests for the env file watcher."""

import time

from watchdog.events import DirCreatedEvent, FileCreatedEvent, FileDeletedEvent, FileMovedEvent

from envdesk.core.debounce import Coordinator
from envdesk.core.watcher import EnvFileWatcher
from envdesk.models.env import FileEvent, FileEventKind


def make_watcher(root, calls):
    return EnvFileWatcher(root, on_change=lambda: calls.append(1), coordinator=Coordinator())


class TestEnvFileWatcher:
    """Tests for EnvFileWatcher."""

    def test_notify_defers_rescan(self, tmp_path):
        """Test that a relevant event only queues the rescan."""
        calls: list[int] = []
        watcher = make_watcher(tmp_path, calls)

        accepted = watcher.notify(FileEvent(kind=FileEventKind.CREATED, path=str(tmp_path / ".env.local")))
        assert accepted is True
        assert calls == []

        watcher.coordinator.drain()
        assert calls == [1]

    def test_ignores_other_names(self, tmp_path):
        """Test that non-env files are filtered out."""
        calls: list[int] = []
        watcher = make_watcher(tmp_path, calls)
        assert watcher.notify(FileEvent(kind=FileEventKind.CREATED, path=str(tmp_path / "README.md"))) is False
        assert watcher.coordinator.pending() == 0

    def test_ignores_other_directories(self, tmp_path):
        """Test that env files outside the root are filtered out."""
        project = tmp_path / "project"
        project.mkdir()
        calls: list[int] = []
        watcher = make_watcher(project, calls)
        event = FileEvent(kind=FileEventKind.DELETED, path=str(tmp_path / "elsewhere" / ".env"))
        assert watcher.notify(event) is False

    def test_on_event_callback(self, tmp_path):
        """Test that relevant events are also passed to on_event."""
        seen: list[FileEvent] = []
        watcher = EnvFileWatcher(tmp_path, on_change=lambda: None, coordinator=Coordinator(), on_event=seen.append)
        watcher.notify(FileEvent(kind=FileEventKind.CREATED, path=str(tmp_path / ".env")))
        watcher.notify(FileEvent(kind=FileEventKind.CREATED, path=str(tmp_path / "notes.txt")))
        assert [e.path for e in seen] == [str(tmp_path / ".env")]


class TestEnvFileEventHandler:
    """Tests for the watchdog event handler."""

    def test_created_and_deleted(self, tmp_path):
        """Test that file events queue rescans."""
        calls: list[int] = []
        watcher = make_watcher(tmp_path, calls)
        watcher.handler.on_created(FileCreatedEvent(str(tmp_path / ".env.testing")))
        watcher.handler.on_deleted(FileDeletedEvent(str(tmp_path / ".env")))
        watcher.handler.on_created(FileCreatedEvent(str(tmp_path / "notes.txt")))

        assert watcher.coordinator.drain() == 2
        assert calls == [1, 1]

    def test_directories_ignored(self, tmp_path):
        """Test that a directory named like an env file is not reported."""
        watcher = make_watcher(tmp_path, [])
        watcher.handler.on_created(DirCreatedEvent(str(tmp_path / ".env.d")))
        assert watcher.coordinator.pending() == 0

    def test_move_onto_env_file(self, tmp_path):
        """Test a save that renames a temporary file over .env."""
        seen: list[FileEvent] = []
        watcher = EnvFileWatcher(tmp_path, on_change=lambda: None, coordinator=Coordinator(), on_event=seen.append)
        watcher.handler.on_moved(FileMovedEvent(str(tmp_path / "tmp123"), str(tmp_path / ".env")))
        assert [(e.kind, e.path) for e in seen] == [(FileEventKind.CREATED, str(tmp_path / ".env"))]


class TestObserver:
    """Tests for watching a real directory."""

    def test_start_reports_new_file(self, tmp_path):
        """Test that a file created after start() reaches the coordinator."""
        calls: list[int] = []
        watcher = make_watcher(tmp_path, calls)
        watcher.start()
        try:
            assert watcher.is_running
            (tmp_path / ".env.local").write_text("A=1\n")
            deadline = time.monotonic() + 5
            while watcher.coordinator.pending() == 0 and time.monotonic() < deadline:
                time.sleep(0.02)
        finally:
            watcher.stop()

        assert not watcher.is_running
        watcher.coordinator.drain()
        assert calls
