"""Debounced commits and the coordinating work queue."""

from __future__ import annotations

import queue
import threading
from typing import Any, Callable

from envdesk.utils.logging import get_logger

logger = get_logger("core.debounce")


class Debouncer:
    """Runs at most one action per key after a quiet period.

    Scheduling a key that already has a pending action cancels that action
    and starts the wait again, so the last scheduled action wins.
    """

    def __init__(self, delay_ms: int = 500) -> None:
        self.delay = delay_ms / 1000.0
        self._timers: dict[str, tuple[threading.Timer, Callable[[], Any]]] = {}
        self._lock = threading.Lock()

    def schedule(self, key: str, action: Callable[[], Any]) -> None:
        with self._lock:
            pending = self._timers.pop(key, None)
            if pending is not None:
                pending[0].cancel()
            timer = threading.Timer(self.delay, self._fire, args=(key,))
            timer.daemon = True
            self._timers[key] = (timer, action)
            timer.start()

    def _fire(self, key: str) -> None:
        with self._lock:
            pending = self._timers.pop(key, None)
        if pending is None:
            return
        self._run(key, pending[1])

    @staticmethod
    def _run(key: str, action: Callable[[], Any]) -> None:
        try:
            action()
        except Exception:
            logger.exception(f"Debounced action for {key} failed")

    def cancel(self, key: str) -> bool:
        with self._lock:
            pending = self._timers.pop(key, None)
        if pending is None:
            return False
        pending[0].cancel()
        return True

    def cancel_all(self) -> None:
        with self._lock:
            pending = list(self._timers.values())
            self._timers.clear()
        for timer, _ in pending:
            timer.cancel()

    def flush(self) -> int:
        """Run every pending action now. Returns how many ran."""
        with self._lock:
            pending = list(self._timers.items())
            self._timers.clear()
        for key, (timer, action) in pending:
            timer.cancel()
            self._run(key, action)
        return len(pending)

    def pending(self) -> list[str]:
        with self._lock:
            return list(self._timers)


class Coordinator:
    """Single context on which deferred work runs.

    Producers on any thread call submit(). The work runs, in submission
    order, when the owning thread calls drain(), or on a background worker
    after start().
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[Callable[[], Any] | None] = queue.Queue()
        self._worker: threading.Thread | None = None

    def submit(self, task: Callable[[], Any]) -> None:
        self._queue.put(task)

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self) -> int:
        """Run queued tasks on the calling thread. Returns how many ran."""
        count = 0
        while True:
            try:
                task = self._queue.get_nowait()
            except queue.Empty:
                return count
            if task is not None:
                self._run(task)
                count += 1

    def start(self) -> None:
        if self._worker is not None:
            return
        self._worker = threading.Thread(target=self._loop, name="envdesk-coordinator", daemon=True)
        self._worker.start()

    def stop(self, timeout: float | None = None) -> None:
        if self._worker is None:
            return
        self._queue.put(None)
        self._worker.join(timeout)
        self._worker = None

    def _loop(self) -> None:
        while True:
            task = self._queue.get()
            if task is None:
                return
            self._run(task)

    @staticmethod
    def _run(task: Callable[[], Any]) -> None:
        try:
            task()
        except Exception:
            logger.exception("Coordinated task failed")
