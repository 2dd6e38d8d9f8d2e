"""Unit tests for debounced commits and the coordinator."""

import threading
import time

from envdesk.core.debounce import Coordinator, Debouncer


class TestDebouncer:
    """Tests for Debouncer."""

    def test_last_value_wins(self):
        """Test that rescheduling a key cancels the earlier action."""
        debouncer = Debouncer(delay_ms=50)
        results: list[str] = []
        done = threading.Event()

        def record(value: str):
            def action():
                results.append(value)
                done.set()

            return action

        debouncer.schedule("A", record("first"))
        debouncer.schedule("A", record("second"))

        assert done.wait(2.0)
        time.sleep(0.1)
        assert results == ["second"]
        assert debouncer.pending() == []

    def test_keys_independent(self):
        """Test that different keys do not cancel each other."""
        debouncer = Debouncer(delay_ms=10_000)
        results: list[str] = []
        debouncer.schedule("A", lambda: results.append("a"))
        debouncer.schedule("B", lambda: results.append("b"))

        assert sorted(debouncer.pending()) == ["A", "B"]
        assert debouncer.flush() == 2
        assert sorted(results) == ["a", "b"]

    def test_flush_runs_latest_only(self):
        """Test flushing after a reschedule."""
        debouncer = Debouncer(delay_ms=10_000)
        results: list[int] = []
        for i in range(5):
            debouncer.schedule("K", lambda i=i: results.append(i))
        debouncer.flush()
        assert results == [4]

    def test_cancel(self):
        """Test cancelling one key."""
        debouncer = Debouncer(delay_ms=10_000)
        results: list[str] = []
        debouncer.schedule("A", lambda: results.append("a"))

        assert debouncer.cancel("A") is True
        assert debouncer.cancel("A") is False
        assert debouncer.flush() == 0
        assert results == []

    def test_cancel_all(self):
        """Test cancelling everything."""
        debouncer = Debouncer(delay_ms=10_000)
        debouncer.schedule("A", lambda: None)
        debouncer.schedule("B", lambda: None)
        debouncer.cancel_all()
        assert debouncer.pending() == []

    def test_failing_action_does_not_propagate(self):
        """Test that an exception in an action is logged, not raised."""
        debouncer = Debouncer(delay_ms=10_000)

        def boom():
            raise RuntimeError("boom")

        debouncer.schedule("A", boom)
        assert debouncer.flush() == 1


class TestCoordinator:
    """Tests for Coordinator."""

    def test_drain_in_order(self):
        """Test that queued work runs in submission order on drain."""
        coordinator = Coordinator()
        results: list[int] = []
        for i in range(3):
            coordinator.submit(lambda i=i: results.append(i))

        assert results == []
        assert coordinator.pending() == 3
        assert coordinator.drain() == 3
        assert results == [0, 1, 2]
        assert coordinator.drain() == 0

    def test_submit_from_other_thread(self):
        """Test that producers on other threads only enqueue."""
        coordinator = Coordinator()
        ran_on: list[str] = []

        def task():
            ran_on.append(threading.current_thread().name)

        producer = threading.Thread(target=coordinator.submit, args=(task,), name="producer")
        producer.start()
        producer.join()

        assert ran_on == []
        coordinator.drain()
        assert ran_on == [threading.current_thread().name]

    def test_worker(self):
        """Test the background worker."""
        coordinator = Coordinator()
        done = threading.Event()
        coordinator.start()
        try:
            coordinator.submit(done.set)
            assert done.wait(2.0)
        finally:
            coordinator.stop(timeout=2.0)

    def test_failing_task(self):
        """Test that one failing task does not stop the rest."""
        coordinator = Coordinator()
        results: list[str] = []

        def boom():
            raise RuntimeError("boom")

        coordinator.submit(boom)
        coordinator.submit(lambda: results.append("after"))
        assert coordinator.drain() == 2
        assert results == ["after"]
