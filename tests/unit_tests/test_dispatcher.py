"""
Dispatcher unit tests.

Covers handler replacement, lazy thunks, and one-time default selection.
"""

from __future__ import annotations

import threading
import time

import pytest

from logbridge import LogLevel, current_handler, set_handler
from logbridge.dispatcher import LogDispatcher, dispatcher, select_default_handler
from logbridge.handlers import StructlogHandler
from logbridge.testing import RecordingHandler


def _noop_handler(message, level, subsystem, category, file, function, line):
    pass


class CountingThunk:
    def __init__(self, text: str = "message") -> None:
        self.text = text
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return self.text


class TestSetHandler:
    """set_handler replacement semantics"""

    def test_returns_previous_handler(self):
        """Each swap hands back exactly the handler it replaced"""
        first = RecordingHandler()
        second = RecordingHandler()

        set_handler(first)
        assert set_handler(second) is first
        assert set_handler(None) is second
        assert set_handler(None) is None

    def test_first_install_returns_none(self):
        """Installing before any log call reports no previous handler"""
        assert set_handler(RecordingHandler()) is None

    def test_explicit_install_skips_default_selection(self):
        """A handler installed before first use is never overridden by selection"""
        probe_calls = []

        def probe():
            probe_calls.append(1)
            return _noop_handler

        local = LogDispatcher(probes=(probe,))
        recorder = RecordingHandler()
        local.set_handler(recorder)
        local.log(lambda: "hello", LogLevel.INFO, None, None, "a.py", "f", 1)

        assert probe_calls == []
        assert local.current_handler() is recorder
        assert [record.message for record in recorder.records] == ["hello"]

    def test_replaced_handler_is_not_invoked_again(self):
        """Calls issued after a swap reach only the new handler"""
        old = RecordingHandler()
        new = RecordingHandler()
        set_handler(old)
        dispatcher.log(lambda: "before", LogLevel.INFO, None, None, "a.py", "f", 1)

        set_handler(new)
        dispatcher.log(lambda: "after", LogLevel.INFO, None, None, "a.py", "f", 2)

        assert [record.message for record in old.records] == ["before"]
        assert [record.message for record in new.records] == ["after"]


class TestLazyMessage:
    """Message thunks are only realized by consuming handlers"""

    def test_disabled_handler_never_realizes_thunk(self):
        """With logging disabled the thunk is never called"""
        set_handler(None)
        thunk = CountingThunk()

        for _ in range(100):
            dispatcher.log(thunk, LogLevel.ERROR, "com.app", "Net", "a.py", "f", 1)

        assert thunk.calls == 0

    def test_thunk_passed_unevaluated(self):
        """The dispatcher hands over the thunk itself, the handler decides"""
        received = []

        def handler(message, level, subsystem, category, file, function, line):
            received.append(message)

        set_handler(handler)
        thunk = CountingThunk()
        dispatcher.log(thunk, LogLevel.INFO, None, None, "a.py", "f", 1)

        assert received == [thunk]
        assert thunk.calls == 0

    def test_handler_receives_exact_metadata(self):
        """Every field reaches the handler unchanged"""
        received = []

        def handler(message, level, subsystem, category, file, function, line):
            received.append((message(), level, subsystem, category, file, function, line))

        set_handler(handler)
        dispatcher.log(lambda: "value=5", LogLevel.WARNING, "com.app", "Net", "net.py", "fetch", 42)

        assert received == [("value=5", LogLevel.WARNING, "com.app", "Net", "net.py", "fetch", 42)]

    def test_handler_errors_propagate(self):
        """The dispatcher does not swallow handler exceptions"""

        def broken(message, level, subsystem, category, file, function, line):
            raise ValueError("backend down")

        set_handler(broken)
        with pytest.raises(ValueError, match="backend down"):
            dispatcher.log(lambda: "x", LogLevel.INFO, None, None, "a.py", "f", 1)


class TestDefaultSelection:
    """One-time lazy default handler selection"""

    def test_first_available_probe_wins(self):
        """Probes are consulted in order until one offers a handler"""
        consulted = []

        def unavailable():
            consulted.append("unavailable")
            return None

        def available():
            consulted.append("available")
            return _noop_handler

        def never():
            consulted.append("never")
            return _noop_handler

        assert select_default_handler((unavailable, available, never)) is _noop_handler
        assert consulted == ["unavailable", "available"]

    def test_no_probe_available_disables_logging(self):
        """Without any backend the dispatcher stays silent"""
        local = LogDispatcher(probes=(lambda: None, lambda: None))
        thunk = CountingThunk()

        local.log(thunk, LogLevel.INFO, None, None, "a.py", "f", 1)

        assert local.current_handler() is None
        assert thunk.calls == 0

    def test_current_handler_triggers_selection(self):
        """Querying the handler initializes the dispatcher like a log call"""
        local = LogDispatcher(probes=(lambda: _noop_handler,))
        assert local.current_handler() is _noop_handler

    def test_structlog_is_default_when_enabled(self, monkeypatch):
        """structlog is picked first when configuration enables it"""
        monkeypatch.setenv("LOGBRIDGE_STRUCTLOG_ENABLED", "true")
        assert isinstance(current_handler(), StructlogHandler)

    def test_console_is_never_selected_automatically(self, no_backends):
        """With both backends unavailable logging is disabled, not printed"""
        assert current_handler() is None

    def test_reset_allows_reselection(self):
        """reset forgets the handler so the next call selects again"""
        picks = []

        def probe():
            picks.append(1)
            return _noop_handler

        local = LogDispatcher(probes=(probe,))
        local.current_handler()
        local.reset()
        local.current_handler()

        assert len(picks) == 2

    def test_selection_runs_once_under_concurrent_first_calls(self):
        """Concurrent first calls share a single selection outcome"""
        counts = {"structured": 0, "platform": 0}
        counts_lock = threading.Lock()
        recorder = RecordingHandler()

        def structured_probe():
            with counts_lock:
                counts["structured"] += 1
            time.sleep(0.05)
            return None

        def platform_probe():
            with counts_lock:
                counts["platform"] += 1
            return recorder

        local = LogDispatcher(probes=(structured_probe, platform_probe))
        workers = 16
        barrier = threading.Barrier(workers)

        def worker(index: int) -> None:
            barrier.wait()
            local.log(lambda: f"message {index}", LogLevel.INFO, None, None, "a.py", "worker", index)

        threads = [threading.Thread(target=worker, args=(index,)) for index in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counts == {"structured": 1, "platform": 1}
        assert len(recorder.records) == workers
        assert sorted(record.message for record in recorder.records) == sorted(
            f"message {index}" for index in range(workers)
        )
        assert local.current_handler() is recorder
