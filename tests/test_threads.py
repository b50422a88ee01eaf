from __future__ import annotations

from plainqr.threads import shutdown_thread


class FakeThread:
    def __init__(self, running=True, stops=True):
        self.running = running
        self.stops = stops
        self.calls = []

    def isRunning(self):
        return self.running

    def quit(self):
        self.calls.append("quit")

    def wait(self, timeout=None):
        self.calls.append(("wait", timeout))
        if timeout is None or self.stops:
            self.running = False
            return True
        return False

    def terminate(self):
        self.calls.append("terminate")


def test_idle_thread_is_left_alone():
    thread = FakeThread(running=False)

    assert shutdown_thread(thread)
    assert shutdown_thread(None)
    assert thread.calls == []


def test_cooperative_thread_is_joined():
    thread = FakeThread()

    assert shutdown_thread(thread, timeout_ms=200)
    assert thread.calls == ["quit", ("wait", 200)]


def test_stuck_thread_is_terminated_and_joined():
    thread = FakeThread(stops=False)

    assert not shutdown_thread(thread, timeout_ms=200)
    assert thread.calls == ["quit", ("wait", 200), "terminate", ("wait", None)]
    assert not thread.running
