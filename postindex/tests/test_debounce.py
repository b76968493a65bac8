"""Tests for Debouncer, driven by a fake clock."""

from postindex.services.debounce import Debouncer


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_fires_after_quiet_period():
    clock = FakeClock()
    calls = []
    d = Debouncer(1.0, clock)
    d.submit(calls.append, "a")
    clock.advance(0.5)
    assert not d.poll()
    clock.advance(0.5)
    assert d.poll()
    assert calls == ["a"]
    assert not d.pending


def test_rapid_submits_coalesce_to_last():
    clock = FakeClock()
    calls = []
    d = Debouncer(1.0, clock)
    for text in ["v", "ve", "vec"]:
        d.submit(calls.append, text)
        clock.advance(0.5)
        assert not d.poll()
    assert calls == []
    clock.advance(0.5)
    assert d.poll()
    assert calls == ["vec"]


def test_each_submit_reschedules():
    clock = FakeClock()
    d = Debouncer(1.0, clock)
    d.submit(print, "x")
    assert d.due_at == 1.0
    clock.advance(0.75)
    d.submit(print, "y")
    assert d.due_at == 1.75


def test_cancel_drops_pending_call():
    calls = []
    d = Debouncer(1.0, FakeClock())
    d.submit(calls.append, "a")
    d.cancel()
    assert not d.flush()
    assert calls == []
    assert d.due_at is None


def test_flush_fires_immediately():
    calls = []
    d = Debouncer(10, FakeClock())
    d.submit(calls.append, "a")
    assert d.flush()
    assert calls == ["a"]
    assert not d.poll()


def test_explicit_timestamps_override_clock():
    calls = []
    d = Debouncer(0.125, FakeClock())
    d.submit(calls.append, "a", now=5.0)
    assert not d.poll(now=5.0625)
    assert d.poll(now=5.25)
    assert calls == ["a"]
