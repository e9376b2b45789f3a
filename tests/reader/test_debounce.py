"""Tests for the clock-driven debouncer."""

import pytest

from rsvp_reader.services.reader.debounce import Debouncer


@pytest.fixture
def calls():
    return []


@pytest.fixture
def debouncer(clock, calls) -> Debouncer:
    """Debouncer with a 1000 ms quiet period recording its calls."""
    return Debouncer(clock, 1000, lambda *args, **kwargs: calls.append((args, kwargs)))


class TestDebouncer:
    """Tests for collapsing bursts into one call."""

    def test_runs_after_quiet_period(self, debouncer, clock, calls):
        """The wrapped function runs once the delay has passed."""
        debouncer.call(1)

        clock.advance(999)
        assert calls == []
        clock.advance(1)
        assert calls == [((1,), {})]
        assert not debouncer.pending

    def test_burst_collapses_to_latest(self, debouncer, clock, calls):
        """Rapid calls restart the delay and keep only the last arguments."""
        for value in range(5):
            debouncer.call(value, key=value)
            clock.advance(500)

        assert calls == []
        clock.advance(500)
        assert calls == [((4,), {"key": 4})]

    def test_flush_runs_now(self, debouncer, clock, calls):
        """flush() runs a pending call immediately and only once."""
        debouncer.call("x")
        debouncer.flush()

        assert calls == [(("x",), {})]
        clock.advance(5000)
        assert len(calls) == 1

    def test_flush_without_pending_is_noop(self, debouncer, calls):
        """Nothing pending means nothing to flush."""
        debouncer.flush()

        assert calls == []

    def test_cancel_drops_call(self, debouncer, clock, calls):
        """cancel() forgets the pending call."""
        debouncer.call("x")
        debouncer.cancel()
        clock.advance(5000)

        assert calls == []
        assert clock.pending == 0
