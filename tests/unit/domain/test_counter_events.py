"""
Tests for counter domain events and snapshot.
"""
import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime

from async_playground.domain import CounterSnapshot, UnderflowAttempted


class TestCounterSnapshot:
    """Tests for CounterSnapshot value object."""

    def test_defaults(self):
        snapshot = CounterSnapshot(count=3)
        assert snapshot.count == 3
        assert snapshot.underflow_count == 0
        assert snapshot.processed == 0

    def test_rejects_negative_count(self):
        """A snapshot can never hold a negative count."""
        with pytest.raises(ValueError):
            CounterSnapshot(count=-1)

    def test_rejects_negative_underflow_count(self):
        with pytest.raises(ValueError):
            CounterSnapshot(count=0, underflow_count=-2)

    def test_to_dict(self):
        snapshot = CounterSnapshot(count=1, underflow_count=2, processed=5)
        assert snapshot.to_dict() == {
            "count": 1,
            "underflow_count": 2,
            "processed": 5,
        }

    def test_is_frozen(self):
        snapshot = CounterSnapshot(count=1)
        with pytest.raises(FrozenInstanceError):
            snapshot.count = 2


class TestUnderflowAttempted:
    """Tests for UnderflowAttempted event."""

    def test_has_counter_id_and_timestamp(self):
        event = UnderflowAttempted(counter_id="feeder")
        assert event.counter_id == "feeder"
        assert isinstance(event.timestamp, datetime)

    def test_is_frozen(self):
        event = UnderflowAttempted(counter_id="feeder")
        with pytest.raises(FrozenInstanceError):
            event.counter_id = "other"
