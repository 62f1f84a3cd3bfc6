"""
Counter Domain Events

Immutable (frozen dataclass) values produced by isolated counters.
"""
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class UnderflowAttempted:
    """
    Event: a decrement was requested while the count was already zero.

    The decrement is clamped, so this is a diagnostic, not a failure.
    """
    counter_id: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class CounterSnapshot:
    """Point-in-time view of a counter, read through its mailbox."""
    count: int
    underflow_count: int = 0
    processed: int = 0

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if self.underflow_count < 0:
            raise ValueError(
                f"underflow_count must be non-negative, got {self.underflow_count}"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return {
            "count": self.count,
            "underflow_count": self.underflow_count,
            "processed": self.processed,
        }
