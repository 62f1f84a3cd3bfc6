"""
Domain layer for the async playground.

Immutable events and value objects emitted by the counter actors.
"""
from .counter_events import CounterSnapshot, UnderflowAttempted

__all__ = [
    "CounterSnapshot",
    "UnderflowAttempted",
]
