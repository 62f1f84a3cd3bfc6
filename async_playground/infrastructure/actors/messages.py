"""
Typed actor messages for the counter actors.

Convention:
- Commands: imperative verbs (Increment, Decrement)
- Queries: Get* (GetCount, GetSnapshot)
- All messages are frozen dataclasses
"""
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4


def _generate_correlation_id() -> str:
    """Generate a unique correlation ID for message tracking."""
    return str(uuid4())


def _now() -> datetime:
    """Generate current timestamp."""
    return datetime.now()


# ============ BASE ============

@dataclass(frozen=True)
class ActorMessage:
    """
    Base class for all typed actor messages.

    Provides automatic correlation_id and timestamp for tracking.
    """
    correlation_id: str = field(default_factory=_generate_correlation_id)
    timestamp: datetime = field(default_factory=_now)


# ============ COMMANDS ============

@dataclass(frozen=True)
class Increment(ActorMessage):
    """Command: add one to the counter."""


@dataclass(frozen=True)
class Decrement(ActorMessage):
    """
    Command: subtract one from the counter.

    Clamped at zero: a decrement at zero is recorded as an underflow.
    """


# ============ QUERIES ============

@dataclass(frozen=True)
class GetCount(ActorMessage):
    """Query: current count."""


@dataclass(frozen=True)
class GetSnapshot(ActorMessage):
    """Query: count plus diagnostics as a CounterSnapshot."""
