"""
Isolated Counter Actor

Owns a non-negative integer count. Every increment, decrement and read is
a message through the actor mailbox, so mutations are never interleaved.
"""
import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from async_playground.domain.counter_events import (
    CounterSnapshot,
    UnderflowAttempted,
)
from async_playground.infrastructure.actors.base import BaseActor
from async_playground.infrastructure.actors.messages import (
    Decrement,
    GetCount,
    GetSnapshot,
    Increment,
)


logger = logging.getLogger(__name__)


class IsolatedCounter(BaseActor):
    """
    Counter whose state is only reachable through its mailbox.

    Decrementing at zero saturates: the count stays at zero, a warning is
    logged and an UnderflowAttempted event is recorded. Nothing is raised.

    Usage:
        counter = IsolatedCounter()
        await counter.start()
        await counter.increment()
        await counter.decrement()
        assert await counter.count() == 0
        await counter.stop()
    """

    def __init__(
        self,
        actor_id: Optional[str] = None,
        on_underflow: Optional[Callable[[UnderflowAttempted], None]] = None,
        ask_timeout: Optional[float] = 30.0,
        max_recent_underflows: int = 100,
    ):
        super().__init__(actor_id=actor_id)
        self._count = 0
        self._underflow_count = 0
        self._recent_underflows: Deque[UnderflowAttempted] = deque(
            maxlen=max_recent_underflows
        )
        self._on_underflow = on_underflow
        self._ask_timeout = ask_timeout

    @property
    def underflow_events(self) -> List[UnderflowAttempted]:
        """Most recent underflow diagnostics, oldest first (copy)."""
        return list(self._recent_underflows)

    @property
    def underflow_count(self) -> int:
        """Total underflows, including events no longer retained."""
        return self._underflow_count

    # Public async API

    async def increment(self) -> None:
        """Add one; returns once applied."""
        await self.ask(Increment(), timeout=self._ask_timeout)

    async def decrement(self) -> None:
        """Subtract one, clamped at zero; returns once applied."""
        await self.ask(Decrement(), timeout=self._ask_timeout)

    async def count(self) -> int:
        """Read the count through the mailbox."""
        return await self.ask(GetCount(), timeout=self._ask_timeout)

    async def snapshot(self) -> CounterSnapshot:
        """Read count and diagnostics together."""
        return await self.ask(GetSnapshot(), timeout=self._ask_timeout)

    # Handlers. No await between reading and writing _count.

    async def handle_increment(self, msg: Increment) -> int:
        self._count += 1
        return self._count

    async def handle_decrement(self, msg: Decrement) -> int:
        if self._count <= 0:
            self._record_underflow()
            return self._count
        self._count -= 1
        return self._count

    async def handle_get_count(self, msg: GetCount) -> int:
        return self._count

    async def handle_get_snapshot(self, msg: GetSnapshot) -> CounterSnapshot:
        return CounterSnapshot(
            count=self._count,
            underflow_count=self._underflow_count,
            processed=self.processed,
        )

    def _record_underflow(self) -> None:
        event = UnderflowAttempted(counter_id=self.actor_id)
        self._underflow_count += 1
        self._recent_underflows.append(event)
        logger.warning(
            f"Underflow attempted on {self.actor_id}: count is already 0",
            extra={"actor_id": self.actor_id},
        )
        if self._on_underflow is not None:
            try:
                self._on_underflow(event)
            except Exception:
                # Underflow stays non-fatal for the caller of decrement().
                logger.exception(f"on_underflow callback failed for {self.actor_id}")


class ChickenFeeder(IsolatedCounter):
    """Counts the chickens currently eating at the feeder."""

    food = "worms"

    def __init__(self, actor_id: Optional[str] = None, **kwargs):
        super().__init__(actor_id=actor_id or "chicken-feeder", **kwargs)

    async def chicken_starts_eating(self) -> None:
        await self.increment()

    async def chicken_stops_eating(self) -> None:
        await self.decrement()

    async def number_of_eating_chickens(self) -> int:
        return await self.count()

    def _record_underflow(self) -> None:
        logger.info("There are no chickens")
        super()._record_underflow()
