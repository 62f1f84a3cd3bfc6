"""
Playground Demos

Use cases that exercise the concurrency primitives: the isolated counter,
sequential vs. concurrent fan-out, task groups, cancellation, continuations,
context inheritance and task retention.
"""
import asyncio
import contextvars
import gc
import logging
import threading
import time
import weakref
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from async_playground.domain.counter_events import CounterSnapshot
from async_playground.infrastructure.actors.counter_actor import (
    ChickenFeeder,
    IsolatedCounter,
)
from async_playground.infrastructure.continuations import with_callback


logger = logging.getLogger(__name__)


@dataclass
class FanOutResult:
    """Results of the three fan-out strategies for the same width."""
    sequential: List[str] = field(default_factory=list)
    concurrent: List[str] = field(default_factory=list)
    task_group: List[str] = field(default_factory=list)


@dataclass
class ContextInheritanceResult:
    """What each kind of task saw of the caller's request_label."""
    caller: str
    inherited: str
    detached: str
    caller_after_child_set: str


@dataclass
class RetentionResult:
    """Whether the task owner survived its last external reference."""
    alive_while_running: bool
    alive_after_finish: bool
    text: str


# Set per request; tasks created normally see the creator's value.
request_label: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_label", default="unset"
)


# ============ ACTOR ============

async def run_feeder_scenario(feeder: ChickenFeeder) -> CounterSnapshot:
    """
    Three chickens start and three stop eating, all at once.

    Every start is matched by a stop, so the feeder ends at zero whatever
    the interleaving.
    """
    await asyncio.gather(
        feeder.chicken_starts_eating(),
        feeder.chicken_stops_eating(),
        feeder.chicken_starts_eating(),
        feeder.chicken_stops_eating(),
        feeder.chicken_starts_eating(),
        feeder.chicken_stops_eating(),
    )
    snapshot = await feeder.snapshot()
    logger.info(f"Feeder ({feeder.food}) settled at {snapshot.count} eating chickens")
    return snapshot


async def run_underflow_scenario(counter: IsolatedCounter) -> CounterSnapshot:
    """Decrement a counter that starts at zero; it stays at zero."""
    await counter.decrement()
    return await counter.snapshot()


# ============ FAN-OUT ============

async def print_index(index: int) -> str:
    logger.info(f"{index}")
    return str(index)


async def run_sequential(width: int) -> List[str]:
    """Await each call before issuing the next."""
    return [await print_index(index) for index in range(1, width + 1)]


async def run_concurrent(width: int) -> List[str]:
    """Issue every call at once; results keep call order."""
    results = await asyncio.gather(*(print_index(index) for index in range(1, width + 1)))
    return list(results)


async def run_task_group(width: int) -> List[str]:
    """Run calls in a TaskGroup; results are in completion order."""
    results: List[str] = []

    async def collect(index: int) -> None:
        results.append(await print_index(index))

    async with asyncio.TaskGroup() as group:
        for index in range(1, width + 1):
            group.create_task(collect(index))

    return results


async def run_fan_out(width: int) -> FanOutResult:
    if width < 1:
        raise ValueError(f"width must be at least 1, got {width}")

    return FanOutResult(
        sequential=await run_sequential(width),
        concurrent=await run_concurrent(width),
        task_group=await run_task_group(width),
    )


# ============ CANCELLATION ============

async def perform_long_running_task(seconds: float) -> None:
    await asyncio.sleep(seconds)


async def run_cancelled_long_task(seconds: float = 5.0) -> str:
    """
    Start a long task and cancel it right away.

    Returns:
        "cancelled" if the cancellation landed, "completed" otherwise
    """
    long_task = asyncio.create_task(perform_long_running_task(seconds))
    long_task.cancel()

    try:
        await long_task
    except asyncio.CancelledError:
        current = asyncio.current_task()
        if current is not None and current.cancelling():
            # We were cancelled ourselves, not just the long task.
            raise
        logger.info("Task cancelled")
        return "cancelled"

    logger.info("Done from long running task")
    return "completed"


# ============ CONTINUATION ============

def legacy_greeting_service(
    name: str,
    callback: Callable[[Optional[str], Optional[BaseException]], None],
    delay: float = 0.05,
) -> None:
    """
    Callback-style API: answers on a worker thread after delay.

    callback(result, None) on success, callback(None, error) on failure.
    """
    def work() -> None:
        time.sleep(delay)
        if not name:
            callback(None, ValueError("name must not be empty"))
            return
        callback(f"Hello {name} from {threading.current_thread().name}", None)

    threading.Thread(target=work, name="legacy-worker", daemon=True).start()


async def run_continuation_demo(name: str = "world", timeout: Optional[float] = 5.0) -> str:
    """Await legacy_greeting_service through a one-shot continuation."""
    greeting = await with_callback(legacy_greeting_service, name, timeout=timeout)
    logger.info(greeting)
    return greeting


# ============ CONTEXT INHERITANCE ============

async def read_request_label() -> str:
    return request_label.get()


async def relabel(value: str) -> str:
    request_label.set(value)
    return request_label.get()


async def run_context_inheritance(label: str = "main") -> ContextInheritanceResult:
    """
    Compare a task that copies the caller's context with one that starts
    from an empty context.

    create_task() snapshots the current context, so the child reads the
    caller's label and its own writes stay in its copy. A task given a
    fresh contextvars.Context() sees only defaults.
    """
    token = request_label.set(label)
    try:
        inherited = await asyncio.create_task(read_request_label())
        detached = await asyncio.create_task(
            read_request_label(),
            context=contextvars.Context(),
        )
        await asyncio.create_task(relabel(f"{label}-child"))
        result = ContextInheritanceResult(
            caller=label,
            inherited=inherited,
            detached=detached,
            caller_after_child_set=request_label.get(),
        )
    finally:
        request_label.reset(token)

    logger.info(
        f"Inherited task saw {result.inherited!r}, detached task saw {result.detached!r}"
    )
    return result


# ============ TASK RETENTION ============

class DataManager:
    async def get_text(self, duration: float = 3.0) -> str:
        await asyncio.sleep(duration)
        return "Hello world from data manager"


class TextOwner:
    """Starts a task that writes back into the owner when it finishes."""

    def __init__(self) -> None:
        self.data_manager = DataManager()
        self.text = ""

    def perform_task(self, duration: float) -> "asyncio.Task[str]":
        async def update() -> str:
            self.text = await self.data_manager.get_text(duration)
            return self.text

        return asyncio.create_task(update())


async def run_task_retention(duration: float = 0.05) -> RetentionResult:
    """
    Drop the only reference to an owner while its task is running.

    The running coroutine holds the owner, so it outlives the caller's
    reference and is released only once the task has finished.
    """
    owner = TextOwner()
    owner_ref = weakref.ref(owner)
    weakref.finalize(owner, logger.info, "Owner is gone")

    task = owner.perform_task(duration)
    del owner
    await asyncio.sleep(0)
    gc.collect()
    alive_while_running = owner_ref() is not None

    text = await task
    del task
    gc.collect()
    alive_after_finish = owner_ref() is not None

    return RetentionResult(
        alive_while_running=alive_while_running,
        alive_after_finish=alive_after_finish,
        text=text,
    )
