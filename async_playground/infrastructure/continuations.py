"""
Continuations: bridge callback-style APIs into awaitables.

A Continuation is a one-shot handle to a suspended awaiter. It may be
resumed from any thread, and exactly once; a second resume raises
ContinuationMisuseError.

Usage:
    def legacy_fetch(key, callback):
        ...  # eventually: callback(result, None) or callback(None, error)

    value = await with_callback(legacy_fetch, "key")
"""
import asyncio
import logging
import threading
from typing import Any, Callable, Optional

from async_playground.infrastructure.errors import ContinuationMisuseError


logger = logging.getLogger(__name__)


class Continuation:
    """One-shot resumption handle bound to an asyncio future."""

    def __init__(self, future: asyncio.Future, loop: asyncio.AbstractEventLoop):
        self._future = future
        self._loop = loop
        self._resumed = False
        self._lock = threading.Lock()

    @property
    def resumed(self) -> bool:
        return self._resumed

    def _claim(self) -> None:
        with self._lock:
            if self._resumed:
                raise ContinuationMisuseError("Continuation resumed more than once")
            self._resumed = True

    def resume(self, value: Any = None) -> None:
        """Resume the awaiter with a value."""
        self._claim()
        self._loop.call_soon_threadsafe(self._set_result, value)

    def resume_with_error(self, error: BaseException) -> None:
        """Resume the awaiter by raising error."""
        self._claim()
        self._loop.call_soon_threadsafe(self._set_exception, error)

    def _set_result(self, value: Any) -> None:
        if not self._future.done():
            self._future.set_result(value)

    def _set_exception(self, error: BaseException) -> None:
        if not self._future.done():
            self._future.set_exception(error)


async def with_continuation(
    register: Callable[[Continuation], None],
    timeout: Optional[float] = None,
) -> Any:
    """
    Suspend until the continuation passed to register is resumed.

    Args:
        register: Called synchronously with the Continuation
        timeout: Seconds to wait, None to wait indefinitely

    Returns:
        The value passed to resume()

    Raises:
        Whatever was passed to resume_with_error()
        asyncio.TimeoutError: If timeout exceeded
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()
    continuation = Continuation(future, loop)
    register(continuation)
    return await asyncio.wait_for(future, timeout)


async def with_callback(
    func: Callable[..., Any],
    *args: Any,
    timeout: Optional[float] = None,
) -> Any:
    """
    Await func(*args, callback) where callback(result, error) is called once.

    A non-None error is raised; otherwise result is returned.
    """
    def register(continuation: Continuation) -> None:
        def callback(result: Any = None, error: Optional[BaseException] = None) -> None:
            if error is not None:
                continuation.resume_with_error(error)
            else:
                continuation.resume(result)

        func(*args, callback)

    logger.debug(f"Awaiting callback from {getattr(func, '__name__', func)!r}")
    return await with_continuation(register, timeout=timeout)
