"""
Base Actor

Base class for playground actors.
Implements the Actor Model pattern with message passing: a single task
consumes the mailbox, so handlers never run concurrently on one actor.
"""
import asyncio
import concurrent.futures
import logging
import re
import uuid
from abc import ABC
from typing import Any, Optional

from async_playground.infrastructure.errors import (
    ActorNotRunningError,
    UnhandledMessageError,
)


logger = logging.getLogger(__name__)

# Poison pill; breaks the mailbox loop once everything before it is handled.
_STOP = object()


class BaseActor(ABC):
    """
    Base class for actors.

    Features:
    - Async message processing via mailbox
    - tell() for fire-and-forget messages
    - ask() for request-response patterns
    - submit_threadsafe() for callers on other threads
    - Lifecycle hooks (on_start, on_stop)
    """

    def __init__(self, actor_id: Optional[str] = None):
        self._actor_id = actor_id or f"actor-{uuid.uuid4().hex[:8]}"
        self._running = False
        self._mailbox: asyncio.Queue = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._processed = 0

    @property
    def actor_id(self) -> str:
        """Get actor ID."""
        return self._actor_id

    @property
    def is_running(self) -> bool:
        """Check if actor is running."""
        return self._running

    @property
    def processed(self) -> int:
        """Number of messages taken off the mailbox and handled."""
        return self._processed

    async def start(self) -> None:
        """Start the actor."""
        if self._running:
            return

        self._loop = asyncio.get_running_loop()
        self._running = True
        self._task = asyncio.create_task(self._process_mailbox())
        await self.on_start()
        logger.debug(f"Actor {self._actor_id} started")

    async def stop(self) -> None:
        """
        Stop the actor.

        Messages admitted before the call are still handled; the consumer
        exits when it reaches the poison pill.
        """
        if not self._running:
            return

        self._running = False
        await self._mailbox.put((_STOP, None))

        if self._task:
            # A cancelled stop() must not cancel the consumer before the pill.
            await asyncio.shield(self._task)
            self._task = None

        await self.on_stop()
        logger.debug(f"Actor {self._actor_id} stopped")

    async def on_start(self) -> None:
        """Hook called during start. Override in subclasses."""
        pass

    async def on_stop(self) -> None:
        """Hook called during stop. Override in subclasses."""
        pass

    def _ensure_running(self, message: Any) -> None:
        if not self._running:
            raise ActorNotRunningError(
                f"Actor {self._actor_id} is not running; "
                f"cannot deliver {type(message).__name__}",
                actor_id=self._actor_id,
            )

    async def tell(self, message: Any) -> None:
        """
        Send message without waiting for response (fire-and-forget).

        Args:
            message: The message to send

        Raises:
            ActorNotRunningError: If the actor is not started
        """
        self._ensure_running(message)
        await self._mailbox.put((message, None))

    async def ask(self, message: Any, timeout: Optional[float] = 30.0) -> Any:
        """
        Send message and wait for response.

        Once admitted to the mailbox the message is handled even if the
        caller times out or is cancelled.

        Args:
            message: The message to send
            timeout: Timeout in seconds, None to wait indefinitely

        Returns:
            Response from handler

        Raises:
            ActorNotRunningError: If the actor is not started
            asyncio.TimeoutError: If timeout exceeded
        """
        self._ensure_running(message)
        response_future: asyncio.Future = asyncio.get_running_loop().create_future()
        await self._mailbox.put((message, response_future))
        return await asyncio.wait_for(response_future, timeout)

    def submit_threadsafe(
        self,
        message: Any,
        timeout: Optional[float] = 30.0,
    ) -> concurrent.futures.Future:
        """
        Ask from a thread that is not running the actor's event loop.

        Returns:
            concurrent.futures.Future resolved with the handler result
        """
        if self._loop is None or not self._running:
            raise ActorNotRunningError(
                f"Actor {self._actor_id} is not running",
                actor_id=self._actor_id,
            )
        return asyncio.run_coroutine_threadsafe(
            self.ask(message, timeout=timeout),
            self._loop,
        )

    async def receive(self, message: Any) -> Any:
        """
        Process a received message.

        Args:
            message: The message to process

        Returns:
            Optional response

        Raises:
            UnhandledMessageError: If no handler exists for the message type
        """
        handler_name = self._get_handler_name(message)
        handler = getattr(self, handler_name, None)

        if handler is None:
            logger.warning(f"No handler for {type(message).__name__} in {self._actor_id}")
            raise UnhandledMessageError(
                f"{self._actor_id} cannot handle {type(message).__name__}",
                message_type=type(message).__name__,
            )
        return await handler(message)

    def _get_handler_name(self, message: Any) -> str:
        """Get handler method name for message type."""
        class_name = type(message).__name__
        # GetSnapshot -> get_snapshot, HTTPPing -> http_ping
        snake_case = re.sub(
            r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])',
            '_',
            class_name
        ).lower()
        return f"handle_{snake_case}"

    async def _process_mailbox(self) -> None:
        """Process messages from mailbox, one at a time."""
        while True:
            message, future = await self._mailbox.get()
            if message is _STOP:
                break

            try:
                result = await self.receive(message)
            except Exception as e:
                logger.error(f"Error handling {type(message).__name__} in {self._actor_id}: {e}")
                if future is not None and not future.done():
                    future.set_exception(e)
                continue
            finally:
                self._processed += 1

            if future is not None and not future.done():
                future.set_result(result)
