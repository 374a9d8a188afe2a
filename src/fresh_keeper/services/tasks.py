"""Cancellable background work for chat-completion calls."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class TaskScope:
    """Owns the in-flight API calls of one screen or session.

    Closing the scope cancels whatever is still running, so a torn-down
    caller never receives results or store writes from those calls.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    def spawn(self, coro: Coroutine[Any, Any, T]) -> "asyncio.Task[T]":
        """Schedule a coroutine on the running loop and track it."""
        if self._closed:
            coro.close()
            raise RuntimeError("TaskScope is closed")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def aclose(self) -> None:
        """Cancel pending tasks and wait for them to unwind."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            _logger.info("Cancelled %s in-flight tasks", len(tasks))
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "TaskScope":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.aclose()
