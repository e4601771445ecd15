"""
app/core/background.py

Purpose: Fire-and-forget execution

- Detached tasks with strong references and internal error capture
- Timeout race that never cancels the underlying call
- Drain on shutdown
"""

import asyncio
from typing import Any, Awaitable, Optional, Set

from app.core.logging import get_logger

logger = get_logger(__name__)


class BackgroundTaskRunner:
    """
    Runs coroutines without the caller awaiting them.

    Every task is referenced until it finishes and its exception, if any,
    is logged in a done callback, so nothing escapes to the event loop.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def spawn(self, coro: Awaitable[Any], name: str = "background") -> asyncio.Task:
        """
        Schedules a coroutine on the running loop and returns immediately.

        Args:
            coro: Coroutine to run
            name: Label used in logs

        Returns:
            The created task
        """
        task = asyncio.ensure_future(coro)
        task.set_name(name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task):
        self._tasks.discard(task)

        if task.cancelled():
            logger.debug(f"Background task cancelled: {task.get_name()}")
            return

        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Background task failed: {task.get_name()}: {exc}",
                exc_info=(type(exc), exc, exc.__traceback__)
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout: Optional[float] = None) -> int:
        """
        Waits for in-flight tasks, including ones spawned while waiting.

        Args:
            timeout: Give up after this many seconds (None waits forever)

        Returns:
            Number of tasks still pending when the wait ended
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        while self._tasks:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                break
            await asyncio.wait(set(self._tasks), timeout=remaining)

        if self._tasks:
            logger.warning(f"{len(self._tasks)} background task(s) still running after drain")
        return len(self._tasks)


async def run_with_timeout(coro: Awaitable[Any], seconds: float, label: str = "operation") -> Any:
    """
    Races a call against a timer.

    The timer only stops the caller from waiting: the call itself keeps
    running, and a failure it raises after the caller gave up is logged.

    Raises:
        asyncio.TimeoutError: If the call did not settle in time
    """
    task = asyncio.ensure_future(coro)

    try:
        return await asyncio.wait_for(asyncio.shield(task), timeout=seconds)
    except asyncio.TimeoutError:
        task.add_done_callback(lambda t: _log_late_result(t, label))
        raise


def _log_late_result(task: asyncio.Task, label: str):
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning(f"{label} failed after its timeout: {exc}")
    else:
        logger.debug(f"{label} completed after its timeout")
