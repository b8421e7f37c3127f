"""
Cooperative Scheduler
=====================

Everything runs on one asyncio loop: explorer callbacks, manifest calls and
recursive walks. Long work is split into tasks that yield back to the loop
between steps so the host stays responsive.
"""

import asyncio
import logging
from collections.abc import Coroutine

from projsync.errors import SchedulingFailure

logger = logging.getLogger(__name__)


class CooperativeScheduler:
    """Spawns and tracks background tasks on the host's event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """Initialize the scheduler.

        Args:
            loop: Event loop to use; defaults to the running loop at first use
        """
        self._loop = loop
        self._tasks: set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending(self) -> int:
        """Number of tracked tasks that have not finished yet."""
        return sum(1 for task in self._tasks if not task.done())

    def spawn(self, coroutine: Coroutine, name: str | None = None) -> asyncio.Task:
        """
        Start ``coroutine`` as a tracked task.

        Args:
            coroutine: Work to run
            name: Optional task name used in logs

        Returns:
            asyncio.Task: The created task

        Raises:
            SchedulingFailure: No loop was given and none is running; the
                coroutine is closed without running
        """
        try:
            loop = self.loop
        except RuntimeError as e:
            coroutine.close()
            raise SchedulingFailure(name or coroutine.__qualname__, str(e)) from e
        task = loop.create_task(coroutine, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        return task

    def _forget(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug(f"Task {task.get_name()} cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Task {task.get_name()} failed: {error}", exc_info=error)

    async def drain(self) -> None:
        """Wait until every tracked task, including ones spawned meanwhile, is done."""
        while True:
            tasks = [task for task in self._tasks if not task.done()]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    def cancel_all(self) -> None:
        """Stop resuming every tracked task."""
        for task in list(self._tasks):
            task.cancel()
