"""One-shot cancellable timer on the asyncio event loop."""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class CancellableTimer:
    """
    Runs a coroutine callback once after a delay unless cancelled first.

    A timer holds at most one pending callback; arming it again replaces the
    previous one.
    """

    def __init__(self, name: str = "timer"):
        self.name = name
        self._task: asyncio.Task | None = None

    @property
    def is_armed(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        """
        Schedule callback to run after delay seconds.

        Must be called from within a running event loop.
        """
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(delay, callback), name=self.name)

    async def _run(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(delay)
        # Disarm before firing so a cancel() from inside the callback is a no-op.
        self._task = None
        try:
            await callback()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"{self.name} callback failed: {e}")

    def cancel(self) -> None:
        """Cancel the pending callback. Safe to call any number of times."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
