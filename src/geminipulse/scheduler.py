"""Named periodic tasks on the running asyncio loop."""

import asyncio
from collections.abc import Callable

from geminipulse.logging import logger


class Scheduler:
    """
    ⏲️ Owns the repeating timers that drive the dashboard.

    Callbacks are plain synchronous functions run on the event loop, so they
    never interleave with each other. The host must call `shutdown()` on
    teardown so no periodic work outlives the state it mutates.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}

    @property
    def names(self) -> list[str]:
        return sorted(self._tasks)

    def every(self, name: str, interval: float, callback: Callable[[], None]) -> None:
        """
        Run `callback` every `interval` seconds until cancelled.

        Registering an existing name replaces the previous task.
        """
        self.cancel(name)
        self._tasks[name] = asyncio.get_running_loop().create_task(
            self._run(name, interval, callback), name=f"geminipulse:{name}"
        )
        logger.debug(
            "Scheduled task name={name} interval={interval}",
            name=name,
            interval=interval,
        )

    async def _run(self, name: str, interval: float, callback: Callable[[], None]) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                callback()
            except Exception:
                logger.exception("Periodic task failed name={name}", name=name)

    def cancel(self, name: str) -> bool:
        task = self._tasks.pop(name, None)
        if task is None:
            return False
        task.cancel()
        return True

    async def shutdown(self) -> None:
        """Cancel every task and wait for them to finish."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.debug("Scheduler stopped tasks={count}", count=len(tasks))
