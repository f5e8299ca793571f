"""
Interval scheduler that re-runs a pass and never lets two passes overlap.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from rich.markup import escape

from ytsub.utils.formatting import format_duration
from ytsub.utils.structured_logger import PassLogger

log = logging.getLogger(__name__)


class SchedulerState(Enum):
    """States of the scheduler."""

    IDLE = "idle"
    RUNNING = "running"  # A pass is in flight


class Scheduler:
    """
    Runs a pass once, or every `interval_seconds` when an interval is set.

    The timer does not wait for the previous pass. A tick that fires while a
    pass is still running is skipped outright (no queuing, no catch-up).
    """

    def __init__(
        self,
        run_pass: Callable[[], Awaitable[Any]],
        interval_seconds: float | None = None,
        events: PassLogger | None = None,
    ):
        """
        Args:
            run_pass: Coroutine function executing one full pass.
            interval_seconds: Seconds between ticks, or None for a single pass.
            events: Optional structured event logger.
        """
        self.run_pass = run_pass
        self.interval_seconds = interval_seconds
        self.events = events or PassLogger()

        self._state = SchedulerState.IDLE
        self._stopping = asyncio.Event()
        self._tasks: set[asyncio.Task] = set()

        self.passes_completed = 0
        self.passes_failed = 0
        self.passes_skipped = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def running(self) -> bool:
        """True while a pass is in flight."""
        return self._state is SchedulerState.RUNNING

    async def tick(self) -> bool:
        """
        Starts a pass unless one is already running.

        Any error raised by the pass is logged here and the running flag is
        always released.

        Returns:
            False if the tick was skipped, True if a pass ran.
        """
        if self.running:
            self.passes_skipped += 1
            log.warning(
                "[yellow]⚠ Previous pass is still running. Skipping this run.[/yellow]"
            )
            self.events.pass_skipped(self.interval_seconds)
            return False

        self._state = SchedulerState.RUNNING
        try:
            await self.run_pass()
            self.passes_completed += 1
        except Exception as e:
            self.passes_failed += 1
            log.error(f"[red]✗ Pass failed: {escape(str(e))}[/red]")
            log.debug("Full traceback:", exc_info=True)
            self.events.pass_failed(str(e))
        finally:
            self._state = SchedulerState.IDLE
        return True

    async def run(self) -> None:
        """
        Runs a single pass, or keeps ticking on the interval until `stop()` is
        called. The first tick fires immediately.
        """
        if not self.interval_seconds:
            await self.tick()
            return

        log.info(f"Running every [cyan]{format_duration(self.interval_seconds)}[/cyan].")
        self._stopping.clear()
        while not self._stopping.is_set():
            task = asyncio.create_task(self.tick())
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

        # Let the in-flight pass finish; passes are never cut short.
        if self._tasks:
            await asyncio.gather(*self._tasks)
        log.debug("Scheduler stopped.")

    def stop(self) -> None:
        """Stops the timer loop. The pass in flight, if any, runs to completion."""
        self._stopping.set()
