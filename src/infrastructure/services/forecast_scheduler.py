"""
Daily forecast scheduler.

Runs ``ComputeForecastUseCase.compute_all`` once a day at a configured
local time of day, inside the running event loop.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, time, timedelta
from typing import Callable, Optional

import structlog

from src.application.use_cases.compute_forecast_use_case import (
    ComputeForecastUseCase,
)

logger = structlog.get_logger(__name__)


class ForecastScheduler:
    """Background task that recomputes every forecast once per day."""

    def __init__(
        self,
        compute_forecast_use_case: ComputeForecastUseCase,
        execution_time: time = time(0, 0),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._use_case = compute_forecast_use_case
        self._execution_time = execution_time
        self._clock = clock
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the daily loop. Calling it again while running is a no-op."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run_forever())
        logger.info(
            "scheduler.started", execution_time=self._execution_time.isoformat()
        )

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("scheduler.stopped")

    def seconds_until_next_run(self, now: Optional[datetime] = None) -> float:
        now = now or self._clock()
        scheduled = datetime.combine(now.date(), self._execution_time, now.tzinfo)
        if now >= scheduled:
            scheduled += timedelta(days=1)
        return (scheduled - now).total_seconds()

    async def run_once(self) -> None:
        """Run a single computation, logging any failure instead of raising it."""
        try:
            forecasts = await self._use_case.compute_all()
        except Exception as exc:
            logger.error(
                "scheduler.run.failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return
        logger.info("scheduler.run.completed", forecasts=len(forecasts))

    async def _run_forever(self) -> None:
        while True:
            delay = self.seconds_until_next_run()
            logger.debug("scheduler.sleep", seconds=delay)
            if delay > 0:
                await asyncio.sleep(delay)
            await self.run_once()
