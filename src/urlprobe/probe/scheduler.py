# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded fan-out of a batch over the single-probe executor."""

from __future__ import annotations

import asyncio
import logging

from ..config import ScheduleMode
from ..models import BatchJob, ProbeResult, ProbeStatus, ProbeTarget
from .aggregate import assemble_results
from .executor import ProbeExecutor

logger = logging.getLogger(__name__)


class BoundedScheduler:
    """
    Runs a BatchJob with at most ``concurrency_limit`` probes in flight.

    WINDOWED admits fixed-size windows and waits for each to finish before the next;
    SLIDING admits a new probe whenever a slot frees. Results are written into
    pre-allocated slots by input index, so completion order never affects output order.
    """

    def __init__(self, executor: ProbeExecutor):
        self.executor = executor

    async def run(self, job: BatchJob) -> list[ProbeResult]:
        slots: list[ProbeResult | None] = [None] * len(job.targets)

        if job.settings.schedule_mode == ScheduleMode.SLIDING:
            semaphore = asyncio.Semaphore(job.concurrency_limit)

            async def guarded(index: int, target: ProbeTarget) -> None:
                async with semaphore:
                    await self._run_slot(slots, index, target)

            await asyncio.gather(*(guarded(index, target) for index, target in enumerate(job.targets)))
        else:
            for number, window in enumerate(job.windows()):
                logger.debug("window %d: probing %d targets", number, len(window))
                await asyncio.gather(*(self._run_slot(slots, index, target) for index, target in window))

        return assemble_results(slots)

    async def _run_slot(self, slots: list[ProbeResult | None], index: int, target: ProbeTarget) -> None:
        try:
            slots[index] = await self.executor.run(target)
        except Exception as exc:  # noqa: BLE001
            logger.exception("probe %d (%s) failed unexpectedly", index, target.display_url)
            slots[index] = ProbeResult(
                url=target.display_url,
                status=ProbeStatus.DOWN,
                http_status=None,
                details=f"Internal error during probe: {type(exc).__name__}",
            )


__all__ = ["BoundedScheduler"]
