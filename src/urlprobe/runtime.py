# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level urlprobe facade for batch probing."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Sequence
from typing import Any

from .config import ProbeSettings
from .http.client import HttpClient, create_default_http_client
from .models import BatchJob, ProbeResult, ProbeTarget
from .probe.executor import ProbeExecutor
from .probe.scheduler import BoundedScheduler

logger = logging.getLogger(__name__)


class BulkProber:
    """
    Convenience wrapper that wires one HTTP client across every probe of a batch.

    Each ``probe`` call is an independent batch; no state is carried between calls
    apart from the reusable client connection pool.
    """

    def __init__(self, settings: ProbeSettings | None = None, http_client: HttpClient | None = None):
        self.settings = (settings or ProbeSettings()).validate()
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.settings)

    async def probe(self, urls: Sequence[str | ProbeTarget] | Any) -> list[ProbeResult]:
        """Probe ``urls`` and return one result per kept input, in input order."""
        job = BatchJob.from_input(urls, self.settings)
        return await self.run_job(job)

    async def run_job(self, job: BatchJob) -> list[ProbeResult]:
        if job.dropped:
            logger.warning(
                "batch truncated to %d targets; %d dropped (max_batch_size=%d)",
                len(job.targets),
                job.dropped,
                job.settings.max_batch_size,
            )
        logger.info(
            "probing %d targets (concurrency=%d, timeout=%dms, mode=%s)",
            len(job.targets),
            job.concurrency_limit,
            job.timeout_ms,
            job.settings.schedule_mode.value,
        )
        executor = ProbeExecutor(self.http_client, job.settings)
        results = await BoundedScheduler(executor).run(job)
        tally = Counter(result.status.value for result in results)
        logger.info("batch complete: %s", ", ".join(f"{k}={v}" for k, v in sorted(tally.items())))
        return results

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> BulkProber:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


async def aprobe_batch(
    urls: Sequence[str | ProbeTarget] | Any,
    settings: ProbeSettings | None = None,
    *,
    http_client: HttpClient | None = None,
) -> list[ProbeResult]:
    """Async batch entrypoint. Input shape is validated before any client is created."""
    job = BatchJob.from_input(urls, settings)
    async with BulkProber(job.settings, http_client=http_client) as prober:
        return await prober.run_job(job)


def probe_batch(
    urls: Sequence[str | ProbeTarget] | Any,
    settings: ProbeSettings | None = None,
    *,
    http_client: HttpClient | None = None,
) -> list[ProbeResult]:
    """
    Synchronous batch entrypoint.

    Runs its own event loop, so it must not be called from inside a running loop;
    use ``aprobe_batch`` there.
    """
    job = BatchJob.from_input(urls, settings)

    async def _run() -> list[ProbeResult]:
        async with BulkProber(job.settings, http_client=http_client) as prober:
            return await prober.run_job(job)

    return asyncio.run(_run())


__all__ = ["BulkProber", "aprobe_batch", "probe_batch"]
