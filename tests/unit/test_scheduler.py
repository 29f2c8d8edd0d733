# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import httpx
import pytest

from urlprobe.config import ProbeSettings, ScheduleMode
from urlprobe.http.adapters import StubHttpClient
from urlprobe.http.httpx_client import HttpxClient
from urlprobe.http.models import HttpRequest, HttpResponse
from urlprobe.models import BatchJob, ProbeStatus
from urlprobe.probe.executor import ProbeExecutor
from urlprobe.probe.scheduler import BoundedScheduler


def _urls(count: int) -> list[str]:
    return [f"https://site{i}.example" for i in range(count)]


def _run_batch(client, urls, **settings_kwargs):
    job = BatchJob.from_input(urls, ProbeSettings(**settings_kwargs))
    scheduler = BoundedScheduler(ProbeExecutor(client, job.settings))
    return asyncio.run(scheduler.run(job))


@pytest.mark.parametrize("mode", [ScheduleMode.WINDOWED, ScheduleMode.SLIDING])
def test_never_exceeds_concurrency_limit(mode):
    urls = _urls(25)
    stub = StubHttpClient({url: HttpResponse(ok=True, status_code=200) for url in urls}, delay=0.01)

    results = _run_batch(stub, urls, concurrency_limit=10, schedule_mode=mode)

    assert len(results) == 25
    assert stub.max_in_flight == 10
    assert all(result.status == ProbeStatus.UP for result in results)


def test_output_order_matches_input_despite_completion_order():
    urls = _urls(12)
    completed = []

    def responder(position: int):
        async def _respond(request: HttpRequest) -> HttpResponse:
            # Later inputs finish first.
            await asyncio.sleep(0.002 * (len(urls) - position))
            completed.append(request.url)
            return HttpResponse(ok=True, status_code=200 + position)

        return _respond

    stub = StubHttpClient({url: responder(i) for i, url in enumerate(urls)})
    results = _run_batch(stub, urls, concurrency_limit=5)

    assert [result.url for result in results] == urls
    assert [result.http_status for result in results] == [200 + i for i in range(12)]
    assert completed != urls


def test_windowed_mode_waits_for_whole_window():
    events = []

    def responder(name: str, delay: float):
        async def _respond(request: HttpRequest) -> HttpResponse:  # noqa: ARG001
            events.append(("start", name))
            await asyncio.sleep(delay)
            events.append(("end", name))
            return HttpResponse(ok=True, status_code=200)

        return _respond

    stub = StubHttpClient(
        {
            "https://a.example": responder("a", 0.05),
            "https://b.example": responder("b", 0.0),
            "https://c.example": responder("c", 0.0),
        }
    )
    _run_batch(stub, ["https://a.example", "https://b.example", "https://c.example"], concurrency_limit=2)

    assert events.index(("start", "c")) > events.index(("end", "a"))


def test_sliding_mode_admits_next_probe_when_a_slot_frees():
    events = []

    def responder(name: str, delay: float):
        async def _respond(request: HttpRequest) -> HttpResponse:  # noqa: ARG001
            events.append(("start", name))
            await asyncio.sleep(delay)
            events.append(("end", name))
            return HttpResponse(ok=True, status_code=200)

        return _respond

    stub = StubHttpClient(
        {
            "https://a.example": responder("a", 0.2),
            "https://b.example": responder("b", 0.0),
            "https://c.example": responder("c", 0.0),
        }
    )
    _run_batch(
        stub,
        ["https://a.example", "https://b.example", "https://c.example"],
        concurrency_limit=2,
        schedule_mode=ScheduleMode.SLIDING,
    )

    assert events.index(("start", "c")) < events.index(("end", "a"))


def test_one_failing_probe_does_not_abort_siblings():
    async def explode(request: HttpRequest) -> HttpResponse:  # noqa: ARG001
        raise RuntimeError("transport bug")

    urls = _urls(4)
    stub = StubHttpClient({url: HttpResponse(ok=True, status_code=200) for url in urls})
    stub.add(urls[1], explode)

    results = _run_batch(stub, urls, concurrency_limit=4)

    assert [result.status for result in results] == [
        ProbeStatus.UP,
        ProbeStatus.DOWN,
        ProbeStatus.UP,
        ProbeStatus.UP,
    ]
    assert results[1].http_status is None
    assert "RuntimeError" in results[1].details


def test_slow_probe_does_not_hold_up_siblings_past_timeout():
    async def hang(request: HttpRequest) -> HttpResponse:  # noqa: ARG001
        await asyncio.sleep(10)
        return HttpResponse(ok=True, status_code=200)

    urls = _urls(3)
    stub = StubHttpClient({url: HttpResponse(ok=True, status_code=204) for url in urls})
    stub.add(urls[0], hang)

    results = _run_batch(stub, urls, concurrency_limit=3, timeout_ms=50)

    assert results[0].status == ProbeStatus.DOWN
    assert results[0].details == "Timeout after 50 ms"
    assert [result.http_status for result in results[1:]] == [204, 204]


def test_truncates_to_max_batch_size():
    urls = _urls(7)
    job = BatchJob.from_input(urls, ProbeSettings(max_batch_size=5))
    assert len(job.targets) == 5
    assert job.dropped == 2

    stub = StubHttpClient({url: HttpResponse(ok=True, status_code=200) for url in urls})
    results = _run_batch(stub, urls, max_batch_size=5)
    assert [result.url for result in results] == urls[:5]
    assert len(stub.requests) == 5


def test_windows_follow_input_order():
    job = BatchJob.from_input(_urls(5), ProbeSettings(concurrency_limit=2))
    windows = [[index for index, _ in window] for window in job.windows()]
    assert windows == [[0, 1], [2, 3], [4]]


def test_concurrency_cap_with_instrumented_httpx_transport():
    active = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        try:
            await asyncio.sleep(0.01)
            return httpx.Response(200)
        finally:
            active -= 1

    async def _run():
        settings = ProbeSettings(concurrency_limit=10)
        client = HttpxClient(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        try:
            job = BatchJob.from_input(_urls(25), settings)
            return await BoundedScheduler(ProbeExecutor(client, settings)).run(job)
        finally:
            await client.aclose()

    results = asyncio.run(_run())
    assert len(results) == 25
    assert peak <= 10
    assert all(result.status == ProbeStatus.UP for result in results)
