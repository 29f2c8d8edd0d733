# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import pytest

from urlprobe import runtime
from urlprobe.config import ProbeSettings
from urlprobe.errors import BatchInputError, ConfigurationError
from urlprobe.http.adapters import StubHttpClient
from urlprobe.http.models import HttpResponse
from urlprobe.models import ProbeStatus, ProbeTarget
from urlprobe.runtime import BulkProber, aprobe_batch, probe_batch

PAGE = "<html><body><p>tiny</p></body></html>"


def _stub() -> StubHttpClient:
    return StubHttpClient(
        {
            ("HEAD", "https://up.example"): HttpResponse(ok=True, status_code=200),
            ("GET", "https://up.example"): HttpResponse(ok=True, status_code=200, text=PAGE, body_read=True),
            "https://moved.example": HttpResponse(ok=True, status_code=301),
            "https://broken.example": HttpResponse(ok=True, status_code=503),
        }
    )


@pytest.mark.parametrize("bad_input", ["https://up.example", None, 42, {"websites": []}, b"bytes"])
def test_probe_batch_rejects_non_list_input_before_network(bad_input):
    stub = _stub()
    with pytest.raises(BatchInputError):
        probe_batch(bad_input, http_client=stub)
    assert stub.requests == []


def test_probe_batch_rejects_empty_list():
    stub = _stub()
    with pytest.raises(BatchInputError):
        probe_batch([], http_client=stub)
    assert stub.requests == []


def test_probe_batch_rejects_bad_configuration():
    with pytest.raises(ConfigurationError):
        probe_batch(["https://up.example"], ProbeSettings(concurrency_limit=0), http_client=_stub())


def test_probe_batch_classifies_each_url_in_order():
    urls = ["https://up.example", "https://moved.example", "https://broken.example", "not a url", None]
    results = probe_batch(urls, http_client=_stub())

    assert [r.url for r in results] == ["https://up.example", "https://moved.example", "https://broken.example", "not a url", ""]
    assert [r.status for r in results] == [
        ProbeStatus.UP,
        ProbeStatus.REACHABLE,
        ProbeStatus.DOWN,
        ProbeStatus.INVALID,
        ProbeStatus.INVALID,
    ]
    assert [r.http_status for r in results] == [200, 301, 503, None, None]


def test_probe_batch_output_length_is_capped():
    urls = ["https://up.example"] * 8
    results = probe_batch(urls, ProbeSettings(max_batch_size=3), http_client=_stub())
    assert len(results) == 3


def test_probe_batch_quality_modes():
    advisory = probe_batch(["https://up.example"], ProbeSettings(run_quality_analysis=True), http_client=_stub())
    assert advisory[0].status == ProbeStatus.UP
    assert len(advisory[0].suggestions) == 2

    strict = probe_batch(
        ["https://up.example"],
        ProbeSettings(run_quality_analysis=True, downgrade_on_quality_issues=True),
        http_client=_stub(),
    )
    assert strict[0].status == ProbeStatus.DOWN
    assert strict[0].suggestions == advisory[0].suggestions


def test_aprobe_batch_accepts_probe_targets():
    stub = _stub()
    targets = [ProbeTarget("https://up.example", run_quality_analysis=True), "https://moved.example"]
    results = asyncio.run(aprobe_batch(targets, http_client=stub))
    assert len(results[0].suggestions) == 2
    assert results[1].suggestions == []


def test_bulk_prober_leaves_injected_client_open():
    stub = _stub()

    async def _run():
        async with BulkProber(http_client=stub) as prober:
            first = await prober.probe(["https://up.example"])
            second = await prober.probe(["https://broken.example"])
        return first, second

    first, second = asyncio.run(_run())
    assert first[0].status == ProbeStatus.UP
    assert second[0].status == ProbeStatus.DOWN
    assert stub.closed is False


def test_bulk_prober_closes_owned_client(monkeypatch):
    stub = _stub()
    monkeypatch.setattr(runtime, "create_default_http_client", lambda settings: stub)

    results = probe_batch(["https://up.example"])

    assert results[0].status == ProbeStatus.UP
    assert stub.closed is True
