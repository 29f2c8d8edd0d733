# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from urlprobe.config import ProbeSettings
from urlprobe.errors import FailureReason
from urlprobe.models import FindingKind, ProbeResult, ProbeStatus, QualityFinding, Responded, Unreachable
from urlprobe.probe.aggregate import assemble_results, build_result, classify_status

FINDINGS = [
    QualityFinding(kind=FindingKind.MISSING_VIEWPORT, message="add viewport"),
    QualityFinding(kind=FindingKind.THIN_CONTENT, message="add words", word_count=10),
]


@pytest.mark.parametrize(
    "code,expected",
    [
        (200, ProbeStatus.UP),
        (204, ProbeStatus.UP),
        (299, ProbeStatus.UP),
        (300, ProbeStatus.REACHABLE),
        (301, ProbeStatus.REACHABLE),
        (404, ProbeStatus.REACHABLE),
        (499, ProbeStatus.REACHABLE),
        (500, ProbeStatus.DOWN),
        (503, ProbeStatus.DOWN),
        (599, ProbeStatus.DOWN),
        (101, ProbeStatus.DOWN),
        (600, ProbeStatus.DOWN),
    ],
)
def test_classify_status(code, expected):
    assert classify_status(code) == expected


def test_build_result_for_responses():
    up = build_result("example.com", Responded(http_status=200))
    assert up == ProbeResult(
        url="example.com",
        status=ProbeStatus.UP,
        http_status=200,
        details="Website responded successfully",
        suggestions=[],
    )

    moved = build_result("a", Responded(http_status=301, redirected=True, location="https://b/"))
    assert moved.status == ProbeStatus.REACHABLE
    assert moved.http_status == 301
    assert moved.details == "HTTP 301 Moved Permanently (redirects to https://b/)"

    missing = build_result("a", Responded(http_status=404))
    assert missing.details == "HTTP 404 Not Found"

    unavailable = build_result("a", Responded(http_status=503))
    assert unavailable.status == ProbeStatus.DOWN
    assert unavailable.details == "HTTP error: 503 Service Unavailable"

    followed = build_result("a", Responded(http_status=200, redirected=True))
    assert followed.details == "Website responded successfully after redirect"


def test_build_result_for_unreachable_outcomes():
    timeout = build_result("a", Unreachable(FailureReason.TIMEOUT, "Timeout after 50 ms"))
    assert timeout.status == ProbeStatus.DOWN
    assert timeout.http_status is None
    assert timeout.details == "Timeout after 50 ms"

    dns = build_result("a", Unreachable(FailureReason.DNS_FAILURE, "[Errno -2] Name or service not known"))
    assert dns.status == ProbeStatus.DOWN
    assert dns.details == "DNS resolution failure ([Errno -2] Name or service not known)"

    refused = build_result("a", Unreachable(FailureReason.CONNECTION_REFUSED))
    assert refused.details == "Connection refused"


def test_invalid_urls_are_distinct_unless_folded():
    outcome = Unreachable(FailureReason.INVALID_URL, "missing host")

    distinct = build_result("https://", outcome)
    assert distinct.status == ProbeStatus.INVALID
    assert distinct.details == "Invalid URL: missing host"

    folded = build_result("https://", outcome, settings=ProbeSettings(invalid_as_down=True))
    assert folded.status == ProbeStatus.DOWN
    assert folded.http_status is None


def test_findings_are_advisory_by_default():
    result = build_result("a", Responded(http_status=200), FINDINGS)
    assert result.status == ProbeStatus.UP
    assert result.suggestions == ["add viewport", "add words"]


def test_findings_downgrade_when_configured():
    settings = ProbeSettings(downgrade_on_quality_issues=True)
    result = build_result("a", Responded(http_status=200), FINDINGS, settings=settings)
    assert result.status == ProbeStatus.DOWN
    assert result.http_status == 200
    assert result.details == "Website responded successfully; content quality issues found"
    assert len(result.suggestions) == 2

    clean = build_result("a", Responded(http_status=200), [], settings=settings)
    assert clean.status == ProbeStatus.UP


def test_to_dict_uses_wire_names():
    result = build_result("a", Responded(http_status=200), FINDINGS[:1])
    assert result.to_dict() == {
        "url": "a",
        "status": "up",
        "httpStatus": 200,
        "details": "Website responded successfully",
        "suggestions": ["add viewport"],
    }


def test_assemble_results_requires_every_slot():
    first = ProbeResult(url="a", status=ProbeStatus.UP, http_status=200)
    second = ProbeResult(url="b", status=ProbeStatus.DOWN)
    assert assemble_results([first, second]) == [first, second]
    with pytest.raises(RuntimeError):
        assemble_results([first, None])
