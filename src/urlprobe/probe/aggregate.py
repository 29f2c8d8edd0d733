# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fold probe outcomes and quality findings into ProbeResult records."""

from __future__ import annotations

from collections.abc import Sequence

import httpx

from ..config import ProbeSettings
from ..errors import FailureReason, reason_to_details
from ..models import ProbeOutcome, ProbeResult, ProbeStatus, QualityFinding, Responded, Unreachable

QUALITY_DOWNGRADE_NOTE = "content quality issues found"


def classify_status(http_status: int) -> ProbeStatus:
    if 200 <= http_status <= 299:
        return ProbeStatus.UP
    if 300 <= http_status <= 499:
        return ProbeStatus.REACHABLE
    return ProbeStatus.DOWN


def _status_line(code: int) -> str:
    return f"{code} {httpx.codes.get_reason_phrase(code)}".strip()


def describe_unreachable(outcome: Unreachable) -> str:
    if outcome.reason == FailureReason.TIMEOUT and outcome.message:
        return outcome.message
    if outcome.reason == FailureReason.INVALID_URL:
        return f"Invalid URL: {outcome.message}" if outcome.message else "Invalid URL"
    base = reason_to_details(outcome.reason)
    return f"{base} ({outcome.message})" if outcome.message else base


def describe_response(outcome: Responded, status: ProbeStatus) -> str:
    if status == ProbeStatus.UP:
        suffix = " after redirect" if outcome.redirected else ""
        return f"Website responded successfully{suffix}"
    if status == ProbeStatus.REACHABLE:
        line = f"HTTP {_status_line(outcome.http_status)}"
        if outcome.location:
            line += f" (redirects to {outcome.location})"
        return line
    return f"HTTP error: {_status_line(outcome.http_status)}"


def build_result(
    url: str,
    outcome: ProbeOutcome,
    findings: Sequence[QualityFinding] | None = None,
    *,
    settings: ProbeSettings | None = None,
) -> ProbeResult:
    """Pure mapping from one outcome (+ optional findings) to its external record."""
    settings = settings or ProbeSettings()

    if isinstance(outcome, Unreachable):
        invalid = outcome.reason == FailureReason.INVALID_URL and not settings.invalid_as_down
        return ProbeResult(
            url=url,
            status=ProbeStatus.INVALID if invalid else ProbeStatus.DOWN,
            http_status=None,
            details=describe_unreachable(outcome),
        )

    status = classify_status(outcome.http_status)
    details = describe_response(outcome, status)
    suggestions = [finding.message for finding in findings or ()]
    if suggestions and settings.downgrade_on_quality_issues and status != ProbeStatus.DOWN:
        status = ProbeStatus.DOWN
        details = f"{details}; {QUALITY_DOWNGRADE_NOTE}"

    return ProbeResult(
        url=url,
        status=status,
        http_status=outcome.http_status,
        details=details,
        suggestions=suggestions,
    )


def assemble_results(slots: Sequence[ProbeResult | None]) -> list[ProbeResult]:
    """Return the slot list in index order; every slot must have been written."""
    missing = [index for index, slot in enumerate(slots) if slot is None]
    if missing:
        raise RuntimeError(f"probe results missing for indexes {missing}")
    return [slot for slot in slots if slot is not None]


__all__ = [
    "assemble_results",
    "build_result",
    "classify_status",
    "describe_response",
    "describe_unreachable",
]
