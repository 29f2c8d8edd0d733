# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for urlprobe."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .batch import BatchJob
from .probe import ProbeOutcome, ProbeTarget, Responded, Unreachable
from .quality import FindingKind, QualityFinding
from .result import ProbeResult, ProbeStatus

__all__ = [
    "BatchJob",
    "FindingKind",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeOutcome",
    "ProbeResult",
    "ProbeStatus",
    "ProbeTarget",
    "QualityFinding",
    "Responded",
    "Unreachable",
]
