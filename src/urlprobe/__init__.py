# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
urlprobe package entrypoint.

This package checks batches of URLs for reachability under bounded concurrency and
per-URL timeouts, optionally attaching coarse content quality hints. HTTP behavior is
abstracted behind an injectable async client interface, and domain objects are
modeled with typed dataclasses.
"""

from .config import ProbeMethod, ProbeSettings, ScheduleMode, load_probe_settings
from .errors import BatchInputError, ConfigurationError, FailureReason, InvalidUrlError, UrlProbeError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
    normalize_url,
)
from .log import setup_logging
from .models import (
    BatchJob,
    FindingKind,
    ProbeResult,
    ProbeStatus,
    ProbeTarget,
    QualityFinding,
    Responded,
    Unreachable,
)
from .runtime import BulkProber, aprobe_batch, probe_batch
from .version import __version__

__all__ = [
    "BatchInputError",
    "BatchJob",
    "BulkProber",
    "ConfigurationError",
    "FailureReason",
    "FindingKind",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidUrlError",
    "ProbeMethod",
    "ProbeResult",
    "ProbeSettings",
    "ProbeStatus",
    "ProbeTarget",
    "QualityFinding",
    "Responded",
    "ScheduleMode",
    "StubHttpClient",
    "Unreachable",
    "UrlProbeError",
    "aprobe_batch",
    "create_default_http_client",
    "load_probe_settings",
    "normalize_url",
    "probe_batch",
    "setup_logging",
    "__version__",
]
