# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across urlprobe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import FailureReason

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "HEAD"
    headers: Headers | None = None
    timeout: float | None = None
    allow_redirects: bool = False
    read_body: bool = False


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    Transport failures are represented as ``ok=False`` with ``status_code=None`` and an
    ``error_reason``; any received status code (including 4xx/5xx) is ``ok=True``.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    url: str | None = None
    redirected: bool = False
    body_read: bool = False
    error_reason: FailureReason | None = None
    error_message: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, reason: FailureReason, message: str | None = None) -> HttpResponse:
        return cls(ok=False, error_reason=reason, error_message=message)
