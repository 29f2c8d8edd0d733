# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import asyncio
import errno
import socket
import ssl
from collections.abc import Iterator
from enum import Enum

import httpx


class UrlProbeError(Exception):
    """Base class for urlprobe errors."""


class InvalidUrlError(UrlProbeError):
    """Raised by the normalizer when a raw string cannot become a fetchable URL."""


class BatchInputError(UrlProbeError, TypeError):
    """The batch input is structurally wrong (not a list, or empty)."""


class ConfigurationError(UrlProbeError, ValueError):
    """A ProbeSettings value is out of range."""


class FailureReason(str, Enum):
    DNS_FAILURE = "DNS_FAILURE"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"
    TIMEOUT = "TIMEOUT"
    TLS_ERROR = "TLS_ERROR"
    INVALID_URL = "INVALID_URL"
    OTHER_NETWORK_ERROR = "OTHER_NETWORK_ERROR"


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        # anyio raises OSError from an ExceptionGroup when every address fails.
        pending.extend(getattr(current, "exceptions", None) or ())
        nxt = current.__cause__ or current.__context__
        if nxt is not None:
            pending.append(nxt)


def categorize_exception(exc: BaseException) -> FailureReason:
    """
    Map httpx/socket/ssl exceptions to a FailureReason.

    httpx wraps the low-level OSError in ConnectError, so the whole cause chain is
    inspected and the most specific kind wins.
    """
    chain = list(_exception_chain(exc))

    if any(isinstance(item, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)) for item in chain):
        return FailureReason.TIMEOUT

    if any(isinstance(item, (httpx.InvalidURL, httpx.UnsupportedProtocol, InvalidUrlError)) for item in chain):
        return FailureReason.INVALID_URL

    if any(isinstance(item, (socket.gaierror, socket.herror)) for item in chain):
        return FailureReason.DNS_FAILURE

    if any(
        isinstance(item, ConnectionRefusedError) or (isinstance(item, OSError) and item.errno == errno.ECONNREFUSED)
        for item in chain
    ):
        return FailureReason.CONNECTION_REFUSED

    if any(isinstance(item, (ssl.SSLError, ssl.CertificateError)) for item in chain):
        return FailureReason.TLS_ERROR

    return FailureReason.OTHER_NETWORK_ERROR


def reason_to_details(reason: FailureReason | None) -> str:
    """User-facing reason string."""
    mapping = {
        FailureReason.DNS_FAILURE: "DNS resolution failure",
        FailureReason.CONNECTION_REFUSED: "Connection refused",
        FailureReason.TIMEOUT: "Network timeout during probe",
        FailureReason.TLS_ERROR: "TLS/certificate issue",
        FailureReason.INVALID_URL: "Invalid URL",
        FailureReason.OTHER_NETWORK_ERROR: "Network error during probe",
        None: "Connection failed",
    }
    return mapping.get(reason, "Connection failed")


__all__ = [
    "BatchInputError",
    "ConfigurationError",
    "FailureReason",
    "InvalidUrlError",
    "UrlProbeError",
    "categorize_exception",
    "reason_to_details",
]
