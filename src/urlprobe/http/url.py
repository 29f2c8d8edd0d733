# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL normalization: raw user input to a fetchable absolute URL, without I/O."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from ..errors import InvalidUrlError

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*)://")
_HOST_LABEL_RE = re.compile(r"^(?!-)[^\s./\\@:?#\[\]]+(?<!-)$")
_FETCHABLE_SCHEMES = {"http", "https"}


def _validate_host(hostname: str) -> None:
    if hostname.startswith("[") or ":" in hostname:
        # urlsplit already unwrapped and accepted an IPv6 literal.
        return
    labels = hostname.rstrip(".").split(".")
    if not labels or any(not label for label in labels):
        raise InvalidUrlError(f"malformed host {hostname!r}")
    for label in labels:
        if not _HOST_LABEL_RE.match(label):
            raise InvalidUrlError(f"malformed host {hostname!r}")


def normalize_url(raw: object, *, upgrade_insecure: bool = False) -> str:
    """
    Return ``raw`` as an absolute http(s) URL.

    - ``http://`` / ``https://`` inputs pass through unchanged (scheme matched
      case-insensitively); with ``upgrade_insecure`` an ``http://`` prefix becomes ``https://``.
    - Inputs without a scheme get ``https://`` prepended.
    - Anything else (empty, other schemes, unparsable host or port) raises InvalidUrlError.
    """
    if not isinstance(raw, str):
        raise InvalidUrlError(f"expected a string, got {type(raw).__name__}")
    candidate = raw.strip()
    if not candidate:
        raise InvalidUrlError("empty URL")
    if any(ch.isspace() for ch in candidate):
        raise InvalidUrlError("URL contains whitespace")

    match = _SCHEME_RE.match(candidate)
    if match is None:
        if candidate.startswith("//"):
            candidate = candidate[2:]
        candidate = f"https://{candidate}"
    else:
        scheme = match.group(1).lower()
        if scheme not in _FETCHABLE_SCHEMES:
            raise InvalidUrlError(f"unsupported scheme {scheme!r}")
        if upgrade_insecure and scheme == "http":
            candidate = "https://" + candidate[match.end():]

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        parts.port  # noqa: B018 - raises ValueError on a bad port
    except ValueError as exc:
        raise InvalidUrlError(str(exc)) from exc

    if not hostname:
        raise InvalidUrlError("missing host")
    _validate_host(hostname)
    return candidate


__all__ = ["normalize_url"]
