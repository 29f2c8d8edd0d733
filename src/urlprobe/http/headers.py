# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Responses are stored with
lowercase keys so that stubbed and real transports read the same way.
"""

from __future__ import annotations

from collections.abc import Mapping


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of ``headers`` (``httpx.Headers`` joins repeated fields)."""
    if not headers:
        return {}
    out: dict[str, str] = {}
    for key, value in headers.items():
        name = str(key).strip().lower()
        if name:
            out[name] = "" if value is None else str(value)
    return out


__all__ = ["normalize_headers"]
