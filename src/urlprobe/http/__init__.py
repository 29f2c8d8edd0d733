# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import normalize_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import normalize_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "normalize_headers",
    "normalize_url",
]
