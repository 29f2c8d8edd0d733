# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ProbeSettings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Asynchronous httpx client wrapper."""

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or ProbeSettings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.follow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
            limits=httpx.Limits(
                max_connections=max(self.settings.concurrency_limit * 2, 10),
                max_keepalive_connections=self.settings.concurrency_limit,
            ),
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            # Leaving the stream context (normally or via cancellation) closes the connection.
            async with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                content = bytearray()
                truncated = False
                if request.read_body:
                    max_body_bytes = self.settings.max_body_bytes
                    async for chunk in resp.aiter_bytes():
                        if not chunk:
                            continue
                        remaining = max_body_bytes - len(content)
                        if remaining <= 0:
                            truncated = True
                            break
                        if len(chunk) > remaining:
                            content.extend(chunk[:remaining])
                            truncated = True
                            break
                        content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=normalize_headers(resp.headers),
                text=text,
                url=str(resp.url),
                redirected=bool(resp.history),
                body_read=request.read_body,
                meta={
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                },
            )
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            reason = categorize_exception(exc)
            logger.debug("%s %s failed: %s (%s)", request.method, request.url, reason.value, exc)
            return HttpResponse.failure(reason, str(exc) or type(exc).__name__)

    async def aclose(self) -> None:
        await self._client.aclose()
