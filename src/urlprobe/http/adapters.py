# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable HttpClient implementations for tests and offline runs."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from ..errors import FailureReason
from .client import HttpClient
from .models import HttpRequest, HttpResponse

StubResponder = Callable[[HttpRequest], Awaitable[HttpResponse]]


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient.

    Responses are keyed by URL, optionally by ``(METHOD, url)`` for method-specific
    answers. A key may map to an ``HttpResponse`` or to an async responder. ``delay``
    simulates network latency and tracks how many requests are in flight at once.
    """

    def __init__(
        self,
        responses: dict[object, HttpResponse | StubResponder] | None = None,
        *,
        delay: float = 0.0,
    ):
        self._responses = dict(responses or {})
        self.delay = delay
        self.requests: list[HttpRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def add(self, key: object, response: HttpResponse | StubResponder) -> None:
        self._responses[key] = response

    def _lookup(self, request: HttpRequest) -> HttpResponse | StubResponder | None:
        method_key = (request.method.upper(), request.url)
        if method_key in self._responses:
            return self._responses[method_key]
        return self._responses.get(request.url)

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            configured = self._lookup(request)
            if configured is None:
                return HttpResponse.failure(FailureReason.OTHER_NETWORK_ERROR, "No stubbed response configured")
            if isinstance(configured, HttpResponse):
                return configured
            return await configured(request)
        finally:
            self.in_flight -= 1

    async def aclose(self) -> None:
        self.closed = True
