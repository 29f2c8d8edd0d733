# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-probe executor: one bounded existence check plus the optional quality pass."""

from __future__ import annotations

import asyncio
import logging

from ..config import ProbeMethod, ProbeSettings
from ..errors import FailureReason, InvalidUrlError
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..http.url import normalize_url
from ..models import ProbeOutcome, ProbeResult, ProbeTarget, Responded, Unreachable
from .aggregate import build_result
from .quality import ContentQualityAnalyzer

logger = logging.getLogger(__name__)


class ProbeExecutor:
    """Runs one probe end to end. Never raises for per-URL failures."""

    def __init__(
        self,
        http_client: HttpClient,
        settings: ProbeSettings | None = None,
        analyzer: ContentQualityAnalyzer | None = None,
    ):
        self.http_client = http_client
        self.settings = settings or ProbeSettings()
        self.analyzer = analyzer or ContentQualityAnalyzer(http_client, self.settings)

    async def check(self, url: str, *, timeout_ms: int, read_body: bool = False) -> tuple[ProbeOutcome, HttpResponse | None]:
        """
        Issue the existence check against an already-normalized URL.

        The whole request (and body, when ``read_body``) is bounded by ``timeout_ms``
        of wall-clock time; on expiry the in-flight request is cancelled.
        """
        timeout = timeout_ms / 1000.0
        method = "GET" if read_body or self.settings.method == ProbeMethod.FULL_BODY else "HEAD"
        request = HttpRequest(
            url=url,
            method=method,
            timeout=timeout,
            allow_redirects=self.settings.follow_redirects,
            read_body=method == "GET",
        )
        try:
            response = await asyncio.wait_for(self.http_client.request(request), timeout=timeout)
        except asyncio.TimeoutError:
            return Unreachable(FailureReason.TIMEOUT, f"Timeout after {timeout_ms} ms"), None

        if not response.ok or response.status_code is None:
            reason = response.error_reason or FailureReason.OTHER_NETWORK_ERROR
            message = f"Timeout after {timeout_ms} ms" if reason == FailureReason.TIMEOUT else (response.error_message or "")
            return Unreachable(reason, message), None

        status_code = response.status_code
        outcome = Responded(
            http_status=status_code,
            redirected=response.redirected or 300 <= status_code <= 399,
            location=response.headers.get("location") if 300 <= status_code <= 399 else None,
        )
        return outcome, response

    async def run(self, target: ProbeTarget) -> ProbeResult:
        display_url = target.display_url
        try:
            url = normalize_url(target.url, upgrade_insecure=self.settings.upgrade_insecure_scheme)
        except InvalidUrlError as exc:
            return build_result(display_url, Unreachable(FailureReason.INVALID_URL, str(exc)), settings=self.settings)

        timeout_ms = target.timeout_ms if target.timeout_ms is not None else self.settings.timeout_ms
        run_quality = (
            target.run_quality_analysis if target.run_quality_analysis is not None else self.settings.run_quality_analysis
        )

        outcome, response = await self.check(url, timeout_ms=timeout_ms)
        if isinstance(outcome, Unreachable):
            logger.debug("probe %s unreachable: %s", url, outcome.reason.value)

        findings = None
        if run_quality and self.analyzer.is_eligible(outcome):
            findings = await self.analyzer.inspect(url, timeout=timeout_ms / 1000.0, prefetched=response)

        return build_result(display_url, outcome, findings, settings=self.settings)


__all__ = ["ProbeExecutor"]
