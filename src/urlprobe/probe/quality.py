# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Content quality heuristics for successfully fetched pages.

Two advisory checks run over the page body: a mobile viewport declaration and a
visible word count. Markup is scanned with tolerant regular expressions rather than
parsed, so broken HTML degrades to "finding not detected" instead of an error.
"""

from __future__ import annotations

import asyncio
import html
import logging
import re

from ..config import ProbeSettings
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..models import FindingKind, ProbeOutcome, QualityFinding, Responded

logger = logging.getLogger(__name__)

# Tag bodies stop at the next "<" and attribute names must follow a separator, so
# every pattern below scans an unterminated or oversized tag in linear time.
_META_TAG_RE = re.compile(r"<meta\b[^<>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(r"""(?<=[\s"'/])([^\s=/>"']+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>"']+))""")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^<>]*>.*?(?:</\1\s*>|$)", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?(?:-->|$)", re.DOTALL)
# A tag left open at the end of a (possibly truncated) body is dropped too.
_TAG_RE = re.compile(r"<[^>]*(?:>|$)")
_WHITESPACE_RE = re.compile(r"\s+")

VIEWPORT_SUGGESTION = (
    'Add a <meta name="viewport" content="width=device-width, initial-scale=1"> tag '
    "so the page renders correctly on mobile devices"
)


def _meta_attributes(tag: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for match in _ATTR_RE.finditer(tag):
        name = match.group(1).lower()
        value = next((group for group in match.groups()[1:] if group is not None), "")
        attrs.setdefault(name, html.unescape(value))
    return attrs


def has_viewport_meta(document: str) -> bool:
    """True when a meta viewport tag declares ``width=device-width`` (case-insensitive)."""
    for tag in _META_TAG_RE.findall(document):
        attrs = _meta_attributes(tag)
        if attrs.get("name", "").strip().lower() != "viewport":
            continue
        content = _WHITESPACE_RE.sub("", attrs.get("content", "")).lower()
        if "width=device-width" in content:
            return True
    return False


def count_visible_words(document: str) -> int:
    text = _COMMENT_RE.sub(" ", document)
    text = _SCRIPT_STYLE_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return len([token for token in text.split(" ") if token])


def analyze_content(document: str | None, *, min_word_count: int = 300) -> list[QualityFinding]:
    """
    Return findings in a fixed order: viewport first, word count second.

    A check that cannot be evaluated contributes no finding.
    """
    if not isinstance(document, str):
        return []

    findings: list[QualityFinding] = []
    try:
        if not has_viewport_meta(document):
            findings.append(QualityFinding(kind=FindingKind.MISSING_VIEWPORT, message=VIEWPORT_SUGGESTION))
    except (ValueError, TypeError, RecursionError) as exc:
        logger.debug("viewport check skipped: %s", exc)

    try:
        words = count_visible_words(document)
    except (ValueError, TypeError, RecursionError) as exc:
        logger.debug("word count skipped: %s", exc)
    else:
        if words < min_word_count:
            findings.append(
                QualityFinding(
                    kind=FindingKind.THIN_CONTENT,
                    message=(
                        f"Page has only {words} words of visible text; "
                        f"consider adding content (at least {min_word_count} words)"
                    ),
                    word_count=words,
                )
            )
    return findings


class ContentQualityAnalyzer:
    """Second-stage pass: fetch the body when needed and run the heuristics."""

    def __init__(self, http_client: HttpClient, settings: ProbeSettings):
        self.http_client = http_client
        self.settings = settings

    def is_eligible(self, outcome: ProbeOutcome) -> bool:
        if not isinstance(outcome, Responded):
            return False
        if 200 <= outcome.http_status <= 299:
            return True
        return self.settings.inspect_redirects and 300 <= outcome.http_status <= 399

    async def inspect(
        self,
        url: str,
        *,
        timeout: float,
        prefetched: HttpResponse | None = None,
    ) -> list[QualityFinding] | None:
        """
        Return findings for ``url``, or ``None`` when the body could not be obtained.

        Fetch failures are contained here; the caller keeps its existing classification.
        """
        response = prefetched if prefetched is not None and prefetched.body_read else None
        if response is None:
            request = HttpRequest(
                url=url,
                method="GET",
                timeout=timeout,
                allow_redirects=self.settings.follow_redirects,
                read_body=True,
            )
            try:
                response = await asyncio.wait_for(self.http_client.request(request), timeout=timeout)
            except asyncio.TimeoutError:
                logger.debug("content fetch for %s timed out", url)
                return None

        if not response.ok or response.status_code is None:
            logger.debug("content fetch for %s failed: %s", url, response.error_message)
            return None
        if not self.is_eligible(Responded(http_status=response.status_code)):
            logger.debug("content fetch for %s returned ineligible status %s", url, response.status_code)
            return None
        return analyze_content(response.text, min_word_count=self.settings.min_word_count)


__all__ = [
    "ContentQualityAnalyzer",
    "VIEWPORT_SUGGESTION",
    "analyze_content",
    "count_visible_words",
    "has_viewport_meta",
]
