# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Framework-free request handler for exposing batch probing over HTTP.

The handler owns everything transport-shaped (method dispatch, CORS, JSON body
parsing, status codes) and calls the core only after the input is validated.
Any web framework or serverless runtime can adapt ``ApiResponse`` to its own type.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..runtime import BulkProber

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


@dataclass
class ApiResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None

    def json(self) -> str:
        return "" if self.body is None else json.dumps(self.body)


def cors_headers(origin: str | None, allowed_origins: tuple[str, ...]) -> dict[str, str]:
    """Echo allow-listed origins; anything else gets the wildcard."""
    allow_origin = origin if origin and origin in allowed_origins else "*"
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS, GET",
        "Access-Control-Allow-Headers": "Content-Type, Accept",
        "Access-Control-Max-Age": "86400",
    }


def _error(status_code: int, headers: dict[str, str], error: str, message: str) -> ApiResponse:
    return ApiResponse(
        status_code=status_code,
        headers={**headers, "Content-Type": JSON_CONTENT_TYPE},
        body={"error": error, "message": message},
    )


def _parse_body(body: Any) -> Any:
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8")
    if isinstance(body, str):
        return json.loads(body) if body.strip() else None
    return body


async def handle_request(
    method: str,
    body: Any = None,
    *,
    origin: str | None = None,
    settings: ProbeSettings | None = None,
    prober: BulkProber | None = None,
) -> ApiResponse:
    settings = settings or load_probe_settings()
    headers = cors_headers(origin, settings.allowed_origins)
    method = (method or "").upper()

    if method == "OPTIONS":
        return ApiResponse(status_code=200, headers=headers)

    if method == "GET":
        return ApiResponse(
            status_code=200,
            headers={**headers, "Content-Type": JSON_CONTENT_TYPE},
            body={
                "message": "API is working! Use POST method to check websites.",
                "usage": 'POST { "websites": ["https://example.com"] }',
                "allowedOrigins": list(settings.allowed_origins),
            },
        )

    if method != "POST":
        return _error(405, headers, "Method Not Allowed", "Only POST requests are accepted for website checking")

    if origin and origin not in settings.allowed_origins:
        logger.warning("request from non-allowed origin: %s", origin)

    try:
        payload = _parse_body(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return _error(400, headers, "Bad Request", "Invalid JSON body")

    websites = payload.get("websites") if isinstance(payload, dict) else None
    if websites is None:
        return _error(400, headers, "Bad Request", 'Missing "websites" field in request body')
    if not isinstance(websites, list):
        return _error(400, headers, "Bad Request", '"websites" must be an array of URLs')
    if not websites:
        return _error(400, headers, "Bad Request", '"websites" array cannot be empty')

    try:
        if prober is not None:
            results = await prober.probe(websites)
        else:
            async with BulkProber(settings) as owned:
                results = await owned.probe(websites)
    except Exception:  # noqa: BLE001
        logger.exception("error processing URLs")
        return _error(500, headers, "Internal Server Error", "An error occurred while checking URLs")

    return ApiResponse(
        status_code=200,
        headers={**headers, "Content-Type": JSON_CONTENT_TYPE},
        body={"results": [result.to_dict() for result in results]},
    )


__all__ = ["ApiResponse", "cors_headers", "handle_request"]
