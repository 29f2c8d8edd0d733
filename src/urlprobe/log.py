# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for urlprobe."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("URLPROBE_LOG_LEVEL", "WARNING").upper()

# httpx and httpcore log one INFO line per request; a batch would drown its own output.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> int:
    """
    Configure standard logging for CLI/library use and return the numeric level applied.

    Transport loggers stay at WARNING unless DEBUG is requested.
    """
    numeric_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("urlprobe").setLevel(numeric_level)
    transport_level = numeric_level if numeric_level <= logging.DEBUG else max(numeric_level, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return numeric_level


__all__ = ["setup_logging"]
