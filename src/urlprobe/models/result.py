# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Externally visible probe result records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProbeStatus(str, Enum):
    UP = "up"
    REACHABLE = "reachable"
    DOWN = "down"
    INVALID = "invalid"


@dataclass
class ProbeResult:
    url: str
    status: ProbeStatus
    http_status: int | None = None
    details: str = ""
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the wire field names consumed by HTTP callers."""
        return {
            "url": self.url,
            "status": self.status.value,
            "httpStatus": self.http_status,
            "details": self.details,
            "suggestions": list(self.suggestions),
        }
