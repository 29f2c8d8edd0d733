# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe target and outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ..errors import ConfigurationError, FailureReason


@dataclass(frozen=True)
class ProbeTarget:
    """One input URL plus optional overrides; ``None`` inherits the batch setting."""

    url: Any
    timeout_ms: int | None = None
    run_quality_analysis: bool | None = None

    def __post_init__(self) -> None:
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms override must be > 0, got {self.timeout_ms}")

    @classmethod
    def coerce(cls, value: Any) -> ProbeTarget:
        if isinstance(value, ProbeTarget):
            return value
        return cls(url=value)

    @property
    def display_url(self) -> str:
        if isinstance(self.url, str):
            return self.url
        return "" if self.url is None else str(self.url)


@dataclass(frozen=True)
class Unreachable:
    """No HTTP response was obtained."""

    reason: FailureReason
    message: str = ""


@dataclass(frozen=True)
class Responded:
    """An HTTP status line was received."""

    http_status: int
    redirected: bool = False
    location: str | None = None


ProbeOutcome = Union[Unreachable, Responded]
