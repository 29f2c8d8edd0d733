# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch coordination model."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..config import ProbeSettings
from ..errors import BatchInputError
from .probe import ProbeTarget


@dataclass
class BatchJob:
    """
    Transient unit of work for one ``probe_batch`` call.

    Targets beyond ``settings.max_batch_size`` are dropped (not queued); ``dropped``
    records how many were cut so callers can report it.
    """

    targets: list[ProbeTarget]
    settings: ProbeSettings = field(default_factory=ProbeSettings)
    dropped: int = 0

    @classmethod
    def from_input(cls, urls: Any, settings: ProbeSettings | None = None) -> BatchJob:
        """Validate the raw input shape and build a truncated job. Performs no I/O."""
        settings = (settings or ProbeSettings()).validate()
        if isinstance(urls, (str, bytes)) or not isinstance(urls, Sequence):
            raise BatchInputError(f"urls must be a list of URL strings, got {type(urls).__name__}")
        if len(urls) == 0:
            raise BatchInputError("urls must not be empty")
        kept = list(urls[: settings.max_batch_size])
        return cls(
            targets=[ProbeTarget.coerce(item) for item in kept],
            settings=settings,
            dropped=len(urls) - len(kept),
        )

    @property
    def concurrency_limit(self) -> int:
        return self.settings.concurrency_limit

    @property
    def timeout_ms(self) -> int:
        return self.settings.timeout_ms

    def windows(self) -> Iterator[list[tuple[int, ProbeTarget]]]:
        """Yield (index, target) groups of at most ``concurrency_limit`` in input order."""
        size = self.concurrency_limit
        indexed = list(enumerate(self.targets))
        for start in range(0, len(indexed), size):
            yield indexed[start : start + size]
