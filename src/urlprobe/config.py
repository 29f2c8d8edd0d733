# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for urlprobe."""

import os
from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigurationError
from .version import __version__

DEFAULT_USER_AGENT = f"Mozilla/5.0 (compatible; urlprobe/{__version__})"
DEFAULT_ALLOWED_ORIGINS = ("http://localhost:3000",)


class ProbeMethod(str, Enum):
    HEAD_ONLY = "head"
    FULL_BODY = "get"


class ScheduleMode(str, Enum):
    WINDOWED = "windowed"
    SLIDING = "sliding"


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _enum_env(name: str, enum_cls, default):  # noqa: ANN001
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return default


def _tuple_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass
class ProbeSettings:
    """Per-batch probing configuration with documented defaults."""

    concurrency_limit: int = 10
    timeout_ms: int = 8000
    max_batch_size: int = 500
    method: ProbeMethod = ProbeMethod.HEAD_ONLY
    run_quality_analysis: bool = False
    downgrade_on_quality_issues: bool = False
    upgrade_insecure_scheme: bool = False
    follow_redirects: bool = False
    inspect_redirects: bool = False
    invalid_as_down: bool = False
    min_word_count: int = 300
    schedule_mode: ScheduleMode = ScheduleMode.WINDOWED
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    max_body_bytes: int = 2 * 1024 * 1024
    allowed_origins: tuple[str, ...] = field(default=DEFAULT_ALLOWED_ORIGINS)

    @property
    def timeout(self) -> float:
        """Per-probe timeout in seconds."""
        return self.timeout_ms / 1000.0

    def validate(self) -> "ProbeSettings":
        if self.concurrency_limit < 1:
            raise ConfigurationError(f"concurrency_limit must be >= 1, got {self.concurrency_limit}")
        if self.timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be > 0, got {self.timeout_ms}")
        if self.max_batch_size < 1:
            raise ConfigurationError(f"max_batch_size must be >= 1, got {self.max_batch_size}")
        if self.min_word_count < 0:
            raise ConfigurationError(f"min_word_count must be >= 0, got {self.min_word_count}")
        if self.max_body_bytes <= 0:
            raise ConfigurationError(f"max_body_bytes must be > 0, got {self.max_body_bytes}")
        return self

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("URLPROBE_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            concurrency_limit=_int_env("URLPROBE_CONCURRENCY", cls.concurrency_limit),
            timeout_ms=_int_env("URLPROBE_TIMEOUT_MS", cls.timeout_ms),
            max_batch_size=_int_env("URLPROBE_MAX_BATCH_SIZE", cls.max_batch_size),
            method=_enum_env("URLPROBE_METHOD", ProbeMethod, cls.method),
            run_quality_analysis=_bool_env("URLPROBE_QUALITY", cls.run_quality_analysis),
            downgrade_on_quality_issues=_bool_env("URLPROBE_DOWNGRADE", cls.downgrade_on_quality_issues),
            upgrade_insecure_scheme=_bool_env("URLPROBE_UPGRADE_INSECURE", cls.upgrade_insecure_scheme),
            follow_redirects=_bool_env("URLPROBE_FOLLOW_REDIRECTS", cls.follow_redirects),
            inspect_redirects=_bool_env("URLPROBE_INSPECT_REDIRECTS", cls.inspect_redirects),
            invalid_as_down=_bool_env("URLPROBE_INVALID_AS_DOWN", cls.invalid_as_down),
            min_word_count=_int_env("URLPROBE_MIN_WORDS", cls.min_word_count),
            schedule_mode=_enum_env("URLPROBE_SCHEDULE", ScheduleMode, cls.schedule_mode),
            user_agent=os.getenv("URLPROBE_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("URLPROBE_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            allowed_origins=_tuple_env("URLPROBE_ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
