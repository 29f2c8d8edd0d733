# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Content quality finding models."""

from dataclasses import dataclass
from enum import Enum


class FindingKind(str, Enum):
    MISSING_VIEWPORT = "MISSING_VIEWPORT"
    THIN_CONTENT = "THIN_CONTENT"


@dataclass(frozen=True)
class QualityFinding:
    kind: FindingKind
    message: str
    word_count: int | None = None
