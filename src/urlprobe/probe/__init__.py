# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe pipeline: executor, quality analyzer, scheduler and aggregation."""

from .aggregate import assemble_results, build_result, classify_status
from .executor import ProbeExecutor
from .quality import ContentQualityAnalyzer, analyze_content
from .scheduler import BoundedScheduler

__all__ = [
    "BoundedScheduler",
    "ContentQualityAnalyzer",
    "ProbeExecutor",
    "analyze_content",
    "assemble_results",
    "build_result",
    "classify_status",
]
