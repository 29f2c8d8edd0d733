# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""urlprobe CLI."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from collections.abc import Iterable
from typing import TextIO

from ..config import ProbeMethod, ProbeSettings, ScheduleMode, load_probe_settings
from ..errors import UrlProbeError
from ..log import setup_logging
from ..models import ProbeResult, ProbeStatus
from ..runtime import probe_batch

_STATUS_MARKERS = {
    ProbeStatus.UP: "UP",
    ProbeStatus.REACHABLE: "REACHABLE",
    ProbeStatus.DOWN: "DOWN",
    ProbeStatus.INVALID: "INVALID",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bulk URL status checker with optional content quality hints")
    parser.add_argument("urls", nargs="*", help="URLs to probe (scheme optional, https:// is assumed)")
    parser.add_argument("-f", "--file", help="Read URLs from a file, one per line ('-' for stdin)")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of a human-friendly summary")
    parser.add_argument("--concurrency", type=int, help="Maximum probes in flight at once")
    parser.add_argument("--timeout-ms", type=int, help="Per-probe timeout in milliseconds")
    parser.add_argument("--max-batch-size", type=int, help="Drop URLs beyond this many")
    parser.add_argument("--full-body", action="store_true", help="Use GET instead of HEAD for the existence check")
    parser.add_argument("--quality", action="store_true", help="Run viewport/word-count checks on reachable pages")
    parser.add_argument("--downgrade", action="store_true", help="Mark pages with quality findings as down")
    parser.add_argument("--upgrade-insecure", action="store_true", help="Rewrite http:// URLs to https://")
    parser.add_argument("--follow-redirects", action="store_true", help="Follow redirects before classifying")
    parser.add_argument("--sliding", action="store_true", help="Admit probes as slots free instead of in windows")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", help="Logging level (default: URLPROBE_LOG_LEVEL or WARNING)")
    return parser


def read_url_lines(stream: TextIO) -> list[str]:
    """Return non-blank lines, skipping ``#`` comments."""
    urls = []
    for line in stream:
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            urls.append(stripped)
    return urls


def _collect_urls(args: argparse.Namespace) -> list[str]:
    urls = list(args.urls)
    if args.file == "-":
        urls.extend(read_url_lines(sys.stdin))
    elif args.file:
        with open(args.file, encoding="utf-8") as handle:
            urls.extend(read_url_lines(handle))
    return urls


def settings_from_args(args: argparse.Namespace, base: ProbeSettings | None = None) -> ProbeSettings:
    settings = base or load_probe_settings()
    if args.concurrency is not None:
        settings.concurrency_limit = args.concurrency
    if args.timeout_ms is not None:
        settings.timeout_ms = args.timeout_ms
    if args.max_batch_size is not None:
        settings.max_batch_size = args.max_batch_size
    if args.full_body:
        settings.method = ProbeMethod.FULL_BODY
    if args.quality:
        settings.run_quality_analysis = True
    if args.downgrade:
        settings.downgrade_on_quality_issues = True
    if args.upgrade_insecure:
        settings.upgrade_insecure_scheme = True
    if args.follow_redirects:
        settings.follow_redirects = True
    if args.sliding:
        settings.schedule_mode = ScheduleMode.SLIDING
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    return settings


def _print_json(results: Iterable[ProbeResult]) -> None:
    json.dump({"results": [result.to_dict() for result in results]}, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _pretty_print(results: list[ProbeResult], *, dropped: int = 0) -> None:
    for result in results:
        code = result.http_status if result.http_status is not None else "-"
        print(f"[{_STATUS_MARKERS[result.status]:>9}] {code:>3} {result.url} - {result.details}")
        for suggestion in result.suggestions:
            print(f"            * {suggestion}")
    tally = Counter(result.status for result in results)
    summary = ", ".join(f"{status.value}={tally[status]}" for status in ProbeStatus if tally[status])
    print(f"Checked {len(results)} URLs: {summary or 'none'}")
    if dropped:
        print(f"Skipped {dropped} URLs beyond the batch limit")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    urls = _collect_urls(args)
    if not urls:
        parser.print_usage(sys.stderr)
        print("error: no URLs supplied", file=sys.stderr)
        return 2

    settings = settings_from_args(args)
    try:
        results = probe_batch(urls, settings)
    except UrlProbeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        _print_json(results)
    else:
        _pretty_print(results, dropped=len(urls) - len(results))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
