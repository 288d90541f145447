"""Command-line interface for auditing focus order and visual feedback."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .audits.traversal import NotFocusablePolicy, TraversalOptions
from .config import AuditConfig, load_target_urls
from .pipeline import BrowserFactory, FocusAuditor
from .policy import AuditPolicy
from .reporting import WRITERS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Audit web pages for accessibility and keyboard navigation"
    )
    parser.add_argument("urls", nargs="*", help="URLs to audit")
    parser.add_argument(
        "--urls-file",
        type=Path,
        help='JSON file with {"urls": [...]} or a plain list of URLs',
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to store reports (default: reports)",
    )
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=sorted(WRITERS),
        help="Report format; repeat for several (default: html)",
    )
    parser.add_argument(
        "--compare-focus-styles",
        action="store_true",
        help="Also check that focusing an element changes its style",
    )
    parser.add_argument(
        "--skip-not-focusable",
        action="store_true",
        help="Report non-focusable candidates as skipped instead of warnings",
    )
    parser.add_argument(
        "--strict-hover",
        action="store_true",
        help="Fail a page when a button shows no hover feedback",
    )
    parser.add_argument(
        "--fail-on-violations",
        action="store_true",
        help="Fail a page when axe-core confirms a violation",
    )
    parser.add_argument(
        "--fail-on-focus",
        action="store_true",
        help="Fail a page when focus lands on the wrong element",
    )
    parser.add_argument("--settle", type=float, default=0.3, help="Seconds to wait after hovering")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AuditConfig:
    urls = list(args.urls)
    if args.urls_file:
        urls.extend(load_target_urls(args.urls_file))
    return AuditConfig(
        urls=urls,
        output_dir=args.output_dir,
        formats=tuple(args.formats or ("html",)),
        headless=not args.headed,
        settle_interval=args.settle,
        traversal=TraversalOptions(
            compare_focus_styles=args.compare_focus_styles,
            not_focusable=(
                NotFocusablePolicy.SKIP if args.skip_not_focusable else NotFocusablePolicy.WARN
            ),
        ),
        policy=AuditPolicy(
            fail_on_violations=args.fail_on_violations,
            fail_on_missing_feedback=args.strict_hover,
            fail_on_focus_failures=args.fail_on_focus,
        ),
    )


def main(
    argv: Optional[List[str]] = None,
    browser_factory: Optional[BrowserFactory] = None,
) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)
    if not config.urls:
        print("No URLs to audit. Pass URLs or --urls-file.", file=sys.stderr)
        return 2

    auditor = FocusAuditor(config, browser_factory=browser_factory)
    runs = auditor.run(config.urls)
    for page_run in runs:
        if page_run.error:
            print(f"[ERROR] {page_run.url}: {page_run.error}")
            continue
        outcome = page_run.outcome
        print(
            f"[{'OK' if page_run.ok else 'FAIL'}] {page_run.url}: "
            f"{len(outcome.accessibility.records)} accessibility findings, "
            f"{len(outcome.traversal.failures)} focus failures, "
            f"{sum(1 for r in outcome.interactions if r.missing_feedback)} buttons without hover feedback"
        )
        for finding in page_run.findings:
            print(f"    - {finding}")
        for path in outcome.artifacts:
            print(f"    report: {path}")
    return 0 if all(page_run.ok for page_run in runs) else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
