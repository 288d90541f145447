"""Accessibility auditing via axe-core."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..collectors.browser import BrowserSession, ScanOptions
from ..errors import ScanFailedError
from ..models import (
    VIOLATION_MARKUP_LIMIT,
    AffectedNode,
    FindingCategory,
    Impact,
    ViolationRecord,
    WcagLevel,
)

logger = logging.getLogger(__name__)

# Checked in this order; the first level with a matching tag wins.
WCAG_LEVEL_TAGS = (
    (WcagLevel.AAA, frozenset({"wcag2aaa", "wcag21aaa", "wcag22aaa"})),
    (WcagLevel.AA, frozenset({"wcag2aa", "wcag21aa", "wcag22aa"})),
    (WcagLevel.A, frozenset({"wcag2a", "wcag21a", "wcag22a"})),
)


def classify_wcag_level(tags: Iterable[str]) -> WcagLevel:
    tag_set = set(tags)
    for level, level_tags in WCAG_LEVEL_TAGS:
        if tag_set & level_tags:
            return level
    return WcagLevel.UNKNOWN


def node_snippet(html: Optional[str], limit: int = VIOLATION_MARKUP_LIMIT) -> str:
    return (html or "").strip()[:limit].replace("\n", "")


@dataclass(frozen=True)
class AccessibilityReport:
    """Confirmed and possible axe-core findings for one page, in scan order."""

    records: List[ViolationRecord]
    raw_results: Optional[dict] = None

    @property
    def confirmed(self) -> List[ViolationRecord]:
        return [r for r in self.records if r.category is FindingCategory.CONFIRMED]

    @property
    def possible(self) -> List[ViolationRecord]:
        return [r for r in self.records if r.category is FindingCategory.POSSIBLE]

    def to_dict(self) -> dict:
        return {
            "total": len(self.records),
            "confirmed": len(self.confirmed),
            "possible": len(self.possible),
            "records": [record.to_dict() for record in self.records],
        }


class AccessibilityAuditor:
    """Runs axe-core and converts results into structured reports."""

    def __init__(self, *, options: Optional[ScanOptions] = None) -> None:
        self.options = options or ScanOptions()

    def audit(self, browser: BrowserSession) -> AccessibilityReport:
        results = browser.run_accessibility_scan(self.options)
        return self.audit_from_raw(results)

    def audit_from_raw(self, results: Optional[dict]) -> AccessibilityReport:
        results = results or {}
        if results.get("error"):
            raise ScanFailedError(f"axe-core scan failed: {results['error']}")

        records = [
            self._to_record(item, FindingCategory.CONFIRMED)
            for item in results.get("violations") or []
        ]
        records.extend(
            self._to_record(item, FindingCategory.POSSIBLE)
            for item in results.get("incomplete") or []
        )
        logger.info(
            "axe-core reported %d confirmed and %d possible findings",
            sum(1 for r in records if r.category is FindingCategory.CONFIRMED),
            sum(1 for r in records if r.category is FindingCategory.POSSIBLE),
        )
        return AccessibilityReport(records=records, raw_results=results)

    def _to_record(self, item: dict, category: FindingCategory) -> ViolationRecord:
        tags = tuple(item.get("tags") or ())
        nodes = tuple(
            AffectedNode(
                targets=tuple(str(target) for target in node.get("target") or ()),
                snippet=node_snippet(node.get("html")),
            )
            for node in item.get("nodes") or []
        )
        return ViolationRecord(
            rule_id=item.get("id", "unknown"),
            category=category,
            impact=Impact.parse(item.get("impact")),
            description=item.get("description", ""),
            help=item.get("help", ""),
            help_url=item.get("helpUrl"),
            wcag_level=classify_wcag_level(tags),
            tags=tags,
            nodes=nodes,
        )
