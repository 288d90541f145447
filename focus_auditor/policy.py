"""Caller-selected escalation of recorded findings to hard failures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .audits.accessibility import AccessibilityReport
from .errors import PolicyViolationError
from .models import InteractionResult, TraversalResult


@dataclass(frozen=True)
class AuditPolicy:
    """Which findings fail a page.

    By default every finding is only reported. Each flag turns one class of
    finding into a :class:`PolicyViolationError` once the report is written.
    """

    fail_on_violations: bool = False
    fail_on_missing_feedback: bool = False
    fail_on_focus_failures: bool = False

    def evaluate(
        self,
        accessibility: AccessibilityReport,
        traversal: TraversalResult,
        interactions: Sequence[InteractionResult],
    ) -> List[str]:
        findings: List[str] = []
        if self.fail_on_violations:
            findings.extend(
                f"accessibility violation {record.rule_id} ({record.impact.value})"
                for record in accessibility.confirmed
            )
        if self.fail_on_focus_failures:
            findings.extend(
                f"focus did not land on element {result.index + 1}/{result.total} "
                f"{result.descriptor.selector}"
                for result in traversal.failures
            )
        if self.fail_on_missing_feedback:
            findings.extend(
                f'button "{result.descriptor.label}" did not change style on hover'
                for result in interactions
                if result.missing_feedback
            )
        return findings

    def enforce(
        self,
        url: str,
        accessibility: AccessibilityReport,
        traversal: TraversalResult,
        interactions: Sequence[InteractionResult],
    ) -> None:
        findings = self.evaluate(accessibility, traversal, interactions)
        if findings:
            raise PolicyViolationError(url, findings)
