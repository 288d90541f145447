"""High-level orchestration of the per-page focus and accessibility audit."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .audits.accessibility import AccessibilityAuditor, AccessibilityReport
from .audits.interaction import InteractionProber, collect_clickable_controls
from .audits.traversal import TraversalEngine, collect_focus_candidates
from .collectors.browser import BrowserSession
from .collectors.selenium_browser import SeleniumBrowser
from .config import AuditConfig
from .errors import FocusAuditError
from .models import InteractionResult, PageTarget, TraversalResult
from .reporting import PageReport, ReportComposer, ReportWriter, build_writers

logger = logging.getLogger(__name__)

BrowserFactory = Callable[[], BrowserSession]


@dataclass
class AuditOutcome:
    """Everything produced for one URL, including where the report went."""

    target: PageTarget
    accessibility: AccessibilityReport
    traversal: TraversalResult
    interactions: List[InteractionResult]
    report: PageReport
    artifacts: List[Path] = field(default_factory=list)

    def to_json_dict(self) -> dict:
        return {
            **self.report.to_dict(),
            "artifacts": [str(path) for path in self.artifacts],
        }


@dataclass
class PageRun:
    """Result of auditing one URL inside :meth:`FocusAuditor.run`."""

    url: str
    outcome: Optional[AuditOutcome] = None
    error: Optional[str] = None
    findings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and not self.findings


class FocusAuditor:
    """Coordinates the browser, the audits and report persistence."""

    def __init__(
        self,
        config: Optional[AuditConfig] = None,
        *,
        browser_factory: Optional[BrowserFactory] = None,
        accessibility_auditor: Optional[AccessibilityAuditor] = None,
        composer: Optional[ReportComposer] = None,
        writers: Optional[Sequence[ReportWriter]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or AuditConfig()
        self.browser_factory = browser_factory or self._default_browser_factory
        self.accessibility_auditor = accessibility_auditor or AccessibilityAuditor(
            options=self.config.scan
        )
        self.composer = composer or ReportComposer()
        self.writers = list(writers) if writers is not None else build_writers(self.config.formats)
        self._sleep = sleep

    def run(self, urls: Optional[Sequence[str]] = None) -> List[PageRun]:
        """Audit every URL independently; one failing page never stops the rest."""
        runs = []
        for url in urls if urls is not None else self.config.urls:
            page_run = PageRun(url=url)
            try:
                page_run.outcome = self.audit_url(url, enforce=False)
            except FocusAuditError as exc:
                logger.error("Audit of %s failed: %s", url, exc)
                page_run.error = str(exc)
            else:
                outcome = page_run.outcome
                page_run.findings = self.config.policy.evaluate(
                    outcome.accessibility, outcome.traversal, outcome.interactions
                )
            runs.append(page_run)
        return runs

    def audit_url(self, url: str, *, enforce: bool = True) -> AuditOutcome:
        """Audit one URL in a fresh browser session and persist its report.

        With ``enforce`` the configured :class:`AuditPolicy` is applied after
        the report is written and may raise :class:`PolicyViolationError`.
        """
        target = PageTarget.from_url(url)
        browser = self.browser_factory()
        try:
            outcome = self.audit_page(browser, target)
        finally:
            browser.close()

        if enforce:
            self.config.policy.enforce(
                url, outcome.accessibility, outcome.traversal, outcome.interactions
            )
        return outcome

    def audit_page(self, browser: BrowserSession, target: PageTarget) -> AuditOutcome:
        """Run scan, traversal and interaction passes, in that order, on one page."""
        logger.info("Auditing %s", target.url)
        browser.navigate(target.url)

        accessibility = self.accessibility_auditor.audit(browser)

        engine = TraversalEngine(browser, self.config.traversal)
        traversal = engine.run(collect_focus_candidates(browser))

        prober = InteractionProber(
            browser, settle_interval=self.config.settle_interval, sleep=self._sleep
        )
        interactions = prober.run(collect_clickable_controls(browser))

        report = self.composer.compose(target, accessibility, traversal, interactions)
        artifacts = self.persist(report)
        return AuditOutcome(
            target=target,
            accessibility=accessibility,
            traversal=traversal,
            interactions=interactions,
            report=report,
            artifacts=artifacts,
        )

    def persist(self, report: PageReport) -> List[Path]:
        artifacts = []
        for writer in self.writers:
            path = writer.write(report, self.config.output_dir)
            if path is not None:
                logger.info("Report written to %s", path)
                artifacts.append(path)
        return artifacts

    def _default_browser_factory(self) -> BrowserSession:
        return SeleniumBrowser.launch(
            headless=self.config.headless,
            window_size=self.config.viewport,
            page_settle=self.config.page_settle,
            timeout=self.config.page_load_timeout,
        )
