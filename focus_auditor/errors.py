"""Exceptions raised by the focus auditor."""
from __future__ import annotations

from typing import List, Sequence


class FocusAuditError(RuntimeError):
    """Base class for page-level audit errors."""


class BrowserUnavailableError(FocusAuditError):
    """Selenium, Chrome or chromedriver could not be found or started."""


class ScanUnavailableError(FocusAuditError):
    """axe-selenium-python is not installed."""


class ScanFailedError(FocusAuditError):
    """axe-core reported an error instead of results."""


class PolicyViolationError(FocusAuditError):
    """Findings that the caller's policy escalated to a hard failure.

    Raised only after the page report has been written, so the report is
    never lost because of an escalation.
    """

    def __init__(self, url: str, findings: Sequence[str]) -> None:
        self.url = url
        self.findings: List[str] = list(findings)
        summary = "; ".join(self.findings[:5])
        if len(self.findings) > 5:
            summary += f"; ... ({len(self.findings) - 5} more)"
        super().__init__(f"{url}: {summary}")


class NavigationError(FocusAuditError):
    """The page could not be loaded."""


class BrowserSessionError(FocusAuditError):
    """The browser rejected a query or an element call, e.g. a stale handle.

    Raised per element during the traversal and hover passes, where it is
    recorded on that element's result. Raised from a page-wide query it fails
    only the current URL.
    """
