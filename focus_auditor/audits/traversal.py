"""Sequential Tab-order traversal over the interactive elements of a page."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..collectors.browser import BrowserSession, ElementHandle
from ..errors import BrowserSessionError
from ..models import (
    UNREADABLE_ELEMENT,
    ElementDescriptor,
    FocusOutcome,
    FocusResult,
    TraversalResult,
)
from .descriptors import describe_element
from .focusability import is_focusable
from .styles import FOCUS_STYLE_PROPERTIES, capture_snapshot

logger = logging.getLogger(__name__)

FOCUS_CANDIDATE_SELECTOR = 'button, a, input, select, textarea, [tabindex]:not([tabindex="-1"])'
_CLASSIFIER_ATTRIBUTES = ("href", "tabindex", "disabled")


class NotFocusablePolicy(str, Enum):
    """How a candidate that fails the focusability check is reported."""

    WARN = "warn"
    SKIP = "skip"


@dataclass(frozen=True)
class TraversalOptions:
    compare_focus_styles: bool = False
    not_focusable: NotFocusablePolicy = NotFocusablePolicy.WARN
    focus_style_properties: Tuple[str, ...] = FOCUS_STYLE_PROPERTIES


def collect_focus_candidates(browser: BrowserSession) -> List[ElementHandle]:
    """Visible, enabled elements that may take part in Tab order, in DOM order."""
    candidates = []
    for element in browser.query_elements(FOCUS_CANDIDATE_SELECTOR):
        try:
            if not browser.is_visible(element):
                continue
            if browser.has_attribute(element, "disabled"):
                continue
            tabindex = browser.get_attribute(element, "tabindex")
        except BrowserSessionError as exc:
            logger.warning("Dropping focus candidate that left the page: %s", exc)
            continue
        if tabindex is not None and tabindex.strip() == "-1":
            continue
        candidates.append(element)
    return candidates


class TraversalEngine:
    """Focuses each candidate in turn and records where focus actually went.

    The pass is strictly one-way: no retries, no reordering. The candidate
    sequence is frozen when :meth:`run` starts, so indices stay stable even
    if the page mutates while it is being probed.
    """

    def __init__(
        self,
        browser: BrowserSession,
        options: Optional[TraversalOptions] = None,
    ) -> None:
        self.browser = browser
        self.options = options or TraversalOptions()

    def run(self, candidates: Sequence[ElementHandle]) -> TraversalResult:
        frozen = tuple(candidates)
        total = len(frozen)
        logger.info("Traversing %d focus candidates", total)

        results: List[FocusResult] = []
        for index, element in enumerate(frozen):
            descriptor = UNREADABLE_ELEMENT
            try:
                descriptor = describe_element(self.browser, element)
                result = self._probe(element, descriptor, index, total)
            except BrowserSessionError as exc:
                result = FocusResult(
                    descriptor=descriptor,
                    focusable=False,
                    landed=False,
                    visible=False,
                    index=index,
                    total=total,
                    error=str(exc),
                )
            self._log_result(result)
            results.append(result)
        return TraversalResult(total=total, results=tuple(results))

    def _probe(
        self, element: ElementHandle, descriptor: ElementDescriptor, index: int, total: int
    ) -> FocusResult:
        browser = self.browser
        if not is_focusable(browser.tag_name(element), self._attributes(element)):
            return FocusResult(
                descriptor=descriptor,
                focusable=False,
                landed=False,
                visible=False,
                index=index,
                total=total,
                skipped=self.options.not_focusable is NotFocusablePolicy.SKIP,
            )

        browser.scroll_into_view(element)
        before = None
        if self.options.compare_focus_styles:
            before = capture_snapshot(browser, element, self.options.focus_style_properties)

        browser.focus(element)
        focused = browser.focused_element()

        landed = focused is not None and focused == element
        visible = focused is not None and browser.is_visible(focused)
        after = None
        if before is not None and focused is not None:
            after = capture_snapshot(browser, focused, self.options.focus_style_properties)

        return FocusResult(
            descriptor=descriptor,
            focusable=True,
            landed=landed,
            visible=visible,
            index=index,
            total=total,
            before=before,
            after=after,
        )

    def _attributes(self, element: ElementHandle) -> Dict[str, Optional[str]]:
        return {name: self.browser.get_attribute(element, name) for name in _CLASSIFIER_ATTRIBUTES}

    def _log_result(self, result: FocusResult) -> None:
        position = f"{result.index + 1}/{result.total}"
        outcome = result.outcome
        if outcome is FocusOutcome.NOT_FOCUSABLE and result.skipped:
            logger.debug("%s %s skipped (not focusable)", position, result.descriptor.selector)
        elif outcome is FocusOutcome.ERROR:
            logger.warning("%s %s could not be checked: %s", position, result.descriptor.selector, result.error)
        elif outcome.is_failure or outcome.is_warning:
            logger.warning("%s %s: %s", position, result.descriptor.selector, outcome.value)
        else:
            logger.debug("%s %s: %s", position, result.descriptor.selector, outcome.value)
