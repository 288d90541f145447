"""Hover feedback checks for clickable controls."""
from __future__ import annotations

import logging
import time
from typing import Callable, List, Sequence, Tuple

from ..collectors.browser import BrowserSession, ElementHandle
from ..errors import BrowserSessionError
from ..models import UNREADABLE_ELEMENT, ElementDescriptor, InteractionResult
from .descriptors import describe_element
from .styles import HOVER_STYLE_PROPERTIES, capture_snapshot

logger = logging.getLogger(__name__)

CLICKABLE_SELECTOR = 'button, [role="button"]'
_SUPPRESSING_ATTRIBUTES = ("disabled", "aria-expanded")


def collect_clickable_controls(browser: BrowserSession) -> List[ElementHandle]:
    """Visible, enabled, non-expandable buttons in DOM order."""
    controls = []
    for element in browser.query_elements(CLICKABLE_SELECTOR):
        try:
            if not browser.is_visible(element):
                continue
            if any(browser.has_attribute(element, name) for name in _SUPPRESSING_ATTRIBUTES):
                continue
            if browser.get_attribute(element, "data-role") == "none":
                continue
        except BrowserSessionError as exc:
            logger.warning("Dropping control that left the page: %s", exc)
            continue
        controls.append(element)
    return controls


class InteractionProber:
    """Hovers each control and compares computed styles before and after."""

    def __init__(
        self,
        browser: BrowserSession,
        *,
        settle_interval: float = 0.3,
        properties: Tuple[str, ...] = HOVER_STYLE_PROPERTIES,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.browser = browser
        self.settle_interval = settle_interval
        self.properties = properties
        self._sleep = sleep

    def run(self, controls: Sequence[ElementHandle]) -> List[InteractionResult]:
        logger.info("Probing hover feedback on %d controls", len(controls))
        results = []
        for index, control in enumerate(controls):
            try:
                result = self.probe(control, index)
            except BrowserSessionError as exc:
                result = InteractionResult(descriptor=UNREADABLE_ELEMENT, index=index, error=str(exc))
            if result.error is not None:
                logger.warning("Hover check %d failed: %s", index + 1, result.error)
            elif result.style_changed:
                logger.debug("%s changed %s on hover", result.descriptor.selector, result.changed_properties)
            else:
                logger.warning("No hover feedback on %s (%s)", result.descriptor.selector, result.descriptor.label)
            results.append(result)
        return results

    def probe(self, control: ElementHandle, index: int = 0) -> InteractionResult:
        descriptor = describe_element(self.browser, control)
        try:
            return self._compare_hover(control, descriptor, index)
        except BrowserSessionError as exc:
            return InteractionResult(descriptor=descriptor, index=index, error=str(exc))

    def _compare_hover(
        self, control: ElementHandle, descriptor: ElementDescriptor, index: int
    ) -> InteractionResult:
        self.browser.scroll_into_view(control)
        before = capture_snapshot(self.browser, control, self.properties)
        self.browser.hover(control)
        if self.settle_interval:
            self._sleep(self.settle_interval)
        after = capture_snapshot(self.browser, control, self.properties)
        return InteractionResult(descriptor=descriptor, index=index, before=before, after=after)
