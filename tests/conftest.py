"""In-memory browser used to exercise the audits without Chrome."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from focus_auditor.audits.interaction import CLICKABLE_SELECTOR
from focus_auditor.audits.traversal import FOCUS_CANDIDATE_SELECTOR
from focus_auditor.collectors.browser import ScanOptions
from focus_auditor.errors import BrowserSessionError

FOCUS_TAGS = {"button", "a", "input", "select", "textarea"}


@dataclass(eq=False)
class FakeElement:
    """A DOM node; equality is identity, like a live element handle."""

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    visible: bool = True
    styles: Dict[str, str] = field(default_factory=dict)
    hover_styles: Dict[str, str] = field(default_factory=dict)
    focus_styles: Dict[str, str] = field(default_factory=dict)

    @property
    def outer_html(self) -> str:
        attrs = "".join(f' {name}="{value}"' for name, value in self.attrs.items())
        return f"<{self.tag}{attrs}>{self.text}</{self.tag}>"


def element(tag: str, text: str = "", **attrs: str) -> FakeElement:
    return FakeElement(tag=tag, text=text, attrs={k.replace("_", "-"): v for k, v in attrs.items()})


class FakeBrowser:
    def __init__(
        self,
        elements: Optional[List[FakeElement]] = None,
        scan_results: Optional[dict] = None,
    ) -> None:
        self.elements = list(elements or [])
        self.scan_results = scan_results or {"violations": [], "incomplete": []}
        self.focus_redirects: Dict[FakeElement, Optional[FakeElement]] = {}
        self.active: Optional[FakeElement] = None
        self.hovered: Optional[FakeElement] = None
        self.calls: List[tuple] = []
        self.closed = False
        self.scan_options: Optional[ScanOptions] = None
        self.stale: Set[FakeElement] = set()

    def _check(self, element: FakeElement) -> None:
        if element in self.stale:
            raise BrowserSessionError("stale element reference: element is not attached to the page")

    def navigate(self, url: str) -> None:
        self.calls.append(("navigate", url))

    def run_accessibility_scan(self, options: ScanOptions) -> dict:
        self.calls.append(("scan",))
        self.scan_options = options
        return self.scan_results

    def query_elements(self, selector: str) -> List[FakeElement]:
        self.calls.append(("query", selector))
        if selector == FOCUS_CANDIDATE_SELECTOR:
            return [
                el
                for el in self.elements
                if el.tag in FOCUS_TAGS
                or ("tabindex" in el.attrs and el.attrs["tabindex"] != "-1")
            ]
        if selector == CLICKABLE_SELECTOR:
            return [
                el for el in self.elements if el.tag == "button" or el.attrs.get("role") == "button"
            ]
        raise AssertionError(f"unexpected selector {selector!r}")

    def is_visible(self, element: FakeElement) -> bool:
        return element.visible

    def get_attribute(self, element: FakeElement, name: str) -> Optional[str]:
        return element.attrs.get(name)

    def has_attribute(self, element: FakeElement, name: str) -> bool:
        return name in element.attrs

    def tag_name(self, element: FakeElement) -> str:
        return element.tag

    def text(self, element: FakeElement) -> str:
        return element.text

    def outer_html(self, element: FakeElement) -> str:
        return element.outer_html

    def scroll_into_view(self, element: FakeElement) -> None:
        self._check(element)
        self.calls.append(("scroll", element))

    def focus(self, element: FakeElement) -> None:
        self._check(element)
        self.calls.append(("focus", element))
        self.active = self.focus_redirects.get(element, element)

    def focused_element(self) -> Optional[FakeElement]:
        return self.active

    def computed_style(self, element: FakeElement, name: str) -> str:
        self._check(element)
        if element is self.hovered and name in element.hover_styles:
            return element.hover_styles[name]
        if element is self.active and name in element.focus_styles:
            return element.focus_styles[name]
        return element.styles.get(name, "")

    def hover(self, element: FakeElement) -> None:
        self._check(element)
        self.calls.append(("hover", element))
        self.hovered = element

    def close(self) -> None:
        self.closed = True
