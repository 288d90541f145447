"""Browser capability consumed by the audits."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence

ElementHandle = Any


@dataclass(frozen=True)
class ScanOptions:
    """Options forwarded to axe-core's ``axe.run``."""

    run_only_tags: Optional[Sequence[str]] = None
    result_types: Sequence[str] = ("violations", "incomplete")

    def to_axe_options(self) -> dict:
        options: dict = {"resultTypes": list(self.result_types)}
        if self.run_only_tags:
            options["runOnly"] = {"type": "tag", "values": list(self.run_only_tags)}
        return options


class BrowserSession(Protocol):
    """Everything the audits need from a live page.

    Element handles are opaque. Two handles refer to the same DOM node iff
    they compare equal with ``==``; nothing in the audits rebuilds a selector
    to decide identity.
    """

    def navigate(self, url: str) -> None:
        ...

    def run_accessibility_scan(self, options: ScanOptions) -> dict:
        ...

    def query_elements(self, selector: str) -> List[ElementHandle]:
        ...

    def is_visible(self, element: ElementHandle) -> bool:
        ...

    def get_attribute(self, element: ElementHandle, name: str) -> Optional[str]:
        ...

    def has_attribute(self, element: ElementHandle, name: str) -> bool:
        ...

    def tag_name(self, element: ElementHandle) -> str:
        ...

    def text(self, element: ElementHandle) -> str:
        ...

    def outer_html(self, element: ElementHandle) -> str:
        ...

    def scroll_into_view(self, element: ElementHandle) -> None:
        ...

    def focus(self, element: ElementHandle) -> None:
        ...

    def focused_element(self) -> Optional[ElementHandle]:
        ...

    def computed_style(self, element: ElementHandle, name: str) -> str:
        ...

    def hover(self, element: ElementHandle) -> None:
        ...

    def close(self) -> None:
        ...
