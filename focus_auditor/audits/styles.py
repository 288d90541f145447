"""Style snapshots used to detect hover and focus feedback."""
from __future__ import annotations

from typing import Sequence

from ..collectors.browser import BrowserSession, ElementHandle
from ..models import StyleSnapshot

HOVER_STYLE_PROPERTIES = (
    "color",
    "background-color",
    "border-color",
    "border",
    "opacity",
    "text-decoration",
    "text-decoration-line",
    "font-weight",
    "transform",
    "box-shadow",
    "cursor",
    "text-shadow",
    "outline",
    "border-radius",
    "transition",
)

FOCUS_STYLE_PROPERTIES = (
    "outline",
    "box-shadow",
    "border-color",
    "background-color",
    "color",
    "transform",
)


def capture_snapshot(
    browser: BrowserSession,
    element: ElementHandle,
    properties: Sequence[str] = HOVER_STYLE_PROPERTIES,
) -> StyleSnapshot:
    return StyleSnapshot(
        values={name: browser.computed_style(element, name) for name in properties}
    )
