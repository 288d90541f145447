"""Builds report-friendly descriptors for live element handles."""
from __future__ import annotations

from typing import Optional

from ..collectors.browser import BrowserSession, ElementHandle
from ..models import DESCRIPTOR_MARKUP_LIMIT, NO_DESCRIPTION, ElementDescriptor


def describe_element(
    browser: BrowserSession,
    element: ElementHandle,
    *,
    markup_limit: int = DESCRIPTOR_MARKUP_LIMIT,
) -> ElementDescriptor:
    label = (
        browser.text(element).strip()
        or browser.get_attribute(element, "aria-label")
        or browser.get_attribute(element, "placeholder")
        or NO_DESCRIPTION
    )
    return ElementDescriptor(
        tag_name=browser.tag_name(element).lower(),
        label=label,
        markup=truncate_markup(browser.outer_html(element), markup_limit),
        id_selector=_id_selector(browser.get_attribute(element, "id")),
        class_selector=_class_selector(browser.get_attribute(element, "class")),
    )


def truncate_markup(markup: Optional[str], limit: int) -> str:
    return (markup or "").strip()[:limit]


def _id_selector(value: Optional[str]) -> Optional[str]:
    return f"#{value}" if value else None


def _class_selector(value: Optional[str]) -> Optional[str]:
    classes = (value or "").split()
    if not classes:
        return None
    return "." + ".".join(classes)
