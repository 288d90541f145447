"""Decides whether a candidate element is a legitimate Tab stop."""
from __future__ import annotations

from typing import Mapping, Optional

NATURALLY_FOCUSABLE_TAGS = frozenset({"input", "select", "textarea", "button"})


def is_focusable(tag_name: str, attributes: Mapping[str, Optional[str]]) -> bool:
    """Return ``True`` if the element would receive focus via Tab.

    ``attributes`` maps attribute names to their values; an attribute that is
    present without a value maps to ``""`` and an absent one is simply
    missing (or maps to ``None``).

    Candidates are expected to be pre-filtered for visibility, ``disabled``
    and ``tabindex="-1"``. Custom controls such as ``div[role=button]``
    without a ``tabindex`` are deliberately reported as not focusable.
    """
    tag = tag_name.lower()
    href = attributes.get("href")
    if tag == "a" and href:
        return True
    if attributes.get("tabindex") is not None:
        return True
    return tag in NATURALLY_FOCUSABLE_TAGS
