"""Records produced by the focus-order and visual-feedback audits."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

NO_DESCRIPTION = "no description"
DESCRIPTOR_MARKUP_LIMIT = 300
VIOLATION_MARKUP_LIMIT = 200

_NON_WORD = re.compile(r"\W+", re.ASCII)


@dataclass(frozen=True)
class PageTarget:
    """A URL under audit and the key its report is stored under."""

    url: str
    identifier: str

    @classmethod
    def from_url(cls, url: str) -> "PageTarget":
        return cls(url=url, identifier=_NON_WORD.sub("_", url))


@dataclass(frozen=True)
class ElementDescriptor:
    """Human-readable identity of an element, used for reporting only."""

    tag_name: str
    label: str
    markup: str
    id_selector: Optional[str] = None
    class_selector: Optional[str] = None

    @property
    def selector(self) -> str:
        return f"{self.tag_name}{self.id_selector or ''}{self.class_selector or ''}"

    def to_dict(self) -> dict:
        return {
            "tag_name": self.tag_name,
            "selector": self.selector,
            "label": self.label,
            "markup": self.markup,
        }


# Stands in for an element whose handle failed before it could be described.
UNREADABLE_ELEMENT = ElementDescriptor(tag_name="unknown", label=NO_DESCRIPTION, markup="")


@dataclass(frozen=True)
class StyleSnapshot:
    """Computed style values of one element at one instant."""

    values: Mapping[str, str] = field(default_factory=dict)

    def changed_properties(self, other: "StyleSnapshot") -> List[str]:
        names = list(self.values)
        names.extend(name for name in other.values if name not in self.values)
        return [name for name in names if self.values.get(name) != other.values.get(name)]

    def differs_from(self, other: "StyleSnapshot") -> bool:
        return bool(self.changed_properties(other))

    def to_dict(self) -> Dict[str, str]:
        return dict(self.values)


class FocusOutcome(str, Enum):
    """Classification of a single Tab stop, in reporting priority order."""

    ERROR = "error"
    NOT_FOCUSABLE = "not_focusable"
    NOT_VISIBLE = "not_visible"
    LANDED_ELSEWHERE = "landed_elsewhere"
    FOCUS_INDICATED = "focus_indicated"
    NO_FOCUS_INDICATOR = "no_focus_indicator"
    FOCUSED = "focused"

    @property
    def is_failure(self) -> bool:
        return self is FocusOutcome.LANDED_ELSEWHERE

    @property
    def is_warning(self) -> bool:
        return self in (
            FocusOutcome.ERROR,
            FocusOutcome.NOT_FOCUSABLE,
            FocusOutcome.NOT_VISIBLE,
            FocusOutcome.NO_FOCUS_INDICATOR,
        )


@dataclass(frozen=True)
class FocusResult:
    """Outcome of focusing one candidate during a traversal pass."""

    descriptor: ElementDescriptor
    focusable: bool
    landed: bool
    visible: bool
    index: int
    total: int
    before: Optional[StyleSnapshot] = None
    after: Optional[StyleSnapshot] = None
    skipped: bool = False
    error: Optional[str] = None

    @property
    def style_changed(self) -> Optional[bool]:
        if self.before is None or self.after is None:
            return None
        return self.before.differs_from(self.after)

    @property
    def outcome(self) -> FocusOutcome:
        if self.error is not None:
            return FocusOutcome.ERROR
        if not self.focusable:
            return FocusOutcome.NOT_FOCUSABLE
        if not self.visible:
            return FocusOutcome.NOT_VISIBLE
        if not self.landed:
            return FocusOutcome.LANDED_ELSEWHERE
        changed = self.style_changed
        if changed is None:
            return FocusOutcome.FOCUSED
        return FocusOutcome.FOCUS_INDICATED if changed else FocusOutcome.NO_FOCUS_INDICATOR

    def to_dict(self) -> dict:
        data = {
            "index": self.index,
            "total": self.total,
            "element": self.descriptor.to_dict(),
            "focusable": self.focusable,
            "landed": self.landed,
            "visible": self.visible,
            "outcome": self.outcome.value,
            "skipped": self.skipped,
        }
        if self.error is not None:
            data["error"] = self.error
        if self.style_changed is not None:
            data["style_changed"] = self.style_changed
            data["before"] = self.before.to_dict()
            data["after"] = self.after.to_dict()
        return data


@dataclass(frozen=True)
class TraversalResult:
    """All focus results of one pass; ``total`` is fixed before the pass starts."""

    total: int
    results: Tuple[FocusResult, ...] = ()

    @property
    def failures(self) -> List[FocusResult]:
        return [result for result in self.results if result.outcome.is_failure]

    @property
    def warnings(self) -> List[FocusResult]:
        return [
            result
            for result in self.results
            if result.outcome.is_warning and not result.skipped
        ]

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "results": [result.to_dict() for result in self.results],
        }


@dataclass(frozen=True)
class InteractionResult:
    """Style comparison around a hover on one clickable control.

    ``error`` is set when the browser failed mid-probe; such a result has no
    usable snapshots and counts neither as feedback nor as missing feedback.
    """

    descriptor: ElementDescriptor
    index: int
    before: StyleSnapshot = field(default_factory=StyleSnapshot)
    after: StyleSnapshot = field(default_factory=StyleSnapshot)
    error: Optional[str] = None

    @property
    def style_changed(self) -> bool:
        return self.error is None and self.before.differs_from(self.after)

    @property
    def missing_feedback(self) -> bool:
        return self.error is None and not self.style_changed

    @property
    def changed_properties(self) -> List[str]:
        if self.error is not None:
            return []
        return self.before.changed_properties(self.after)

    def to_dict(self) -> dict:
        data = {
            "index": self.index,
            "element": self.descriptor.to_dict(),
            "style_changed": self.style_changed,
            "changed_properties": self.changed_properties,
            "before": self.before.to_dict(),
            "after": self.after.to_dict(),
        }
        if self.error is not None:
            data["error"] = self.error
        return data


class Impact(str, Enum):
    """axe-core severity, ordered from least to most severe."""

    UNKNOWN = "unknown"
    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Impact":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def rank(self) -> int:
        return list(Impact).index(self)


class WcagLevel(str, Enum):
    AAA = "AAA"
    AA = "AA"
    A = "A"
    UNKNOWN = "Unknown"


class FindingCategory(str, Enum):
    """Whether axe-core confirmed a finding or could not fully decide it."""

    CONFIRMED = "confirmed"
    POSSIBLE = "possible"


@dataclass(frozen=True)
class AffectedNode:
    targets: Tuple[str, ...]
    snippet: str

    @property
    def selector(self) -> str:
        return ", ".join(self.targets)

    def to_dict(self) -> dict:
        return {"targets": list(self.targets), "snippet": self.snippet}


@dataclass(frozen=True)
class ViolationRecord:
    """One normalised axe-core finding."""

    rule_id: str
    category: FindingCategory
    impact: Impact
    description: str
    help: str
    help_url: Optional[str]
    wcag_level: WcagLevel
    tags: Tuple[str, ...] = ()
    nodes: Tuple[AffectedNode, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.rule_id,
            "category": self.category.value,
            "impact": self.impact.value,
            "description": self.description,
            "help": self.help,
            "help_url": self.help_url,
            "wcag_level": self.wcag_level.value,
            "tags": list(self.tags),
            "nodes": [node.to_dict() for node in self.nodes],
        }
