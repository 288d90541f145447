"""Report composition and writers (text, HTML, JSON and PDF)."""
from __future__ import annotations

import html
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

try:
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.platypus import Paragraph, Preformatted, SimpleDocTemplate, Spacer
except ImportError:  # pragma: no cover - optional dependency
    A4 = None
    SimpleDocTemplate = None

from .audits.accessibility import AccessibilityReport
from .models import (
    FindingCategory,
    FocusOutcome,
    FocusResult,
    InteractionResult,
    PageTarget,
    TraversalResult,
)

logger = logging.getLogger(__name__)

RULE = "_" * 72
REPORT_FILE_PREFIX = "final-report-"

_FOCUS_STATUS = {
    FocusOutcome.NOT_FOCUSABLE: "[WARN] Element is not focusable.",
    FocusOutcome.NOT_VISIBLE: "[WARN] Focused element is not visible!",
    FocusOutcome.LANDED_ELSEWHERE: "[FAIL] Focus did not land on this element via Tab.",
    FocusOutcome.FOCUS_INDICATED: "[OK] Visual focus indicator detected.",
    FocusOutcome.NO_FOCUS_INDICATOR: "[WARN] No visual focus indicator detected.",
    FocusOutcome.FOCUSED: "[OK] Element received focus.",
}
_SKIPPED_STATUS = "[SKIP] Not focusable, skipped."


class SectionKind(str, Enum):
    """Report sections, declared in the order they must appear."""

    ACCESSIBILITY = "accessibility"
    TRAVERSAL = "traversal"
    INTERACTION = "interaction"

    @property
    def position(self) -> int:
        return list(SectionKind).index(self)


@dataclass(frozen=True)
class ReportSection:
    kind: SectionKind
    title: str
    lines: Tuple[str, ...]
    data: Dict = field(default_factory=dict)

    def render(self) -> str:
        return "\n".join((f"===== {self.title} =====", "") + self.lines)


@dataclass(frozen=True)
class PageReport:
    """Everything found on one page, in fixed section order.

    Sections are only ever appended, and :meth:`append` returns a new report,
    so a report handed to a writer can no longer change.
    """

    target: PageTarget
    sections: Tuple[ReportSection, ...] = ()

    @property
    def title(self) -> str:
        return f"Accessibility and Navigation Report - {self.target.url}"

    def append(self, section: ReportSection) -> "PageReport":
        if self.sections and section.kind.position <= self.sections[-1].kind.position:
            raise ValueError(
                f"Section {section.kind.value!r} cannot follow {self.sections[-1].kind.value!r}"
            )
        return PageReport(target=self.target, sections=self.sections + (section,))

    def section(self, kind: SectionKind) -> Optional[ReportSection]:
        for section in self.sections:
            if section.kind is kind:
                return section
        return None

    def render_text(self) -> str:
        return "\n\n".join(section.render() for section in self.sections) + "\n"

    def to_dict(self) -> dict:
        return {
            "url": self.target.url,
            "identifier": self.target.identifier,
            "sections": [
                {"kind": section.kind.value, "title": section.title, **section.data}
                for section in self.sections
            ],
        }


class ReportComposer:
    """Turns the three result collections of one page into report sections."""

    def compose(
        self,
        target: PageTarget,
        accessibility: AccessibilityReport,
        traversal: TraversalResult,
        interactions: Sequence[InteractionResult],
    ) -> PageReport:
        report = PageReport(target=target)
        report = report.append(self.accessibility_section(target, accessibility))
        report = report.append(self.traversal_section(target, traversal))
        return report.append(self.interaction_section(target, interactions))

    def accessibility_section(
        self, target: PageTarget, accessibility: AccessibilityReport
    ) -> ReportSection:
        lines: List[str] = [f"Total Items Detected: {len(accessibility.records)}", ""]
        for record in accessibility.records:
            kind = "Confirmed issue" if record.category is FindingCategory.CONFIRMED else "Possible issue"
            lines.extend(
                [
                    f"ID: {record.rule_id}",
                    f"Type: {kind}",
                    f"Impact: {record.impact.value}",
                    f"WCAG Level: {record.wcag_level.value}",
                    f"Description: {record.description}",
                    f"Suggestions: {record.help}",
                    f"More Details: {record.help_url or ''}",
                    f"Tags: {', '.join(record.tags)}",
                    f"Total Elements: {len(record.nodes)}",
                    "",
                ]
            )
            for position, node in enumerate(record.nodes, start=1):
                lines.append(f"  {position}. Element: {node.selector}")
                lines.append(f"     HTML: {node.snippet}...")
            lines.extend([RULE, ""])
        return ReportSection(
            kind=SectionKind.ACCESSIBILITY,
            title=f"Accessibility Report - {target.url}",
            lines=tuple(lines),
            data=accessibility.to_dict(),
        )

    def traversal_section(self, target: PageTarget, traversal: TraversalResult) -> ReportSection:
        lines: List[str] = [
            f"Elements Found: {traversal.total}",
            f"Failures: {len(traversal.failures)}",
            f"Warnings: {len(traversal.warnings)}",
        ]
        for result in traversal.results:
            lines.extend(
                [
                    "",
                    f"{result.index + 1}/{result.total}. {result.descriptor.label}",
                    f"-> Selector: {result.descriptor.selector}",
                    f"-> HTML: {result.descriptor.markup}...",
                    self._focus_status(result),
                    RULE,
                ]
            )
        return ReportSection(
            kind=SectionKind.TRAVERSAL,
            title=f"Tab Navigation Report - {target.url}",
            lines=tuple(lines),
            data=traversal.to_dict(),
        )

    def interaction_section(
        self, target: PageTarget, interactions: Sequence[InteractionResult]
    ) -> ReportSection:
        missing = sum(1 for result in interactions if result.missing_feedback)
        lines: List[str] = [
            f"Buttons Found: {len(interactions)}",
            f"Without Hover Feedback: {missing}",
        ]
        for result in interactions:
            lines.extend(
                [
                    "",
                    f"  Button {result.index + 1}: {result.descriptor.label}",
                    f"  -> Selector: {result.descriptor.selector}",
                    f"  -> HTML: {result.descriptor.markup}...",
                ]
            )
            if result.error is not None:
                lines.append(f"  [WARN] Hover could not be checked: {result.error}")
            elif result.style_changed:
                lines.append(
                    "  [OK] Hover feedback detected ("
                    + ", ".join(result.changed_properties)
                    + ")."
                )
            else:
                lines.append("  [WARN] No visual feedback on hover!")
            lines.append(f"  {RULE}")
        return ReportSection(
            kind=SectionKind.INTERACTION,
            title=f"Button Interaction Report - {target.url}",
            lines=tuple(lines),
            data={
                "total": len(interactions),
                "without_feedback": missing,
                "results": [result.to_dict() for result in interactions],
            },
        )

    @staticmethod
    def _focus_status(result: FocusResult) -> str:
        if result.skipped:
            return _SKIPPED_STATUS
        if result.outcome is FocusOutcome.ERROR:
            return f"[WARN] Element could not be checked: {result.error}"
        return _FOCUS_STATUS[result.outcome]


class ReportWriter(Protocol):
    def write(self, report: PageReport, output_dir: Path) -> Optional[Path]:
        ...


def report_path(report: PageReport, output_dir: Path, suffix: str) -> Path:
    return output_dir / f"{REPORT_FILE_PREFIX}{report.target.identifier}{suffix}"


@dataclass
class TextReportWriter:
    """Writes the plain-text rendering of a page report."""

    def write(self, report: PageReport, output_dir: Path) -> Path:
        path = report_path(report, output_dir, ".txt")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.render_text(), encoding="utf-8")
        return path


@dataclass
class HTMLReportWriter:
    """Wraps the text rendering in a minimal standalone HTML document."""

    lang: str = "en"

    def write(self, report: PageReport, output_dir: Path) -> Path:
        path = report_path(report, output_dir, ".html")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(report), encoding="utf-8")
        return path

    def render(self, report: PageReport) -> str:
        title = html.escape(report.title)
        body = html.escape(report.render_text())
        return (
            "<!DOCTYPE html>\n"
            f'<html lang="{self.lang}">\n'
            "<head>\n"
            '  <meta charset="UTF-8">\n'
            f"  <title>{title}</title>\n"
            "  <style>\n"
            "    body { font-family: Arial, sans-serif; padding: 2rem; background: #f4f4f4; }\n"
            "    pre { background: #fff; padding: 1rem; border: 1px solid #ddd;"
            " border-radius: 8px; white-space: pre-wrap; }\n"
            "  </style>\n"
            "</head>\n"
            "<body>\n"
            f"  <h1>{title}</h1>\n"
            f"  <pre>{body}</pre>\n"
            "</body>\n"
            "</html>\n"
        )


@dataclass
class JSONReportWriter:
    """Writes the structured page report to a JSON artifact."""

    indent: int = 2

    def write(self, report: PageReport, output_dir: Path) -> Path:
        path = report_path(report, output_dir, ".json")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(report.to_dict(), indent=self.indent), encoding="utf-8")
        return path


@dataclass
class PDFReportWriter:
    """Writes a PDF with one block per report section; a no-op without reportlab."""

    def write(self, report: PageReport, output_dir: Path) -> Optional[Path]:
        if SimpleDocTemplate is None:
            logger.warning("reportlab is not installed; skipping PDF report for %s", report.target.url)
            return None

        path = report_path(report, output_dir, ".pdf")
        path.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(str(path), pagesize=A4)
        styles = getSampleStyleSheet()
        elements = [Paragraph(html.escape(report.title), styles["Title"]), Spacer(1, 12)]
        for section in report.sections:
            elements.append(Paragraph(html.escape(section.title), styles["Heading2"]))
            elements.append(Spacer(1, 6))
            elements.append(Preformatted("\n".join(section.lines), styles["Code"], maxLineLength=95))
            elements.append(Spacer(1, 12))
        doc.build(elements)
        return path


WRITERS = {
    "text": TextReportWriter,
    "html": HTMLReportWriter,
    "json": JSONReportWriter,
    "pdf": PDFReportWriter,
}


def build_writers(formats: Sequence[str]) -> List[ReportWriter]:
    writers: List[ReportWriter] = []
    for name in formats:
        try:
            writers.append(WRITERS[name]())
        except KeyError:
            raise ValueError(
                f"Unknown report format {name!r}; expected one of {', '.join(WRITERS)}"
            ) from None
    return writers
