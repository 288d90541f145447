import pytest

from conftest import FakeBrowser

from focus_auditor.audits.accessibility import (
    AccessibilityAuditor,
    classify_wcag_level,
    node_snippet,
)
from focus_auditor.collectors.browser import ScanOptions
from focus_auditor.errors import ScanFailedError
from focus_auditor.models import FindingCategory, Impact, WcagLevel


def _finding(rule_id, tags, impact="serious", nodes=None):
    return {
        "id": rule_id,
        "impact": impact,
        "description": f"{rule_id} description",
        "help": f"Fix {rule_id}",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.8/{rule_id}",
        "tags": tags,
        "nodes": nodes if nodes is not None else [{"target": ["#main"], "html": "<div id=\"main\"></div>"}],
    }


def test_wcag_level_priority():
    assert classify_wcag_level(["wcag2a", "wcag2aa"]) is WcagLevel.AA
    assert classify_wcag_level(["wcag21a", "wcag2aaa"]) is WcagLevel.AAA
    assert classify_wcag_level(["cat.color", "wcag21aa"]) is WcagLevel.AA
    assert classify_wcag_level(["wcag2a"]) is WcagLevel.A
    assert classify_wcag_level(["best-practice"]) is WcagLevel.UNKNOWN
    assert classify_wcag_level([]) is WcagLevel.UNKNOWN


def test_confirmed_then_possible_findings_keep_scan_order():
    raw = {
        "violations": [_finding("image-alt", ["wcag2a"]), _finding("color-contrast", ["wcag2aa"])],
        "incomplete": [_finding("aria-valid-attr-value", ["wcag2a"], impact=None)],
    }

    report = AccessibilityAuditor().audit_from_raw(raw)

    assert [r.rule_id for r in report.records] == [
        "image-alt",
        "color-contrast",
        "aria-valid-attr-value",
    ]
    assert [r.category for r in report.records] == [
        FindingCategory.CONFIRMED,
        FindingCategory.CONFIRMED,
        FindingCategory.POSSIBLE,
    ]
    assert report.records[2].impact is Impact.UNKNOWN
    assert len(report.confirmed) == 2
    assert len(report.possible) == 1


def test_node_markup_is_bounded_and_single_line():
    html = "<div>\n" + "a" * 500 + "\n</div>"
    raw = {"violations": [_finding("region", ["best-practice"], nodes=[{"target": ["div", "span"], "html": html}])]}

    record = AccessibilityAuditor().audit_from_raw(raw).records[0]

    node = record.nodes[0]
    assert node.selector == "div, span"
    assert "\n" not in node.snippet
    assert len(node.snippet) <= 200
    assert node_snippet("  <p>\nx</p>  ") == "<p>x</p>"


def test_empty_results():
    assert AccessibilityAuditor().audit_from_raw(None).records == []
    assert AccessibilityAuditor().audit_from_raw({"violations": [], "incomplete": []}).records == []


def test_scan_error_is_raised():
    with pytest.raises(ScanFailedError):
        AccessibilityAuditor().audit_from_raw({"error": "axe is not defined"})


def test_audit_runs_scan_with_configured_options():
    browser = FakeBrowser(scan_results={"violations": [_finding("label", ["wcag2a"])], "incomplete": []})
    options = ScanOptions(run_only_tags=("wcag2a", "wcag2aa"))

    report = AccessibilityAuditor(options=options).audit(browser)

    assert browser.scan_options is options
    assert report.records[0].wcag_level is WcagLevel.A
    assert options.to_axe_options() == {
        "resultTypes": ["violations", "incomplete"],
        "runOnly": {"type": "tag", "values": ["wcag2a", "wcag2aa"]},
    }


def test_impact_parsing_and_order():
    assert Impact.parse("Critical") is Impact.CRITICAL
    assert Impact.parse(None) is Impact.UNKNOWN
    assert Impact.parse("catastrophic") is Impact.UNKNOWN
    assert Impact.MINOR.rank < Impact.MODERATE.rank < Impact.SERIOUS.rank < Impact.CRITICAL.rank
