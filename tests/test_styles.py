from conftest import FakeBrowser, element

from focus_auditor.audits.styles import HOVER_STYLE_PROPERTIES, capture_snapshot
from focus_auditor.models import StyleSnapshot


def test_identical_snapshots_do_not_differ():
    values = {"color": "rgb(0, 0, 0)", "opacity": "1"}
    assert not StyleSnapshot(dict(values)).differs_from(StyleSnapshot(dict(values)))


def test_single_property_change_is_detected():
    before = StyleSnapshot({"color": "rgb(0, 0, 0)", "opacity": "1"})
    after = StyleSnapshot({"color": "rgb(0, 0, 0)", "opacity": "0.8"})
    assert before.differs_from(after)
    assert before.changed_properties(after) == ["opacity"]


def test_comparison_is_exact_string_inequality():
    before = StyleSnapshot({"color": "rgb(0, 0, 0)"})
    after = StyleSnapshot({"color": "rgba(0, 0, 0, 1)"})
    assert before.differs_from(after)


def test_capture_reads_every_tracked_property():
    button = element("button", "Go")
    button.styles = {"color": "red"}
    snapshot = capture_snapshot(FakeBrowser(), button)
    assert tuple(snapshot.values) == HOVER_STYLE_PROPERTIES
    assert snapshot.values["color"] == "red"
    assert snapshot.values["cursor"] == ""
