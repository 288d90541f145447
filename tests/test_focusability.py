from focus_auditor.audits.focusability import is_focusable


def test_anchor_with_href_is_focusable():
    assert is_focusable("a", {"href": "#x"})
    assert is_focusable("A", {"href": "/contact"})


def test_anchor_without_href_is_not_focusable():
    assert not is_focusable("a", {})
    assert not is_focusable("a", {"href": ""})


def test_any_tabindex_makes_element_focusable():
    assert is_focusable("div", {"tabindex": "0"})
    assert is_focusable("span", {"tabindex": "-1"})
    assert is_focusable("a", {"tabindex": ""})


def test_native_controls_are_focusable():
    for tag in ("input", "select", "textarea", "button"):
        assert is_focusable(tag, {}), tag


def test_div_without_tabindex_or_href_is_not_focusable():
    assert not is_focusable("div", {})
    assert not is_focusable("div", {"href": None, "tabindex": None, "disabled": None})


def test_role_button_without_tabindex_is_not_focusable():
    assert not is_focusable("div", {"role": "button"})
