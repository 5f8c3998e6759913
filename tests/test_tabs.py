"""Tests for result tab selection"""

import pytest

from protocol_risk.core.tabs import ResultTab, TabSelector


def test_defaults_to_findings():
    assert TabSelector().active is ResultTab.FINDINGS


def test_select_by_enum_and_name():
    tabs = TabSelector()
    assert tabs.select(ResultTab.RECOMMENDATIONS) is ResultTab.RECOMMENDATIONS
    assert tabs.select("findings") is ResultTab.FINDINGS
    assert tabs.active is ResultTab.FINDINGS


def test_select_is_idempotent():
    tabs = TabSelector()
    tabs.select("recommendations")
    tabs.select("recommendations")
    assert tabs.active is ResultTab.RECOMMENDATIONS


def test_unknown_tab_rejected():
    tabs = TabSelector()
    with pytest.raises(ValueError):
        tabs.select("metrics")
    assert tabs.active is ResultTab.FINDINGS


def test_toggle():
    tabs = TabSelector()
    assert tabs.toggle() is ResultTab.RECOMMENDATIONS
    assert tabs.toggle() is ResultTab.FINDINGS
