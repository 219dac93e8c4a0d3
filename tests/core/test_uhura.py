"""Tests for Uhura environment override scanning."""

import pytest

from ucover.core.exceptions import MissingOverrideFileError
from ucover.core.uhura.uhura import EnvironmentOverrideScanner, Uhura


@pytest.mark.parametrize(
    "name,expected",
    [
        ("widget.jpi", True),
        ("WIDGET_JPI", True),
        ("widget_jpi", True),
        ("Widget_Jpi", True),
        ("widget.JPI", False),
        ("WIDGET_JPI_PATH", False),
        ("PATH", False),
    ],
)
def test_is_plugin_variable(name, expected):
    assert Uhura().is_plugin_variable(name) is expected


def test_scan_returns_entries(tmp_path):
    package = tmp_path / "widget-2.0.0.hpi"
    package.write_bytes(b"")
    environment = {"WIDGET_JPI": str(package), "HOME": "/root", "gadget.jpi": str(package)}

    entries = EnvironmentOverrideScanner().scan(environment)

    assert {e.variable_name for e in entries} == {"WIDGET_JPI", "gadget.jpi"}
    assert all(e.file_path == str(package) for e in entries)


def test_scan_missing_file(tmp_path):
    missing = tmp_path / "missing.hpi"
    with pytest.raises(MissingOverrideFileError) as exc_info:
        Uhura().scan({"WIDGET_JPI": str(missing)})
    assert exc_info.value.variable_name == "WIDGET_JPI"
    assert str(missing) in str(exc_info.value)


def test_scan_directory_is_not_a_file(tmp_path):
    with pytest.raises(MissingOverrideFileError):
        Uhura().scan({"WIDGET_JPI": str(tmp_path)})


def test_scan_empty_environment():
    assert Uhura().scan({}) == []
