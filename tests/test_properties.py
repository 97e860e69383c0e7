"""Tests for property file reading and writing."""

import io

import pytest

from userinput.core.errors import SpecError
from userinput.panel.properties import (
    load_properties,
    parse_properties,
    write_properties,
    write_template,
)


def test_parse_properties():
    text = "# comment\n! also comment\n\nhost = example.org\nurl=http://x:80\nflag\nport: 5432\n"
    assert parse_properties(text) == {
        "host": "example.org",
        "url": "http://x:80",
        "flag": "",
        "port": "5432",
    }


def test_load_yaml_properties(tmp_path):
    path = tmp_path / "answers.yaml"
    path.write_text("host: example.org\nenabled: true\nport: 80\nempty:\n")
    assert load_properties(path) == {
        "host": "example.org",
        "enabled": "true",
        "port": "80",
        "empty": "",
    }


def test_load_plain_properties(tmp_path):
    path = tmp_path / "install.properties"
    path.write_text("a=1\n")
    assert load_properties(path) == {"a": "1"}


@pytest.mark.parametrize("content", ["- a\n- b\n", "a: [1\n"])
def test_load_bad_yaml(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(SpecError):
        load_properties(path)


def test_load_missing(tmp_path):
    with pytest.raises(SpecError):
        load_properties(tmp_path / "nope.properties")


def test_writers():
    sink = io.StringIO()
    write_properties({"a": "1", "b": ""}, sink)
    write_template(["x", "y"], sink)
    assert sink.getvalue() == "a=1\nb=\nx=\ny=\n"


def test_written_values_read_back_unchanged():
    values = {
        "lead": "  indented",
        "trail": "spaced  ",
        "multi": "line one\nline two",
        "win.path": "C:\\Program Files\\App",
        "tab": "a\tb",
        "empty": "",
        "url": "http://x:80/?a=b",
        "key:with=separators and space": "v",
        "#hash": "! not a comment",
    }
    sink = io.StringIO()
    write_properties(values, sink)
    assert sink.getvalue().count("\n") == len(values)
    assert parse_properties(sink.getvalue()) == values


def test_parse_escapes():
    text = "path=C:\\\\dir\nmsg=a\\nb\nodd\\ key\\:x = \\ lead\nunknown=\\q\n"
    assert parse_properties(text) == {
        "path": "C:\\dir",
        "msg": "a\nb",
        "odd key:x": " lead",
        "unknown": "q",
    }


def test_template_escapes_names():
    sink = io.StringIO()
    write_template(["a b", "c=d"], sink)
    assert sink.getvalue() == "a\\ b=\nc\\=d=\n"
