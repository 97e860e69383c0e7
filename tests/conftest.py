"""Shared fixtures for userinput tests."""

import io

import pytest
from rich.console import Console

from userinput import config as config_module
from userinput.config import UserInputConfig, configure, reset_config
from userinput.core.store import VariableStore
from userinput.core.tree import node_from_data
from userinput.panel.console import PanelConsole


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config file and environment."""
    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(
        config_module, "CONFIG_FILE", tmp_path / "config" / "config.json"
    )
    monkeypatch.setattr(config_module, "_dotenv_loaded", True)
    for name in (
        "USERINPUT_PLATFORM",
        "USERINPUT_PACKS",
        "USERINPUT_SPECIAL_SEPARATOR",
        "USERINPUT_PANEL",
        "USERINPUT_SELECTED_MARKER",
        "USERINPUT_HIDE_PASSWORDS",
    ):
        monkeypatch.delenv(name, raising=False)
    configure(UserInputConfig())
    yield
    reset_config()


@pytest.fixture
def make_panel():
    """Build a panel node from field dicts using the YAML mapping rules."""

    def _make(fields: list[dict], **attributes):
        return node_from_data("panel", {**attributes, "field": fields})

    return _make


@pytest.fixture
def scripted_console():
    """A PanelConsole that reads the given answers into a recorded output."""

    def _make(*answers: str) -> PanelConsole:
        stream = io.StringIO("".join(f"{a}\n" for a in answers))
        return PanelConsole(Console(file=io.StringIO(), width=200), stream=stream)

    return _make


@pytest.fixture
def store():
    return VariableStore()
