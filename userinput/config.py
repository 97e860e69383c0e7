"""Configuration management for userinput.

Config resolution order (highest priority first):
1. Programmatic (UserInputConfig constructed in code)
2. Environment variables (USERINPUT_PLATFORM, USERINPUT_PACKS, etc.),
   including values from a ``.env`` file in the working directory
3. Config file (~/.config/userinput/config.json, managed by `userinput config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "userinput"
CONFIG_FILE = CONFIG_DIR / "config.json"

VALID_PLATFORMS = ("", "windows", "mac", "unix")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class ConsoleConfig:
    """Console rendering of choice fields.

    - selected_marker: mark shown inside [ ] for the current selection
    - hide_passwords: read password components without echo
    """

    selected_marker: str = "x"
    hide_passwords: bool = True


@dataclass
class DefaultsConfig:
    """Defaults applied when a panel or the command line is silent."""

    platform: str = ""  # empty = detect the running platform
    packs: list[str] = field(default_factory=list)
    special_separator: str = ""
    panel_id: str = ""


@dataclass
class UserInputConfig:
    """Top-level userinput configuration.

    Examples:
        # Package use: no files needed
        config = UserInputConfig(defaults=DefaultsConfig(platform="unix"))

        # CLI use: loads from ~/.config/userinput/config.json
        config = UserInputConfig.load()
    """

    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls) -> "UserInputConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        _ensure_dotenv()
        if val := os.environ.get("USERINPUT_PLATFORM"):
            if val in VALID_PLATFORMS:
                config.defaults.platform = val
            else:
                logger.warning("Invalid USERINPUT_PLATFORM=%r, ignoring", val)
        if val := os.environ.get("USERINPUT_PACKS"):
            config.defaults.packs = split_list(val)
        if val := os.environ.get("USERINPUT_SPECIAL_SEPARATOR"):
            config.defaults.special_separator = val
        if val := os.environ.get("USERINPUT_PANEL"):
            config.defaults.panel_id = val
        if val := os.environ.get("USERINPUT_SELECTED_MARKER"):
            config.console.selected_marker = val
        if val := os.environ.get("USERINPUT_HIDE_PASSWORDS"):
            config.console.hide_passwords = val.lower() not in ("0", "false", "no")

        return config

    def save(self) -> None:
        """Save config to ~/.config/userinput/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "console": asdict(self.console),
            "defaults": asdict(self.defaults),
        }


# =============================================================================
# Config dict application
# =============================================================================


def split_list(value: str) -> list[str]:
    """Split a comma-separated list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _apply_dict(config: UserInputConfig, data: dict) -> None:
    """Apply a dict of values onto a UserInputConfig."""
    if "console" in data and isinstance(data["console"], dict):
        for k, v in data["console"].items():
            if hasattr(config.console, k):
                if k == "hide_passwords":
                    v = bool(v)
                setattr(config.console, k, v)
    if "defaults" in data and isinstance(data["defaults"], dict):
        for k, v in data["defaults"].items():
            if hasattr(config.defaults, k):
                if k == "packs" and isinstance(v, str):
                    v = split_list(v)
                setattr(config.defaults, k, v)


_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: UserInputConfig | None = None


def get_config() -> UserInputConfig:
    """Get the global UserInputConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = UserInputConfig.load()
    return _config


def configure(config: UserInputConfig) -> None:
    """Set the global UserInputConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
