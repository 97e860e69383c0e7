"""CLI commands for userinput."""

from . import (
    run,
    apply,
    template,
    inspect,
    config_cmd,
)

__all__ = [
    "run",
    "apply",
    "template",
    "inspect",
    "config_cmd",
]
