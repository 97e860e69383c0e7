"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for scripts and CI

Example:
    from ..cli.utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Applied properties", panel="database", count=3)
        out.table("Fields", ["Kind", "Variable"], [["text", "db.host"]])
        return out.finish()
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.table import Table


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Panel failed or was quit
        2 = Spec error (unreadable document, unknown panel)
        3 = File not found
        4 = Invalid arguments
    """

    SUCCESS = 0
    PANEL_FAILED = 1
    SPEC_ERROR = 2
    FILE_NOT_FOUND = 3
    INVALID_ARGUMENT = 4


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output with colors and formatting.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        # Ensure _data is a fresh dict for each instance
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str, *, suggestion: str | None = None) -> None:
        """Output a warning message."""
        if self.json_mode:
            warning_obj: dict[str, Any] = {"message": message}
            if suggestion:
                warning_obj["suggestion"] = suggestion
            self._data["warnings"].append(warning_obj)
        else:
            self.console.print(f"[yellow]⚠[/yellow] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def error(
        self,
        message: str,
        *,
        suggestion: str | None = None,
        exit_code: int = ExitCode.PANEL_FAILED,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for col in columns:
                table.add_column(col)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        """
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code


def parse_assignments(items: list[str] | None) -> dict[str, str]:
    """Parse ``name=value`` command-line assignments.

    Raises:
        ValueError: If an item has no '='.
    """
    result: dict[str, str] = {}
    for item in items or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected name=value, got {item!r}")
        result[name.strip()] = value
    return result


def open_panel(spec, panel_id: str | None, out: Output):
    """Load a panel for a command, reporting failures through ``out``.

    Returns:
        The LoadedPanel, or None after an error has been recorded.
    """
    from ..core.errors import SpecError
    from ..panel import load_panel

    if not spec.exists():
        out.error(f"Spec file not found: {spec}", exit_code=ExitCode.FILE_NOT_FOUND)
        return None
    try:
        return load_panel(spec, panel_id)
    except SpecError as e:
        out.error(str(e), exit_code=ExitCode.SPEC_ERROR)
        return None


def build_store(properties=None, assignments: list[str] | None = None):
    """Seed a VariableStore from a property file and ``name=value`` items.

    Raises:
        SpecError: If the property file cannot be read.
        ValueError: If an assignment is malformed.
    """
    from ..core.store import VariableStore
    from ..panel.properties import load_properties

    store = VariableStore()
    if properties is not None:
        store.update(load_properties(properties))
    store.update(parse_assignments(assignments))
    return store
