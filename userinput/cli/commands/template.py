"""Template command: emit an empty property file for a panel."""

import sys
from pathlib import Path

import typer

from ...config import get_config, split_list
from ...core.store import VariableStore
from ..app import app, console, get_json_mode
from ..utils import Output, open_panel


@app.command("template")
def template_command(
    spec: Path = typer.Argument(..., help="Panel spec file (XML or YAML)"),
    panel: str | None = typer.Option(None, "--panel", "-p", help="Panel id"),
    packs: str | None = typer.Option(
        None, "--packs", help="Comma-separated names of selected packs"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write to a file instead of stdout"
    ),
):
    """
    Write a ``name=`` line for every variable the panel collects.

    Example:
        userinput template install.xml -o install.properties
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()

    loaded = open_panel(spec, panel or config.defaults.panel_id or None, out)
    if loaded is None:
        raise typer.Exit(out.finish())

    selected_packs = split_list(packs) if packs is not None else None
    engine = loaded.engine(VariableStore(), selected_packs=selected_packs, config=config)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            engine.run_generate_properties(f)
        out.success(f"Template written to {output}", output=str(output))
        raise typer.Exit(out.finish())

    engine.run_generate_properties(sys.stdout)
