"""Inspect command: show how a panel compiles."""

from pathlib import Path

import typer

from ...config import get_config, split_list
from ...core.errors import SpecError
from ...core.models import PasswordField
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, build_store, open_panel


@app.command("inspect")
def inspect_command(
    spec: Path = typer.Argument(..., help="Panel spec file (XML or YAML)"),
    panel: str | None = typer.Option(None, "--panel", "-p", help="Panel id"),
    packs: str | None = typer.Option(
        None, "--packs", help="Comma-separated names of selected packs"
    ),
    variables: list[str] | None = typer.Option(
        None, "--var", help="Preset a variable as name=value (repeatable)"
    ),
):
    """
    List the fields a panel compiles to for the given packs and variables.

    Example:
        userinput inspect install.xml --packs Core
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()

    loaded = open_panel(spec, panel or config.defaults.panel_id or None, out)
    if loaded is None:
        raise typer.Exit(out.finish())

    try:
        store = build_store(None, variables)
    except (SpecError, ValueError) as e:
        out.error(str(e), exit_code=ExitCode.INVALID_ARGUMENT)
        raise typer.Exit(out.finish())

    selected_packs = split_list(packs) if packs is not None else None
    engine = loaded.engine(store, selected_packs=selected_packs, config=config)
    fields = engine.collect()
    if fields is None:
        out.warning("Panel is not applicable to the selected packs or platform")
        out.set_data("applicable", False)
        raise typer.Exit(out.finish())

    rows = []
    for i, field in enumerate(fields):
        if isinstance(field, PasswordField):
            detail = f"{len(field.inputs)} components"
            selected = ""
        else:
            detail = ", ".join(c.value or c.text or "" for c in field.choices)
            selected = str(field.selected_index) if field.choices else ""
        rows.append(
            [
                str(i),
                field.kind.value,
                field.variable or "",
                field.default_value or "",
                detail,
                selected,
            ]
        )

    out.set_data("applicable", True)
    out.table(
        f"Panel {loaded.panel.get('id', '')}".strip(),
        ["#", "Kind", "Variable", "Default", "Choices", "Selected"],
        rows,
        data_key="fields",
    )
    raise typer.Exit(out.finish())
