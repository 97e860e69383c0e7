"""Apply command: fill a panel's variables from a property file."""

from pathlib import Path

import typer

from ...config import get_config, split_list
from ...core.errors import SpecError
from ...panel.properties import load_properties, write_properties
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, build_store, open_panel


@app.command("apply")
def apply_command(
    spec: Path = typer.Argument(..., help="Panel spec file (XML or YAML)"),
    properties: Path = typer.Argument(..., help="Property file with variable values"),
    panel: str | None = typer.Option(None, "--panel", "-p", help="Panel id"),
    packs: str | None = typer.Option(
        None, "--packs", help="Comma-separated names of selected packs"
    ),
    variables: list[str] | None = typer.Option(
        None, "--var", help="Preset a variable as name=value (repeatable)"
    ),
    save: Path | None = typer.Option(
        None, "--save", "-o", help="Write the resulting variables to a property file"
    ),
):
    """
    Apply a property file to a panel without prompting.

    Only properties that name a variable of an applicable field are
    taken; everything else in the file is ignored.

    Example:
        userinput apply install.xml install.properties -o resolved.properties
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()

    loaded = open_panel(spec, panel or config.defaults.panel_id or None, out)
    if loaded is None:
        raise typer.Exit(out.finish())

    try:
        values = load_properties(properties)
        store = build_store(None, variables)
    except (SpecError, ValueError) as e:
        out.error(str(e), exit_code=ExitCode.INVALID_ARGUMENT)
        raise typer.Exit(out.finish())

    selected_packs = split_list(packs) if packs is not None else None
    engine = loaded.engine(store, selected_packs=selected_packs, config=config)
    engine.run_from_properties(values)

    if save is not None:
        save.parent.mkdir(parents=True, exist_ok=True)
        with open(save, "w", encoding="utf-8") as f:
            write_properties(store, f)

    out.success(f"Applied {len(store)} variables", variables=store.as_dict())
    if not get_json_mode():
        for name, value in store.items():
            console.print(f"  {name}={value}", markup=False, highlight=False)
    raise typer.Exit(out.finish())
