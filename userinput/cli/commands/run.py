"""Run command: collect a panel's values interactively."""

from pathlib import Path

import typer

from ...config import get_config, split_list
from ...core.errors import SpecError
from ...panel import PanelConsole
from ...panel.properties import write_properties
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, build_store, open_panel


@app.command("run")
def run_command(
    spec: Path = typer.Argument(..., help="Panel spec file (XML or YAML)"),
    panel: str | None = typer.Option(
        None, "--panel", "-p", help="Panel id (defaults to the first panel)"
    ),
    packs: str | None = typer.Option(
        None, "--packs", help="Comma-separated names of selected packs"
    ),
    variables: list[str] | None = typer.Option(
        None, "--var", help="Preset a variable as name=value (repeatable)"
    ),
    properties: Path | None = typer.Option(
        None, "--properties", help="Preset variables from a property file"
    ),
    answers: Path | None = typer.Option(
        None,
        "--answers",
        help="Read answers line by line from a file instead of the terminal",
    ),
    save: Path | None = typer.Option(
        None, "--save", "-o", help="Write the resulting variables to a property file"
    ),
):
    """
    Run a panel on the console.

    Prompts for every applicable field in order. Press Ctrl-D to abort
    the current field; the remaining fields are then skipped.

    Examples:
        userinput run install.xml --panel database
        userinput run install.yaml --packs Core,Docs --var INSTALL_PATH=/opt/app
        userinput run install.xml --answers answers.txt -o install.properties
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()

    loaded = open_panel(spec, panel or config.defaults.panel_id or None, out)
    if loaded is None:
        raise typer.Exit(out.finish())

    try:
        store = build_store(properties, variables)
    except (SpecError, ValueError) as e:
        out.error(str(e), exit_code=ExitCode.INVALID_ARGUMENT)
        raise typer.Exit(out.finish())

    selected_packs = split_list(packs) if packs is not None else None
    engine = loaded.engine(store, selected_packs=selected_packs, config=config)

    if answers is not None:
        with open(answers, encoding="utf-8") as stream:
            ok = engine.run_console(PanelConsole(console, stream=stream))
    else:
        ok = engine.run_console(PanelConsole(console))

    if not ok:
        out.error("Panel was not completed", exit_code=ExitCode.PANEL_FAILED)
        raise typer.Exit(out.finish())

    if save is not None:
        save.parent.mkdir(parents=True, exist_ok=True)
        with open(save, "w", encoding="utf-8") as f:
            write_properties(store, f)

    out.success(
        f"Panel complete ({len(store)} variables)",
        variables=store.as_dict(),
    )
    raise typer.Exit(out.finish())
