"""Config command for viewing and managing userinput configuration."""

import typer

from ..app import app, console
from ... import config as config_module
from ...config import VALID_PLATFORMS, get_config, reset_config, split_list


VALID_KEYS = {
    "console.selected_marker",
    "console.hide_passwords",
    "defaults.platform",
    "defaults.packs",
    "defaults.special_separator",
    "defaults.panel_id",
}

BOOL_FIELDS = {"hide_passwords"}
LIST_FIELDS = {"packs"}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. defaults.platform, console.selected_marker)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify userinput configuration.

    Examples:
        userinput config show
        userinput config set defaults.packs Core,Docs
        userinput config set defaults.platform unix
        userinput config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] userinput config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]userinput Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Console[/bold cyan]")
    console.print(f"  selected_marker   = {config.console.selected_marker}", markup=False)
    console.print(f"  hide_passwords    = {config.console.hide_passwords}")

    console.print()
    console.print("[bold cyan]Defaults[/bold cyan]")
    platform = config.defaults.platform or "[dim](detected)[/dim]"
    console.print(f"  platform          = {platform}")
    console.print(f"  packs             = {', '.join(config.defaults.packs)}")
    console.print(
        f"  special_separator = {config.defaults.special_separator!r}", markup=False
    )
    console.print(f"  panel_id          = {config.defaults.panel_id}")

    console.print()
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        console.print(f"Config file: {config_file}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({config_file})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()
    zone, field_name = key.split(".", 1)
    target = config.console if zone == "console" else config.defaults

    if field_name in BOOL_FIELDS:
        if value.lower() not in ("true", "false"):
            console.print(f"[red]Invalid boolean value:[/red] {value}")
            raise typer.Exit(1)
        setattr(target, field_name, value.lower() == "true")
    elif field_name in LIST_FIELDS:
        setattr(target, field_name, split_list(value))
    elif field_name == "platform" and value not in VALID_PLATFORMS:
        console.print(f"[red]Invalid platform:[/red] {value}")
        console.print("Valid platforms: windows, mac, unix")
        raise typer.Exit(1)
    else:
        setattr(target, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {config_module.CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        config_file.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {config_file}")
    else:
        console.print("Config already at defaults (no config file exists)")
