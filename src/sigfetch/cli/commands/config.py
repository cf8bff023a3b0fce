"""Config command"""

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from sigfetch.config import DEFAULT_CONFIG, Config, default_config_path

app = typer.Typer(help="Manage sigfetch configuration")
console = Console()


def _coerce(value: str, default: Any) -> Any:
    """Convert a command-line string to the type of the default value"""
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Invalid value '{value}', expected an integer") from None
    if isinstance(default, float):
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"Invalid value '{value}', expected a number") from None
    if isinstance(default, list):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            parsed = [item.strip() for item in value.split(",") if item.strip()]
        if not isinstance(parsed, list):
            raise ValueError(f"Invalid value '{value}', expected a list")
        return parsed
    return value


@app.command()
def init():
    """Create a configuration file with default values"""
    config_path = default_config_path()
    if config_path.exists():
        console.print(f"[yellow]Configuration already exists at {config_path}[/yellow]")
        return

    Config(config_path=config_path).save()
    console.print(f"[green]Created configuration at {config_path}[/green]")


@app.command()
def show():
    """Show the configuration file"""
    config_path = default_config_path()
    if not config_path.exists():
        console.print("No configuration file found. Run 'sigfetch config init' to create one.")
        return

    console.print(config_path.read_text(), markup=False, highlight=False)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Key in section.key format"),
    value: str = typer.Argument(..., help="New value"),
):
    """Set a configuration value"""
    if "." not in key:
        console.print("[red]Error:[/red] key must use the section.key format")
        raise typer.Exit(1)

    section, option = key.split(".", 1)
    if section not in DEFAULT_CONFIG:
        console.print(f"[red]Error:[/red] Invalid section '{section}'")
        raise typer.Exit(1)
    if option not in DEFAULT_CONFIG[section]:
        console.print(f"[red]Error:[/red] Invalid key '{option}' in section '{section}'")
        raise typer.Exit(1)

    try:
        coerced = _coerce(value, DEFAULT_CONFIG[section][option])
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    config = Config(config_path=default_config_path())
    config.set(section, option, coerced)
    config.save()
    console.print(f"[green]Configuration updated:[/green] {section}.{option} = {coerced}")
