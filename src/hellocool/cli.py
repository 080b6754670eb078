"""CLI entry point using typer."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from hellocool import __version__
from hellocool.config import (
    CONFIG_FILE,
    AppConfig,
    get_config,
    save_config,
)
from hellocool.models import CommandResult, CommandStatus, Preset
from hellocool.services.runner import CommandRunner
from hellocool.ui.panel import CommandPanel
from hellocool.ui.presets import PRESETS, get_preset
from hellocool.ui.views import hello_world_cool, show_full_screen
from hellocool.utils.formatting import result_panel
from hellocool.utils.system import check_executable

app = typer.Typer(
    name="hellocool",
    help="Hello World terminal apps with an async command runner.",
    add_completion=False,
)
console = Console()


def setup_logging(config: AppConfig) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.logging.file:
        log_path = Path(config.logging.file).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_path)))
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


@app.command()
def hello() -> None:
    """Show the Hello World Cool view."""
    console.print(hello_world_cool())


@app.command()
def fullscreen(
    delay: float = typer.Option(None, "--delay", help="Seconds before entering full screen"),
    hold: float = typer.Option(None, "--hold", help="Seconds to stay in full screen (default: until Ctrl+C)"),
) -> None:
    """Show the Hello Full Screen view and switch to full screen."""
    config = get_config()
    wait = config.display.fullscreen_delay if delay is None else delay
    show_full_screen(console, wait, hold)


@app.command()
def presets() -> None:
    """List the available commands."""
    table = Table(title="Commands")
    table.add_column("Name", style="cyan")
    table.add_column("Label")
    table.add_column("Command", style="green")
    table.add_column("Available")

    for preset in PRESETS:
        ok, _ = check_executable(preset.executable)
        table.add_row(preset.name, preset.label, preset.command, "yes" if ok else "[yellow]no[/yellow]")

    console.print(table)


@app.command()
def run(
    name: str = typer.Argument(..., help="Command name (see 'hellocool presets')"),
) -> None:
    """Run one command and show its result."""
    preset = get_preset(name)
    if preset is None:
        available = ", ".join(p.name for p in PRESETS)
        console.print(f"[red]Unknown command: {name}[/red]")
        console.print(f"Available: {available}")
        raise typer.Exit(1)

    config = get_config()
    setup_logging(config)

    command_panel = CommandPanel(CommandRunner(config))
    command_panel.subscribe(_show)
    result = asyncio.run(_settle(command_panel, preset))
    if result.status is CommandStatus.FAILED:
        raise typer.Exit(1)


@app.command()
def panel() -> None:
    """Interactive command panel."""
    config = get_config()
    setup_logging(config)

    try:
        _interactive(CommandPanel(CommandRunner(config)))
    except (KeyboardInterrupt, typer.Abort):
        pass
    console.print("\n[dim]Panel closed.[/dim]")


@app.command()
def config(
    key: str = typer.Argument(None, help="Config key (e.g., runner.timeout)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """View or modify configuration."""
    cfg = get_config()

    if key is None:
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("runner.timeout", str(cfg.runner.timeout) if cfg.runner.timeout else "none")
        table.add_row("runner.cwd", cfg.runner.cwd or "(inherit)")
        table.add_row("runner.extra_paths", ", ".join(cfg.runner.extra_paths) or "(none)")
        table.add_row("display.fullscreen_delay", str(cfg.display.fullscreen_delay))
        table.add_row("logging.level", cfg.logging.level)
        table.add_row("logging.file", cfg.logging.file)

        console.print(table)
        console.print(f"[dim]{CONFIG_FILE}[/dim]")
        return

    if value is None:
        console.print("[red]Usage: hellocool config <key> <value>[/red]")
        raise typer.Exit(1)

    parts = key.split(".")
    if len(parts) != 2:
        console.print("[red]Key format: section.key (e.g., runner.timeout)[/red]")
        raise typer.Exit(1)

    section, attr = parts
    section_map = cfg.sections()

    if section not in section_map:
        console.print(f"[red]Unknown section: {section}[/red]")
        raise typer.Exit(1)

    obj = section_map[section]
    if not hasattr(obj, attr):
        console.print(f"[red]Unknown key: {key}[/red]")
        raise typer.Exit(1)

    # Type coercion
    current = getattr(obj, attr)
    try:
        if isinstance(current, bool):
            typed_value = value.lower() in ("true", "1", "yes")
        elif isinstance(current, int):
            typed_value = int(value)
        elif isinstance(current, float):
            typed_value = float(value)
        elif isinstance(current, list):
            typed_value = [v.strip() for v in value.split(",") if v.strip()]
        else:
            typed_value = value
    except ValueError:
        console.print(f"[red]Invalid value type for {key}[/red]")
        raise typer.Exit(1)

    setattr(obj, attr, typed_value)
    save_config(cfg)
    console.print(f"[green]{key} = {typed_value}[/green]")


@app.command()
def logs(
    lines: int = typer.Option(50, "--lines", "-n", help="Number of lines"),
) -> None:
    """View the log file."""
    log_path = Path(get_config().logging.file).expanduser().resolve()
    if not log_path.exists():
        console.print("[dim]No log file found.[/dim]")
        return

    content = log_path.read_text()
    log_lines = content.strip().split("\n")
    for line in log_lines[-lines:]:
        console.print(line, markup=False, highlight=False)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"hellocool v{__version__}")
    console.print(f"Python: {sys.version.split()[0]}")
    console.print(f"Config: {CONFIG_FILE}")


# --- Internal helpers ---


def _show(result: CommandResult) -> None:
    if result.status is CommandStatus.RUNNING:
        console.print(f"[yellow]Running[/yellow] {result.command} ...")
    elif result.is_terminal:
        console.print(result_panel(result))


async def _settle(command_panel: CommandPanel, preset: Preset) -> CommandResult:
    return await command_panel.trigger(preset)


def _interactive(command_panel: CommandPanel) -> None:
    command_panel.subscribe(_show)
    choices = {str(i): preset for i, preset in enumerate(PRESETS, 1)}

    while True:
        console.print()
        for key, preset in choices.items():
            console.print(f"  [cyan]{key}[/cyan]  {preset.label} [dim]({preset.command})[/dim]")
        console.print("  [cyan]q[/cyan]  Quit")

        # Prompt on the main thread; the loop only lives while a command runs
        choice = typer.prompt("Choose", default="q")
        if choice.strip().lower() == "q":
            return

        preset = choices.get(choice.strip())
        if preset is None:
            console.print(f"[red]Unknown choice: {choice}[/red]")
            continue

        asyncio.run(_settle(command_panel, preset))


if __name__ == "__main__":
    app()
