"""CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

if TYPE_CHECKING:
    from checkpick.config import Config
    from checkpick.models import Item

app = typer.Typer(
    name="checkpick",
    help="Keyboard-driven multi-select for the terminal.",
    no_args_is_help=True,
)
console = Console()


def _get_config() -> Config:
    """Lazy import and load config."""
    from checkpick.config import Config

    return Config.load()


def _read_items_file(path: Path) -> list[str]:
    """One item per non-blank line."""
    try:
        content = path.read_text()
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {path}: {e.strerror}")
        raise typer.Exit(1)
    return [line.strip() for line in content.splitlines() if line.strip()]


def _run_picker(
    items: list,
    title: str,
    selected: list[str] | None = None,
    limit: int | None = None,
    window_mode: str = "static",
    offset: int = 0,
    identity: str = "by-key",
    width: int = 80,
) -> list[Item]:
    """Show the picker, translating failures into CLI exits."""
    from checkpick.input_source import InputSourceError
    from checkpick.rich_menu import RichMultiSelect

    try:
        picker = RichMultiSelect(
            items,
            title=title,
            selected=selected,
            limit=limit,
            window_mode=window_mode,
            offset=offset,
            identity=identity,
            width=width,
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        result = picker.show()
    except InputSourceError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if result is None:
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)
    return result


def _print_selection(picked: list[Item], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps([item.to_dict() for item in picked]))
        return
    for item in picked:
        typer.echo(item.label)


@app.callback()
def main(
    debug: Annotated[bool, typer.Option("--debug", help="Log decoded input to stderr")] = False,
):
    """Keyboard-driven multi-select for the terminal."""
    if debug:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True))],
        )


@app.command()
def pick(
    items: Annotated[list[str] | None, typer.Argument(help="Items to choose from")] = None,
    file: Annotated[
        Path | None, typer.Option("--file", "-f", help="Read items from file, one per line")
    ] = None,
    select: Annotated[
        list[str] | None, typer.Option("--select", "-s", help="Preselect an item")
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-l", help="Max visible rows (0 = unlimited)")
    ] = None,
    window_mode: Annotated[
        str | None, typer.Option("--window-mode", "-w", help="static or rotating")
    ] = None,
    offset: Annotated[int, typer.Option("--offset", help="First visible item (rotating mode)")] = 0,
    title: Annotated[str | None, typer.Option("--title", "-t", help="Panel title")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print selection as JSON")] = False,
):
    """Pick any number of items; prints the chosen ones."""
    cfg = _get_config()

    choices = list(items or [])
    if file:
        choices.extend(_read_items_file(file))
    if not choices:
        console.print("[red]Error:[/red] No items given. Pass them as arguments or with --file.")
        raise typer.Exit(1)

    if limit is None:
        limit = cfg.effective_limit
    elif limit == 0:
        limit = None

    picked = _run_picker(
        choices,
        title=title if title is not None else cfg.title,
        selected=select,
        limit=limit,
        window_mode=window_mode or cfg.window_mode,
        offset=offset,
        identity=cfg.identity,
        width=cfg.panel_width,
    )
    _print_selection(picked, as_json)


@app.command()
def demo(
    count: Annotated[int, typer.Option("--count", "-n", help="Number of demo items")] = 2,
    limit: Annotated[int | None, typer.Option("--limit", "-l", help="Max visible rows")] = None,
):
    """Try the picker on generated items."""
    demo_items = [
        {"label": f"Item {i}", "value": f"item{i}", "key": f"item{i}"} for i in range(1, count + 1)
    ]
    picked = _run_picker(demo_items, title="checkpick demo", limit=limit)
    _print_selection(picked, as_json=False)


@app.command()
def config(
    set_: Annotated[
        list[str] | None, typer.Option("--set", help="Change a setting: key=value")
    ] = None,
):
    """Show or change default settings."""
    from rich.table import Table

    cfg = _get_config()

    for assignment in set_ or []:
        key, sep, value = assignment.partition("=")
        if not sep:
            console.print(f"[red]Error:[/red] Expected key=value, got '{assignment}'")
            raise typer.Exit(1)
        try:
            cfg.set(key.strip(), value.strip())
        except (KeyError, ValueError) as e:
            console.print(f"[red]Error:[/red] Invalid setting '{assignment}': {e}")
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] {key.strip()} = {getattr(cfg, key.strip())!r}")

    table = Table(title=str(cfg.config_file))
    table.add_column("Setting")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for key, desc, value in cfg.get_settings():
        table.add_row(key, repr(value), desc)
    console.print(table)
