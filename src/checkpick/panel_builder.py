"""Shared utilities for windowing a list and building its Rich panel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel

from checkpick.models import WindowMode

if TYPE_CHECKING:
    from checkpick.models import Row

DEFAULT_FOOTER = "[dim]↑↓ move · space toggle · enter submit · ctrl-c cancel[/dim]"


def has_limit(total_items: int, limit: int | None) -> bool:
    """True when a limit is set and hides part of the list."""
    return limit is not None and limit < total_items


def clamp_offset(offset: int, total_items: int, limit: int | None) -> int:
    """Clamp a rotating offset so the window stays a valid slice."""
    if not has_limit(total_items, limit):
        return 0
    return max(0, min(offset, total_items - limit))


def calculate_window(
    total_items: int,
    limit: int | None,
    offset: int = 0,
    mode: WindowMode = WindowMode.STATIC,
) -> tuple[int, int]:
    """Calculate the visible slice of the list.

    Args:
        total_items: Total number of items
        limit: Maximum visible rows, or None for unlimited
        offset: Rotating offset (ignored in static mode)
        mode: Windowing policy

    Returns:
        Tuple of (visible_start, visible_end)
    """
    if not has_limit(total_items, limit):
        return 0, total_items

    if mode is WindowMode.STATIC:
        return 0, limit

    start = clamp_offset(offset, total_items, limit)
    return start, start + limit


def clamp_index(index: int, visible_count: int) -> int:
    """Clamp a highlight index into [0, visible_count - 1]."""
    if visible_count <= 0:
        return 0
    return max(0, min(index, visible_count - 1))


def format_scroll_indicator(hidden_above: int, hidden_below: int) -> tuple[str | None, str | None]:
    """Format scroll indicators.

    Returns:
        Tuple of (above_indicator, below_indicator) - None if no items hidden
    """
    above = f"[dim]  ↑ {hidden_above} more[/dim]" if hidden_above > 0 else None
    below = f"[dim]  ↓ {hidden_below} more[/dim]" if hidden_below > 0 else None
    return above, below


def build_panel(
    rows: list[Row],
    title: str = "",
    hidden_above: int = 0,
    hidden_below: int = 0,
    footer: str | None = None,
    width: int | None = None,
) -> Panel:
    """Stack rows vertically inside a Panel."""
    lines: list[str] = []
    above, below = format_scroll_indicator(hidden_above, hidden_below)

    if above:
        lines.append(above)
    if not rows:
        lines.append("[dim]No items[/dim]")
    lines.extend(row.markup for row in rows)
    if below:
        lines.append(below)

    lines.append("")
    lines.append(footer if footer is not None else DEFAULT_FOOTER)

    return Panel(
        "\n".join(lines),
        title=f"[bold]{title}[/bold]" if title else None,
        border_style="blue",
        width=width,
    )
