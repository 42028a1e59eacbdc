"""Row renderers: swappable glyphs for indicator, checkbox and label."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from rich.markup import escape

from checkpick.models import Item

POINTER = "❯"
CIRCLE_FILLED = "◉"
CIRCLE = "◯"


@runtime_checkable
class RowRenderer(Protocol):
    """Protocol for row renderers.

    Each method is a pure function of its arguments and returns Rich markup.
    """

    def indicator(self, is_highlighted: bool) -> str:
        """Marker shown left of the checkbox."""
        ...

    def checkbox(self, is_selected: bool) -> str:
        """Selection box."""
        ...

    def label(self, item: Item, is_highlighted: bool) -> str:
        """Item text."""
        ...


class GlyphRenderer:
    """Built-in renderer: pointer, filled/empty circle, blue highlight."""

    def __init__(
        self,
        pointer: str = POINTER,
        selected: str = CIRCLE_FILLED,
        unselected: str = CIRCLE,
        highlight_style: str = "blue",
    ):
        self.pointer = pointer
        self.selected = selected
        self.unselected = unselected
        self.highlight_style = highlight_style

    def indicator(self, is_highlighted: bool) -> str:
        if is_highlighted:
            return f"[{self.highlight_style}]{self.pointer}[/{self.highlight_style}] "
        return " " * (len(self.pointer) + 1)

    def checkbox(self, is_selected: bool) -> str:
        if is_selected:
            return f"[green]{self.selected}[/green] "
        return f"{self.unselected} "

    def label(self, item: Item, is_highlighted: bool) -> str:
        text = escape(item.label)
        if is_highlighted:
            return f"[{self.highlight_style}]{text}[/{self.highlight_style}]"
        return text


class ComponentRenderer:
    """Adapts plain callables to RowRenderer.

    Any component left as None falls back to the matching method of
    `fallback`.
    """

    def __init__(
        self,
        indicator_component: Callable[[bool], str] | None = None,
        checkbox_component: Callable[[bool], str] | None = None,
        item_component: Callable[[Item, bool], str] | None = None,
        fallback: RowRenderer | None = None,
    ):
        fallback = fallback or GlyphRenderer()
        self._indicator = indicator_component or fallback.indicator
        self._checkbox = checkbox_component or fallback.checkbox
        self._label = item_component or fallback.label

    def indicator(self, is_highlighted: bool) -> str:
        return self._indicator(is_highlighted)

    def checkbox(self, is_selected: bool) -> str:
        return self._checkbox(is_selected)

    def label(self, item: Item, is_highlighted: bool) -> str:
        return self._label(item, is_highlighted)


def make_renderer(
    renderer: RowRenderer | None = None,
    indicator_component: Callable[[bool], str] | None = None,
    checkbox_component: Callable[[bool], str] | None = None,
    item_component: Callable[[Item, bool], str] | None = None,
) -> RowRenderer:
    """Pick the renderer for a controller from its options."""
    if indicator_component or checkbox_component or item_component:
        return ComponentRenderer(
            indicator_component, checkbox_component, item_component, fallback=renderer
        )
    return renderer or GlyphRenderer()
