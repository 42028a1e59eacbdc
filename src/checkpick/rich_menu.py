"""Rich Live host for SelectionController."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.live import Live
from rich.panel import Panel

from checkpick.controller import SelectionController
from checkpick.input_source import TerminalInput
from checkpick.models import IdentityStrategy, Item, Row, WindowMode
from checkpick.panel_builder import build_panel

if TYPE_CHECKING:
    from checkpick.renderers import RowRenderer

# UI Constants
DEFAULT_PANEL_WIDTH = 80


class RichMultiSelect:
    """Interactive multi-select painted with rich and driven by the keyboard.

    Example:
        picker = RichMultiSelect(["Apple", "Banana", "Cherry"], title="Fruits")
        picked = picker.show()  # list of Items, or None if cancelled
    """

    def __init__(
        self,
        items: Iterable[Any],
        title: str = "",
        selected: Iterable[Any] | None = None,
        limit: int | None = None,
        window_mode: WindowMode | str = WindowMode.STATIC,
        offset: int = 0,
        identity: IdentityStrategy | str = IdentityStrategy.BY_KEY,
        renderer: RowRenderer | None = None,
        footer: str | None = None,
        width: int = DEFAULT_PANEL_WIDTH,
        source: TerminalInput | None = None,
        console: Console | None = None,
    ):
        """Initialize the picker.

        Args:
            items: Items, mappings with label/value/key, or plain values.
            title: Panel title.
            selected: Initially selected items, keys or values.
            limit: Max visible rows, None for unlimited.
            window_mode: Static or rotating window when limited.
            offset: Initial rotating offset.
            identity: How selected items are matched.
            renderer: Row renderer override.
            footer: Custom footer text. Default shows key hints.
            width: Max panel width, 0 to follow the terminal.
            source: Input source. Default reads the terminal.
            console: Console to paint on.
        """
        self.title = title
        self.footer = footer
        self.width = width
        self._console = console or Console()
        self._source = source or TerminalInput()
        self._live: Live | None = None
        self._submitted: list[Item] | None = None
        self.controller = SelectionController(
            items=items,
            selected=selected,
            limit=limit,
            window_mode=window_mode,
            offset=offset,
            identity=identity,
            renderer=renderer,
            on_submit=self._handle_submit,
            on_state_changed=self._handle_state_changed,
        )

    def build_panel(self, rows: list[Row] | None = None) -> Panel:
        if rows is None:
            rows = self.controller.rows()
        hidden_above, hidden_below = self.controller.hidden_counts()
        term_width = self._console.width or DEFAULT_PANEL_WIDTH
        width = min(self.width, term_width) if self.width else None
        return build_panel(
            rows,
            title=self.title,
            hidden_above=hidden_above,
            hidden_below=hidden_below,
            footer=self.footer,
            width=width,
        )

    def _handle_state_changed(self, rows: list[Row]) -> None:
        if self._live is not None:
            self._live.update(self.build_panel(rows), refresh=True)

    def _handle_submit(self, selected: list[Item]) -> None:
        self._submitted = selected

    def show(self) -> list[Item] | None:
        """Run until Enter. Returns the selection, or None on Ctrl-C."""
        self._submitted = None
        with self.controller.attached(self._source):
            with Live(
                self.build_panel(), console=self._console, auto_refresh=False, transient=True
            ) as live:
                self._live = live
                try:
                    while self._submitted is None:
                        if not self._source.pump():
                            return None
                finally:
                    self._live = None
        return self._submitted
