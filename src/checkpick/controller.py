"""Selection controller: highlight, selection and windowing state machine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from checkpick.keys import decode
from checkpick.models import Action, IdentityStrategy, Item, Row, WindowMode
from checkpick.panel_builder import calculate_window, clamp_index, clamp_offset, has_limit
from checkpick.renderers import make_renderer

if TYPE_CHECKING:
    from checkpick.input_source import InputSource
    from checkpick.renderers import RowRenderer

logger = logging.getLogger("checkpick.controller")


def _noop(*args: Any) -> None:
    pass


def _normalize_limit(limit: int | None, total_items: int) -> int | None:
    if limit is None or limit >= 1:
        return limit
    if total_items:
        logger.warning("limit=%r is not positive, using 1", limit)
    return 1


class SelectionController:
    """Keyboard-driven multi-selection over a fixed list of items.

    The controller owns the highlighted index (relative to the visible
    window) and the ordered selection. Input chunks are decoded into actions;
    each action makes at most one transition and fires at most one callback,
    followed by on_state_changed with the freshly composed rows.

    Example:
        ctl = SelectionController(
            items=["Apple", "Banana", "Cherry"],
            on_submit=lambda picked: print([i.label for i in picked]),
        )
        source = MemoryInput()
        with ctl.attached(source):
            source.feed("\\x1b[B", " ", "\\r")  # prints ['Banana']
    """

    def __init__(
        self,
        items: Iterable[Any] = (),
        selected: Iterable[Any] | None = None,
        default_selected: Iterable[Any] = (),
        focus: bool = True,
        initial_index: int = 0,
        limit: int | None = None,
        window_mode: WindowMode | str = WindowMode.STATIC,
        offset: int = 0,
        identity: IdentityStrategy | str = IdentityStrategy.BY_KEY,
        renderer: RowRenderer | None = None,
        indicator_component: Callable[[bool], str] | None = None,
        checkbox_component: Callable[[bool], str] | None = None,
        item_component: Callable[[Item, bool], str] | None = None,
        on_select: Callable[[Item], Any] | None = None,
        on_unselect: Callable[[Item], Any] | None = None,
        on_submit: Callable[[list[Item]], Any] | None = None,
        on_highlight: Callable[[Item], Any] | None = None,
        on_state_changed: Callable[[list[Row]], Any] | None = None,
    ):
        self._items: tuple[Item, ...] = tuple(Item.coerce(item) for item in items)
        self._window_mode = WindowMode(window_mode)
        self._identity = IdentityStrategy(identity)
        self._limit = _normalize_limit(limit, len(self._items))
        self._offset = clamp_offset(offset, len(self._items), self._limit)
        self._renderer = make_renderer(
            renderer, indicator_component, checkbox_component, item_component
        )

        self._on_select = on_select or _noop
        self._on_unselect = on_unselect or _noop
        self._on_submit = on_submit or _noop
        self._on_highlight = on_highlight or _noop
        self._on_state_changed = on_state_changed or _noop

        self._selected: list[int] = self._resolve_selection(
            selected if selected is not None else default_selected
        )
        self._index = clamp_index(initial_index, self.visible_count)
        if self._index != initial_index and self.visible_count:
            logger.warning(
                "initial_index=%d outside visible window of %d, using %d",
                initial_index,
                self.visible_count,
                self._index,
            )

        self._focus = focus
        self._source: InputSource | None = None
        self._listening = False
        self._listener = self.handle_input

    # --- State ---

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def window_mode(self) -> WindowMode:
        return self._window_mode

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def window(self) -> tuple[int, int]:
        """(start, end) of the visible slice of items."""
        return calculate_window(len(self._items), self._limit, self._offset, self._window_mode)

    def visible_items(self) -> list[Item]:
        start, end = self.window
        return list(self._items[start:end])

    @property
    def visible_count(self) -> int:
        start, end = self.window
        return end - start

    def hidden_counts(self) -> tuple[int, int]:
        """Number of items (above, below) the visible window."""
        start, end = self.window
        return start, len(self._items) - end

    @property
    def highlighted_index(self) -> int:
        return self._index

    @property
    def highlighted_item(self) -> Item | None:
        visible = self.visible_items()
        return visible[self._index] if visible else None

    @property
    def selected_items(self) -> list[Item]:
        return [self._items[pos] for pos in self._selected]

    @property
    def selected_positions(self) -> list[int]:
        """Item-list positions of the selection, in selection order."""
        return list(self._selected)

    def is_selected(self, item: Item) -> bool:
        if self._identity is IdentityStrategy.BY_INDEX:
            return any(self._items[pos] is item for pos in self._selected)
        token = self._item_token(item)
        return any(self._token(pos) == token for pos in self._selected)

    def is_selected_at(self, position: int) -> bool:
        """Whether the item at this item-list position is selected."""
        return self._token(position) in self._selected_tokens()

    # --- Identity ---

    def _item_token(self, item: Item) -> object:
        if self._identity is IdentityStrategy.BY_REFERENCE:
            return id(item)
        if item.key is not None:
            return ("key", item.key)
        # Unkeyed items compare by value, so equal duplicates share a selection slot
        return ("item", item)

    def _token(self, position: int) -> object:
        if self._identity is IdentityStrategy.BY_INDEX:
            return position
        return self._item_token(self._items[position])

    def _selected_tokens(self) -> list[object]:
        return [self._token(pos) for pos in self._selected]

    def _resolve_selection(self, entries: Iterable[Any]) -> list[int]:
        """Map Items, keys or values onto positions in the item list."""
        resolved: list[int] = []
        for entry in entries:
            candidates = self._find(entry)
            if not candidates:
                logger.warning("Selected entry %r is not in the item list, ignoring", entry)
                continue
            for pos in candidates:
                token = self._token(pos)
                if not any(self._token(r) == token for r in resolved):
                    resolved.append(pos)
                    break
        return resolved

    def _find(self, entry: Any) -> list[int]:
        """Candidate positions for a selected entry, best match first."""
        positions = range(len(self._items))
        if isinstance(entry, Item):
            if self._identity is IdentityStrategy.BY_INDEX:
                same = [i for i in positions if self._items[i] is entry]
                return same or [i for i in positions if self._items[i] == entry]
            token = self._item_token(entry)
            return [i for i in positions if self._item_token(self._items[i]) == token]
        keyed = [
            i for i in positions if self._items[i].key is not None and self._items[i].key == entry
        ]
        return keyed or [i for i in positions if self._items[i].value == entry]

    # --- Transitions ---

    def move_up(self) -> bool:
        count = self.visible_count
        if count == 0:
            return False
        self._index = count - 1 if self._index == 0 else self._index - 1
        self._on_highlight(self.highlighted_item)
        self._emit_state()
        return True

    def move_down(self) -> bool:
        count = self.visible_count
        if count == 0:
            return False
        self._index = 0 if self._index == count - 1 else self._index + 1
        self._on_highlight(self.highlighted_item)
        self._emit_state()
        return True

    def toggle(self) -> bool:
        """Select or unselect the highlighted item."""
        item = self.highlighted_item
        if item is None:
            return False
        position = self.window[0] + self._index
        token = self._token(position)
        for at, current in enumerate(self._selected):
            if self._token(current) == token:
                del self._selected[at]
                self._on_unselect(item)
                break
        else:
            self._selected.append(position)
            self._on_select(item)
        self._emit_state()
        return True

    def submit(self) -> bool:
        self._on_submit(self.selected_items)
        return True

    def dispatch(self, action: Action) -> bool:
        """Apply one action. Returns True if it had an effect."""
        if action is Action.MOVE_UP:
            return self.move_up()
        if action is Action.MOVE_DOWN:
            return self.move_down()
        if action is Action.TOGGLE_SELECT:
            return self.toggle()
        if action is Action.SUBMIT:
            return self.submit()
        return False

    def handle_input(self, chunk: bytes | str) -> bool:
        """Decode one input chunk and apply it."""
        action = decode(chunk)
        logger.debug("Input %r -> %s", chunk, action.name)
        return self.dispatch(action)

    # --- Host updates ---

    def set_selected(self, selected: Iterable[Any]) -> None:
        """Replace the selection without firing select/unselect callbacks."""
        self._selected = self._resolve_selection(selected)
        self._emit_state()

    def set_limit(self, limit: int | None) -> None:
        self._limit = _normalize_limit(limit, len(self._items))
        self._offset = clamp_offset(self._offset, len(self._items), self._limit)
        self._reclamp()

    def set_window_mode(self, mode: WindowMode | str) -> None:
        self._window_mode = WindowMode(mode)
        self._reclamp()

    def set_offset(self, offset: int) -> None:
        """Move the rotating window. Has no visible effect in static mode."""
        self._offset = clamp_offset(offset, len(self._items), self._limit)
        self._reclamp()

    def rotate(self, step: int = 1) -> None:
        """Advance the rotating window by step, wrapping at the end."""
        total = len(self._items)
        if not has_limit(total, self._limit):
            return
        span = total - self._limit + 1
        self.set_offset((self._offset + step) % span)

    def _reclamp(self) -> None:
        self._index = clamp_index(self._index, self.visible_count)
        self._emit_state()

    # --- Rendering ---

    def rows(self) -> list[Row]:
        """Compose the visible rows: indicator, checkbox, then label."""
        rows: list[Row] = []
        start, _ = self.window
        chosen = self._selected_tokens()
        for index, item in enumerate(self.visible_items()):
            is_highlighted = index == self._index
            is_selected = self._token(start + index) in chosen
            indicator = self._renderer.indicator(is_highlighted)
            checkbox = self._renderer.checkbox(is_selected)
            label = self._renderer.label(item, is_highlighted)
            rows.append(
                Row(
                    item=item,
                    index=index,
                    is_highlighted=is_highlighted,
                    is_selected=is_selected,
                    indicator=indicator,
                    checkbox=checkbox,
                    label=label,
                )
            )
        return rows

    def _emit_state(self) -> None:
        self._on_state_changed(self.rows())

    # --- Listener lifecycle ---

    @property
    def focus(self) -> bool:
        return self._focus

    @focus.setter
    def focus(self, value: bool) -> None:
        self._focus = bool(value)
        if self._source is None:
            return
        if self._focus:
            self._listen()
        else:
            self._unlisten()

    @property
    def is_listening(self) -> bool:
        return self._listening

    def attach(self, source: InputSource) -> None:
        """Bind to an input source; starts listening when focused."""
        if self._source is not None and self._source is not source:
            self.detach()
        self._source = source
        if self._focus:
            try:
                self._listen()
            except Exception:
                self._source = None
                raise

    def detach(self) -> None:
        """Stop listening and forget the input source."""
        try:
            self._unlisten()
        finally:
            self._source = None

    @contextmanager
    def attached(self, source: InputSource) -> Iterator[SelectionController]:
        self.attach(source)
        try:
            yield self
        finally:
            self.detach()

    def _listen(self) -> None:
        if self._listening or self._source is None:
            return
        # A refused claim must not change the current owner's raw mode
        self._source.add_listener(self._listener)
        try:
            self._source.set_raw_mode(True)
        except Exception:
            self._source.remove_listener(self._listener)
            raise
        self._listening = True
        logger.debug("Listening on %r", self._source)

    def _unlisten(self) -> None:
        if not self._listening or self._source is None:
            return
        try:
            self._source.remove_listener(self._listener)
        finally:
            self._listening = False
            self._source.set_raw_mode(False)
        logger.debug("Stopped listening on %r", self._source)
