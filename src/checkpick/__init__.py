"""Keyboard-driven multi-select list for terminal interfaces."""

from .controller import SelectionController
from .input_source import InputSource, InputSourceError, MemoryInput, TerminalInput
from .keys import decode
from .models import Action, IdentityStrategy, Item, Row, WindowMode
from .renderers import ComponentRenderer, GlyphRenderer, RowRenderer
from .rich_menu import RichMultiSelect

__all__ = [
    "Action",
    "ComponentRenderer",
    "GlyphRenderer",
    "IdentityStrategy",
    "InputSource",
    "InputSourceError",
    "Item",
    "MemoryInput",
    "RichMultiSelect",
    "Row",
    "RowRenderer",
    "SelectionController",
    "TerminalInput",
    "WindowMode",
    "decode",
]
