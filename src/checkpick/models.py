"""Data models for checkpick."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Action(Enum):
    """Decoded keyboard action."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SUBMIT = "submit"
    TOGGLE_SELECT = "toggle_select"
    UNRECOGNIZED = "unrecognized"


class WindowMode(Enum):
    """How the visible window is chosen when a limit is set."""

    STATIC = "static"  # always items[0:limit]
    ROTATING = "rotating"  # items[offset:offset+limit], offset set by the host


class IdentityStrategy(Enum):
    """How two items are recognized as the same selection entry."""

    BY_KEY = "by-key"
    BY_REFERENCE = "by-reference"
    BY_INDEX = "by-index"


@dataclass(frozen=True)
class Item:
    """Immutable list entry."""

    label: str
    value: Any = None
    key: str | None = None

    @classmethod
    def coerce(cls, obj: Any) -> Item:
        """Build an Item from an Item, a mapping, or a plain value."""
        if isinstance(obj, Item):
            return obj
        if isinstance(obj, Mapping):
            label = obj.get("label", obj.get("title", obj.get("name")))
            value = obj.get("value", label)
            key = obj.get("key")
            return cls(
                label=str(label if label is not None else value),
                value=value,
                key=str(key) if key is not None else None,
            )
        return cls(label=str(obj), value=obj)

    def to_dict(self) -> dict:
        """Serialize to dict for JSON output."""
        return {"label": self.label, "value": self.value, "key": self.key}


@dataclass(frozen=True)
class Row:
    """One composed row of the visible list."""

    item: Item
    index: int
    is_highlighted: bool
    is_selected: bool
    indicator: str
    checkbox: str
    label: str

    @property
    def markup(self) -> str:
        return f"{self.indicator}{self.checkbox}{self.label}"
