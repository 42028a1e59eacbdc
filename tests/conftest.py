"""Pytest fixtures for checkpick tests."""

import pytest


class Recorder:
    """Collects controller callbacks as (event, payload) tuples."""

    def __init__(self):
        self.events: list[tuple[str, object]] = []
        self.renders: list[list] = []

    def callbacks(self) -> dict:
        return {
            "on_select": lambda item: self.events.append(("select", item.label)),
            "on_unselect": lambda item: self.events.append(("unselect", item.label)),
            "on_submit": lambda items: self.events.append(("submit", [i.label for i in items])),
            "on_highlight": lambda item: self.events.append(("highlight", item.label)),
            "on_state_changed": self.renders.append,
        }

    def named(self, name: str) -> list:
        return [payload for event, payload in self.events if event == name]


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear module-level caches before each test."""
    from checkpick.config import clear_config_cache

    clear_config_cache()

    yield

    clear_config_cache()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def source():
    from checkpick.input_source import MemoryInput

    return MemoryInput()
