"""Persisted picker defaults with env override support."""

import json
import os
from pathlib import Path
from typing import Any

# Module-level cache for singleton pattern
_config_cache: "Config | None" = None


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    """Get default config directory, respecting CHECKPICK_CONFIG_DIR env var."""
    config_dir = os.environ.get("CHECKPICK_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "checkpick"


class ConfigMeta:
    """Schema definition - separate from runtime state."""

    SETTINGS: dict[str, str] = {
        "limit": "Max visible rows (0 = unlimited)",
        "window_mode": "Window policy (static|rotating)",
        "identity": "Selection identity strategy",
        "panel_width": "Max panel width (0 = terminal width)",
        "title": "Default panel title",
    }

    CHOICES: dict[str, tuple[str, ...]] = {
        "window_mode": ("static", "rotating"),
        "identity": ("by-key", "by-reference", "by-index"),
    }


class Config:
    """Runtime configuration with env override support."""

    DEFAULTS: dict[str, Any] = {
        "limit": 0,
        "window_mode": "static",
        "identity": "by-key",
        "panel_width": 80,
        "title": "",
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        self._data: dict[str, Any] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def config_file(self) -> Path:
        return self._config_file

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Factory method - explicit loading with caching."""
        global _config_cache

        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._load_from_file()
        config._apply_env_overrides()

        if config_dir is None:
            _config_cache = config

        return config

    def __getattr__(self, name: str) -> Any:
        """Access config values as attributes."""
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        if name in self.DEFAULTS:
            return self.DEFAULTS[name]
        raise AttributeError(f"Config has no attribute '{name}'")

    @property
    def effective_limit(self) -> int | None:
        """Configured limit, with 0 meaning unlimited."""
        return self.limit if self.limit > 0 else None

    def get_settings(self) -> list[tuple[str, str, Any]]:
        """Return (key, description, value) for display."""
        return [(key, desc, getattr(self, key)) for key, desc in ConfigMeta.SETTINGS.items()]

    def set(self, key: str, value: Any) -> None:
        """Set value and persist. String values are coerced to the default's type."""
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown setting: {key}")
        if isinstance(value, str):
            value = self._coerce(value, type(self.DEFAULTS[key]))
        choices = ConfigMeta.CHOICES.get(key)
        if choices and value not in choices:
            raise ValueError(f"{key} must be one of: {', '.join(choices)}")
        self._data[key] = value
        self._save()

    def _load_from_file(self) -> None:
        if self._config_file.exists():
            try:
                content = self._config_file.read_text()
                if content.strip():
                    self._data = json.loads(content)
            except json.JSONDecodeError:
                # Corrupted config - use defaults, will be fixed on next save
                self._data = {}

    def _save(self) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self._data, indent=2))

    def _apply_env_overrides(self) -> None:
        """Apply CHECKPICK_* env vars (highest priority)."""
        for key, default in self.DEFAULTS.items():
            env_key = f"CHECKPICK_{key.upper()}"
            if env_key in os.environ:
                self._data[key] = self._coerce(os.environ[env_key], type(default))

    @staticmethod
    def _coerce(value: str, target_type: type) -> Any:
        """Coerce string env value to target type."""
        if target_type is bool:
            return value.lower() in ("true", "1", "yes")
        if target_type is int:
            return int(value)
        return value
