"""Global configuration data structures, loading and saving.

Configuration lives in `config.toml` under `$GHI_CONFIG_DIR` (default
`~/.config/ghi`). Loaded once at CLI entry point; `ghi config set` writes it
back with tomlkit so hand-written comments survive.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

import tomlkit

from ghi.github.repo import DEFAULT_HOST

CONFIG_KEYS = ("editor", "browser", "host", "prompt")
PROMPT_VALUES = ("enabled", "disabled")


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Values are exactly what the config file says; environment overrides are
    applied by the `effective_*` helpers.
    """

    editor: str | None = None
    browser: str | None = None
    host: str = DEFAULT_HOST
    prompt: str = "enabled"

    @property
    def prompt_disabled(self) -> bool:
        return self.prompt == "disabled"

    def get(self, key: str) -> str:
        """Get a config value as text ("" when unset).

        Raises:
            ValueError: If key is not a known configuration key
        """
        _validate_key(key)
        value = getattr(self, key)
        return "" if value is None else str(value)

    def with_value(self, key: str, value: str) -> "GlobalConfig":
        """Return a copy with `key` set to `value`.

        Raises:
            ValueError: If key is unknown or the value is invalid for it
        """
        _validate_key(key)
        if key == "prompt" and value not in PROMPT_VALUES:
            msg = f"invalid value for prompt: '{value}' (expected one of: {', '.join(PROMPT_VALUES)})"
            raise ValueError(msg)
        if key == "host" and not value:
            raise ValueError("host cannot be empty")
        if key in ("editor", "browser"):
            # Empty string unsets the command
            return replace(self, **{key: value or None})
        return replace(self, **{key: value})


def _validate_key(key: str) -> None:
    if key not in CONFIG_KEYS:
        msg = f"unknown configuration key: '{key}' (valid keys: {', '.join(CONFIG_KEYS)})"
        raise ValueError(msg)


def effective_editor(config: GlobalConfig, environ: Mapping[str, str]) -> str | None:
    """GHI_EDITOR, then the configured editor; None lets click pick VISUAL/EDITOR."""
    return environ.get("GHI_EDITOR") or config.editor


def effective_browser(config: GlobalConfig, environ: Mapping[str, str]) -> str | None:
    """GHI_BROWSER, then BROWSER, then the configured browser command."""
    return environ.get("GHI_BROWSER") or environ.get("BROWSER") or config.browser


def effective_host(config: GlobalConfig, environ: Mapping[str, str]) -> str:
    """GH_HOST, then the configured host."""
    return environ.get("GH_HOST") or config.host


class ConfigStore(ABC):
    """Abstract interface for global config persistence.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if the config file exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load config, returning defaults when no file exists.

        Raises:
            ValueError: If the file is malformed or holds invalid values
        """
        ...

    @abstractmethod
    def save(self, config: GlobalConfig) -> None:
        """Persist config.

        Raises:
            PermissionError: If the config file cannot be written
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for messages and debugging)."""
        ...


class RealConfigStore(ConfigStore):
    """Production implementation that reads/writes config.toml."""

    def __init__(self, config_dir: Path | None = None) -> None:
        if config_dir is None:
            env_dir = os.environ.get("GHI_CONFIG_DIR")
            config_dir = Path(env_dir) if env_dir else Path.home() / ".config" / "ghi"
        self._config_dir = config_dir

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> GlobalConfig:
        config_path = self.path()
        if not config_path.exists():
            return GlobalConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

        config = GlobalConfig()
        for key in CONFIG_KEYS:
            if key in data:
                config = config.with_value(key, str(data[key]))
        return config

    def save(self, config: GlobalConfig) -> None:
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {parent}")
        parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("ghi configuration"))

        for key in CONFIG_KEYS:
            value = getattr(config, key)
            if value is None:
                if key in doc:
                    del doc[key]
                continue
            # Untouched entries keep their formatting and trailing comments
            if doc.get(key) != value:
                doc[key] = value

        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        return self._config_dir / "config.toml"


class FakeConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: GlobalConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = config file doesn't exist)
        """
        self._config = config
        self._saved_configs: list[GlobalConfig] = []

    @property
    def saved_configs(self) -> list[GlobalConfig]:
        """Configs passed to save(), for test assertions."""
        return self._saved_configs

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        if self._config is None:
            return GlobalConfig()
        return self._config

    def save(self, config: GlobalConfig) -> None:
        self._config = config
        self._saved_configs.append(config)

    def path(self) -> Path:
        return Path("/fake/ghi/config.toml")
