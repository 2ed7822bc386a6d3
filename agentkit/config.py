"""Configuration management for agent.config.json."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from agentkit.constants import CONFIG_FILENAME, DEFAULT_PRESET, DEFAULT_SOURCE, PRESETS_SUBDIR
from agentkit.exceptions import ConfigNotFoundError, ConfigParseError, ConfigValidationError


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    """Read an optional list of strings, dropping repeats but keeping order."""
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigValidationError(f"'{key}' must be a list of module paths")
    return list(dict.fromkeys(value))


def _required_string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigValidationError(f"Missing required '{key}' field")
    return value


@dataclass
class AgentConfig:
    """Configuration from agent.config.json.

    Example:
        {
          "source": "github:nguyen-phan123/antigravity-kit",
          "base": "presets/minimal",
          "include": ["skills/docker-expert"],
          "exclude": ["rules/legacy"],
          "overrides": {"rules/style.md": "./my-style.md"}
        }

    Invariant: ``include`` and ``exclude`` never share an entry after a
    mutation made through :meth:`include_module` or :meth:`exclude_module`.
    """

    source: str = DEFAULT_SOURCE
    base: str = f"{PRESETS_SUBDIR}/{DEFAULT_PRESET}"
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    overrides: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, preset: str = DEFAULT_PRESET, source: str = DEFAULT_SOURCE) -> "AgentConfig":
        """Create a fresh record for a preset name (e.g. "minimal")."""
        preset = preset.removeprefix(f"{PRESETS_SUBDIR}/")
        return cls(source=source, base=f"{PRESETS_SUBDIR}/{preset}")

    @classmethod
    def load(cls, path: Path) -> "AgentConfig":
        """Load configuration from agent.config.json.

        Args:
            path: Path to the agent.config.json file

        Returns:
            Parsed AgentConfig

        Raises:
            ConfigNotFoundError: If the file doesn't exist
            ConfigParseError: If the file is not valid JSON
            ConfigValidationError: If the configuration is invalid
        """
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Failed to parse {path}: {e}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> "AgentConfig":
        """Create an AgentConfig from a parsed JSON document."""
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration must be a JSON object, got {type(data).__name__}"
            )

        overrides = data.get("overrides", {})
        if not isinstance(overrides, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in overrides.items()
        ):
            raise ConfigValidationError("'overrides' must map module paths to local paths")

        return cls(
            source=_required_string(data, "source"),
            base=_required_string(data, "base"),
            include=_string_list(data, "include"),
            exclude=_string_list(data, "exclude"),
            overrides=dict(overrides),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "source": self.source,
            "base": self.base,
            "include": list(self.include),
            "exclude": list(self.exclude),
            "overrides": dict(self.overrides),
        }

    def save(self, path: Path) -> None:
        """Write the whole record to path."""
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")

    def include_module(self, module_path: str) -> None:
        """Add a module to the include list and drop it from the exclude list."""
        self.exclude = [m for m in self.exclude if m != module_path]
        if module_path not in self.include:
            self.include.append(module_path)

    def exclude_module(self, module_path: str) -> bool:
        """Undo an include, or exclude a module coming from the preset.

        A module that was explicitly included is only dropped from the
        include list, so add followed by remove leaves the record as it was.
        Any other module is appended to the exclude list.

        Returns:
            True if the module was added to the exclude list, False if the
            call only undid an include
        """
        if module_path in self.include:
            self.include = [m for m in self.include if m != module_path]
            return False

        if module_path not in self.exclude:
            self.exclude.append(module_path)
        return True


def get_config_path(directory: Path | None = None) -> Path:
    """Path of agent.config.json in directory (defaults to the current directory)."""
    return (directory or Path.cwd()) / CONFIG_FILENAME


def load_config(directory: Path | None = None) -> AgentConfig:
    """Load agent.config.json from directory.

    Raises:
        ConfigNotFoundError: If the directory has no agent.config.json
    """
    return AgentConfig.load(get_config_path(directory))
