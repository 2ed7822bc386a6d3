"""Preset lookup and module resolution.

A preset is a JSON document in the registry naming a curated base list of
modules:

    {"name": "Minimal", "description": "Core only", "modules": ["skills/clean-code"]}

The registry may be fetched as a bare kit, as a monorepo holding the kit in
a subdirectory, or referenced with a shorthand preset id; ``locate_preset``
absorbs those layouts so callers don't need to know which one was fetched.
"""

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from agentkit.constants import KIT_SUBDIR, PRESETS_SUBDIR
from agentkit.exceptions import PresetNotFoundError, PresetParseError


@dataclass(frozen=True)
class Preset:
    """A named, curated base list of module paths."""

    name: str
    description: str = ""
    modules: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: object, default_name: str) -> "Preset":
        """Create a Preset from a parsed JSON document."""
        if not isinstance(data, dict):
            raise PresetParseError(
                f"Preset '{default_name}' must be a JSON object, got {type(data).__name__}"
            )

        modules = data.get("modules", [])
        if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
            raise PresetParseError(f"Preset '{default_name}' has an invalid 'modules' list")

        for key in ("name", "description"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise PresetParseError(f"Preset '{default_name}' field '{key}' must be a string")

        return cls(
            name=data.get("name") or default_name,
            description=data.get("description") or "",
            modules=tuple(modules),
        )


def _with_json_suffix(path: Path) -> Path:
    if path.name.endswith(".json"):
        return path
    return path.with_name(f"{path.name}.json")


# Each candidate maps (root, preset_id) to a path, or None when it doesn't apply.
PresetCandidate = Callable[[Path, str], Path | None]


def _at_root(root: Path, preset_id: str) -> Path | None:
    return _with_json_suffix(root / preset_id)


def _in_kit(root: Path, preset_id: str) -> Path | None:
    return _with_json_suffix(root / KIT_SUBDIR / preset_id)


def _in_kit_presets(root: Path, preset_id: str) -> Path | None:
    if preset_id.startswith(f"{PRESETS_SUBDIR}/"):
        return None
    return _with_json_suffix(root / KIT_SUBDIR / PRESETS_SUBDIR / preset_id)


PRESET_CANDIDATES: tuple[PresetCandidate, ...] = (
    _at_root,
    _in_kit,
    _in_kit_presets,
)


def find_preset_file(root: Path, preset_id: str) -> Path | None:
    """Return the first existing preset file for preset_id, or None."""
    for candidate in PRESET_CANDIDATES:
        path = candidate(root, preset_id)
        if path is not None and path.is_file():
            return path
    return None


def load_preset(path: Path) -> Preset:
    """Parse a preset file.

    Raises:
        PresetParseError: If the file is not valid JSON or not a preset
    """
    default_name = path.name.removesuffix(".json")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PresetParseError(f"Failed to parse preset {path}: {e}")
    return Preset.from_dict(data, default_name)


def locate_preset(root: Path, preset_id: str) -> Preset:
    """Find and load a preset from a registry root.

    Tries, in order:
    1. root/<preset_id>.json
    2. root/<kit>/<preset_id>.json
    3. root/<kit>/presets/<preset_id>.json (unless preset_id starts with "presets/")

    Raises:
        PresetNotFoundError: If no candidate file exists
    """
    path = find_preset_file(root, preset_id)
    if path is None:
        raise PresetNotFoundError(f'Preset "{preset_id}" not found')
    return load_preset(path)


def find_presets_dir(root: Path) -> Path | None:
    """Find the presets directory of a registry (bare kit or monorepo)."""
    for candidate in (root / PRESETS_SUBDIR, root / KIT_SUBDIR / PRESETS_SUBDIR):
        if candidate.is_dir():
            return candidate
    return None


def list_presets(root: Path) -> list[tuple[str, Preset]]:
    """List all presets of a registry as (preset id, preset), sorted by id.

    Raises:
        PresetNotFoundError: If the registry has no presets directory
        PresetParseError: If a preset file is malformed
    """
    presets_dir = find_presets_dir(root)
    if presets_dir is None:
        raise PresetNotFoundError("No presets folder found in registry.")

    return [
        (path.name.removesuffix(".json"), load_preset(path))
        for path in sorted(presets_dir.glob("*.json"))
        if path.is_file()
    ]


def resolve_modules(
    preset: Preset,
    include: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> list[str]:
    """Compute the ordered list of modules to materialize.

    Preset modules come first in their own order, then included modules not
    already present, in include order. Excluded modules are dropped last, so
    a path that is both included and excluded ends up excluded.

    Examples:
        >>> resolve_modules(Preset("p", modules=("skills/a", "agents/b")), ["rules/c"], ["agents/b"])
        ['skills/a', 'rules/c']
    """
    modules = list(dict.fromkeys(preset.modules))
    seen = set(modules)
    for module in include:
        if module not in seen:
            seen.add(module)
            modules.append(module)

    excluded = set(exclude)
    return [module for module in modules if module not in excluded]
