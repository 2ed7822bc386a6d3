"""Copy located sources into the .agent destination tree.

Every copy overwrites by path: core components are written first, then
resolved modules in resolution order, then overrides, and a later write
always shadows an earlier one.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from agentkit.constants import AGENTS_CATEGORY, ARCHITECTURE_FILE, ROOT_CATEGORY, SHARED_SUBDIR
from agentkit.exceptions import InvalidModulePathError, OverrideNotFoundError
from agentkit.modules import parse_module_path


@dataclass
class CoreInstallResult:
    """Which core components were found and installed."""

    agents: bool = False
    architecture: bool = False
    shared: bool = False

    @property
    def installed(self) -> list[str]:
        names = []
        if self.agents:
            names.append(AGENTS_CATEGORY)
        if self.architecture:
            names.append(ARCHITECTURE_FILE)
        if self.shared:
            names.append(SHARED_SUBDIR)
        return names


@dataclass
class OverrideResult:
    """Result of applying local overrides."""

    applied: list[str] = field(default_factory=list)
    missing: list[tuple[str, str]] = field(default_factory=list)
    invalid: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total_skipped(self) -> int:
        return len(self.missing) + len(self.invalid)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def copy_path(source: Path, dest: Path) -> Path:
    """Copy a file or directory onto dest, overwriting what is there.

    Directories are merged file by file; a destination of the other kind
    (file where a directory goes, or the reverse) is removed first.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)

    if source.is_dir():
        if dest.exists() and not dest.is_dir():
            _remove(dest)
        shutil.copytree(source, dest, dirs_exist_ok=True)
    else:
        if dest.is_dir():
            _remove(dest)
        shutil.copy2(source, dest)

    return dest


def copy_module(source: Path, destination_root: Path, module_path: str) -> Path:
    """Copy a located module source into the destination tree.

    A "root/<name>" module lands at destination_root/<name>; any other
    "<category>/<name>" lands at destination_root/<category>/<name>. When a
    single file is copied to a destination without an extension, the
    destination takes the source's extension, so a "skills/x" resolved to
    "x.md" is written as "skills/x.md".

    Returns:
        The path that was written
    """
    dest = parse_module_path(module_path).destination(destination_root)

    if source.is_file() and source.suffix and not dest.suffix:
        dest = dest.with_name(f"{dest.name}{source.suffix}")

    return copy_path(source, dest)


def _override_destination(destination_root: Path, module_path: str) -> Path:
    """Destination of an override: the module path taken verbatim under the root."""
    dest = (destination_root / module_path).resolve()
    root = destination_root.resolve()
    if dest == root or not dest.is_relative_to(root):
        raise InvalidModulePathError(
            f"Override target '{module_path}' is outside {destination_root}"
        )
    return dest


def apply_override(destination_root: Path, module_path: str, local_path: str, cwd: Path) -> Path:
    """Copy one local override onto destination_root/module_path.

    Raises:
        OverrideNotFoundError: If local_path doesn't exist
        InvalidModulePathError: If module_path points outside destination_root
    """
    source = (cwd / Path(local_path).expanduser()).resolve()
    if not source.exists():
        raise OverrideNotFoundError(f"Override not found: {local_path}")

    dest = _override_destination(destination_root, module_path)
    return copy_path(source, dest)


def apply_overrides(
    destination_root: Path,
    overrides: dict[str, str],
    cwd: Path | None = None,
) -> OverrideResult:
    """Apply all overrides after module copying; failures are collected, not raised."""
    cwd = cwd or Path.cwd()
    result = OverrideResult()

    for module_path, local_path in overrides.items():
        try:
            apply_override(destination_root, module_path, local_path, cwd)
        except OverrideNotFoundError:
            result.missing.append((module_path, local_path))
            continue
        except InvalidModulePathError as e:
            result.invalid.append((module_path, str(e)))
            continue
        result.applied.append(module_path)

    return result


def install_core_components(registry_dir: Path, destination_root: Path) -> CoreInstallResult:
    """Install the preset-independent components.

    Copies the whole agents/ category, ARCHITECTURE.md (from root/ or the
    registry top level) and the .shared/ resources, each only when present.
    """
    result = CoreInstallResult()
    destination_root.mkdir(parents=True, exist_ok=True)

    agents_source = registry_dir / AGENTS_CATEGORY
    if agents_source.is_dir():
        copy_path(agents_source, destination_root / AGENTS_CATEGORY)
        result.agents = True

    for architecture_source in (
        registry_dir / ROOT_CATEGORY / ARCHITECTURE_FILE,
        registry_dir / ARCHITECTURE_FILE,
    ):
        if architecture_source.is_file():
            copy_path(architecture_source, destination_root / ARCHITECTURE_FILE)
            result.architecture = True
            break

    shared_source = registry_dir / SHARED_SUBDIR
    if shared_source.is_dir():
        copy_path(shared_source, destination_root / SHARED_SUBDIR)
        result.shared = True

    return result
