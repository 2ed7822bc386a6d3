"""Install pipeline: assemble a .agent directory from a configuration record.

The pipeline runs core components, then preset resolution, then module
copies, then overrides. Per-module and per-override problems are collected
in the result so the caller can warn about them; every other error aborts.
"""

from dataclasses import dataclass, field
from pathlib import Path

from agentkit.config import AgentConfig
from agentkit.exceptions import InvalidModulePathError, ModuleSourceNotFoundError
from agentkit.fetcher import RegistrySource, parse_source, staged_registry
from agentkit.locator import find_registry_dir, locate_source
from agentkit.materializer import (
    CoreInstallResult,
    OverrideResult,
    apply_overrides,
    copy_module,
    install_core_components,
)
from agentkit.modules import is_core_module, parse_module_path
from agentkit.presets import Preset, locate_preset, resolve_modules


@dataclass
class InstallResult:
    """Result of an install run."""

    preset: Preset
    modules: list[str] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    skipped_core: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    invalid: list[tuple[str, str]] = field(default_factory=list)
    core: CoreInstallResult = field(default_factory=CoreInstallResult)
    overrides: OverrideResult = field(default_factory=OverrideResult)

    @property
    def total_modules(self) -> int:
        return len(self.modules)

    @property
    def total_copied(self) -> int:
        return len(self.copied)

    @property
    def has_warnings(self) -> bool:
        return bool(self.missing or self.invalid or self.overrides.total_skipped)


def assemble(
    registry_root: Path,
    destination_root: Path,
    config: AgentConfig,
    cwd: Path | None = None,
) -> InstallResult:
    """Assemble destination_root from an already staged registry.

    Args:
        registry_root: Root of the fetched registry content
        destination_root: The .agent directory to write
        config: Configuration record driving the selection
        cwd: Directory that override paths are relative to

    Returns:
        InstallResult describing what was copied and skipped

    Raises:
        PresetNotFoundError: If config.base matches no preset
        PresetParseError: If the preset file is malformed
    """
    core = install_core_components(find_registry_dir(registry_root), destination_root)

    preset = locate_preset(registry_root, config.base)
    result = InstallResult(
        preset=preset,
        modules=resolve_modules(preset, config.include, config.exclude),
        core=core,
    )

    for module_path in result.modules:
        if is_core_module(module_path):
            result.skipped_core.append(module_path)
            continue

        try:
            normalized = str(parse_module_path(module_path))
            source = locate_source(registry_root, normalized)
            copy_module(source, destination_root, normalized)
        except ModuleSourceNotFoundError:
            result.missing.append(module_path)
            continue
        except InvalidModulePathError as e:
            result.invalid.append((module_path, str(e)))
            continue
        result.copied.append(module_path)

    if config.overrides:
        result.overrides = apply_overrides(destination_root, config.overrides, cwd)

    return result


def run_install(
    config: AgentConfig,
    destination_root: Path,
    cwd: Path | None = None,
    source: RegistrySource | None = None,
) -> InstallResult:
    """Fetch the configured registry into a staging directory and assemble.

    The staging directory is removed on every exit path.

    Raises:
        SourceNotFoundError: If a local source is missing or invalid
        RetrievalError: If the remote registry cannot be downloaded
        PresetNotFoundError: If the configured preset doesn't exist
    """
    cwd = cwd or Path.cwd()
    if source is None:
        source = parse_source(config.source, cwd)

    with staged_registry(source) as registry_root:
        return assemble(registry_root, destination_root, config, cwd)
