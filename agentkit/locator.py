"""Find module sources inside a fetched registry.

The same registry content can arrive in several shapes:

- a packaged kit:              <root>/registry/skills/...
- a monorepo holding the kit:  <root>/<kit>/registry/skills/...
- a pre-built output tree:     <root>/.agent/skills/...
- a legacy flat layout:        <root>/skills/...

Bases are tried in that order and, within each base, the exact module path
is preferred over the same path with a ".md" suffix.
"""

from collections.abc import Callable
from pathlib import Path

from agentkit.constants import AGENT_DIR_NAME, KIT_SUBDIR, REGISTRY_SUBDIR
from agentkit.exceptions import ModuleSourceNotFoundError

# Each base maps a registry root to a directory that may hold modules.
RegistryBase = Callable[[Path], Path]

REGISTRY_BASES: tuple[RegistryBase, ...] = (
    lambda root: root / REGISTRY_SUBDIR,
    lambda root: root / KIT_SUBDIR / REGISTRY_SUBDIR,
    lambda root: root / AGENT_DIR_NAME,
    lambda root: root,
)


def candidate_paths(root: Path, module_path: str) -> list[Path]:
    """All paths tried for a module, in priority order."""
    candidates = []
    for base in REGISTRY_BASES:
        exact = base(root) / module_path
        candidates.append(exact)
        candidates.append(exact.with_name(f"{exact.name}.md"))
    return candidates


def locate_source(root: Path, module_path: str) -> Path:
    """Find the file or directory to copy for a module.

    Args:
        root: Registry root (the staged download or local copy)
        module_path: Module path such as "skills/docker-expert"

    Returns:
        The first existing candidate path

    Raises:
        ModuleSourceNotFoundError: If no layout contains the module
    """
    for candidate in candidate_paths(root, module_path):
        if candidate.exists():
            return candidate
    raise ModuleSourceNotFoundError(f"Module not found: {module_path}")


def find_registry_dir(root: Path) -> Path:
    """Return the directory holding categories (agents/, skills/, ...) for a root.

    Falls back to root itself for the legacy flat layout.
    """
    for base in REGISTRY_BASES:
        candidate = base(root)
        if candidate.is_dir():
            return candidate
    return root
