"""Module path parsing and destination mapping.

A module path names one copyable unit of the registry as
``<category>/<name>``, for example ``skills/docker-expert`` or
``root/GEMINI.md``. The category decides where the module lands in the
assembled ``.agent`` directory:

| Module path            | Destination                  |
|------------------------|------------------------------|
| `skills/docker-expert` | `.agent/skills/docker-expert`|
| `workflows/deploy.md`  | `.agent/workflows/deploy.md` |
| `root/GEMINI.md`       | `.agent/GEMINI.md`           |
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from agentkit.constants import (
    AGENTS_CATEGORY,
    ARCHITECTURE_FILE,
    ROOT_CATEGORY,
)
from agentkit.exceptions import InvalidModulePathError


class Category(str, Enum):
    """Module categories understood by the assembler."""

    AGENTS = "agents"
    SKILLS = "skills"
    WORKFLOWS = "workflows"
    RULES = "rules"
    ROOT = "root"


@dataclass(frozen=True)
class ModulePath:
    """Parsed module path.

    Attributes:
        category: First path segment (e.g. "skills")
        name: Everything after the first "/" (may contain further "/")
    """

    category: str
    name: str

    def __str__(self) -> str:
        return f"{self.category}/{self.name}"

    @property
    def is_root(self) -> bool:
        return self.category == ROOT_CATEGORY

    def destination(self, destination_root: Path) -> Path:
        """Compute where this module is written inside the destination root.

        Examples:
            >>> ModulePath("root", "NOTES").destination(Path("D"))
            PosixPath('D/NOTES')
            >>> ModulePath("skills", "x").destination(Path("D"))
            PosixPath('D/skills/x')
        """
        if self.is_root:
            return destination_root / self.name
        return destination_root / self.category / self.name


def parse_module_path(module_path: str) -> ModulePath:
    """Split a module path on its first "/".

    Only the shape is checked here; unknown categories are still copied so
    that registries can grow new categories without a release.

    Raises:
        InvalidModulePathError: If the path has no category, no name,
            is absolute, or contains ".." segments.
    """
    if not module_path or not module_path.strip():
        raise InvalidModulePathError("Module path cannot be empty")

    normalized = module_path.strip().replace("\\", "/")
    if normalized.startswith("/"):
        raise InvalidModulePathError(
            f"Invalid module path '{module_path}': must be relative (<category>/<name>)"
        )

    category, sep, name = normalized.partition("/")
    name = name.strip("/")
    if not sep or not category or not name:
        raise InvalidModulePathError(
            f"Invalid module path '{module_path}': expected <category>/<name>"
        )

    if ".." in PurePosixPath(normalized).parts:
        raise InvalidModulePathError(
            f"Invalid module path '{module_path}': '..' segments are not allowed"
        )

    return ModulePath(category=category, name=name)


def build_module_path(category: str, name: str) -> str:
    """Join a category and a name into a validated module path string."""
    return str(parse_module_path(f"{category}/{name}"))


def _canonical(module_path: str) -> str:
    return module_path.strip().replace("\\", "/").strip("/").casefold()


def is_core_module(module_path: str) -> bool:
    """Check whether a module is already covered by the core-component install.

    Agents and ARCHITECTURE.md are always installed before preset modules.
    Comparison is case-insensitive and tolerates a missing ".md" suffix, so
    "root/architecture.md", "ROOT/ARCHITECTURE" and "Agents/foo" all match.
    """
    canonical = _canonical(module_path)
    if canonical.startswith(f"{AGENTS_CATEGORY}/"):
        return True

    architecture = f"{ROOT_CATEGORY}/{ARCHITECTURE_FILE}".casefold()
    return canonical in (architecture, architecture.removesuffix(".md"))
