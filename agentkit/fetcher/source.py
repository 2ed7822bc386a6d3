"""Registry source parsing.

| Source                                   | Kind   | Notes                               |
|------------------------------------------|--------|-------------------------------------|
| `./kit`, `../kit`, `/abs/kit`, `~/kit`   | local  | must exist and be a directory       |
| `github:owner/repo`, `gh:owner/repo`     | remote | optional `/subdir` and `#ref`       |
| `owner/repo/subdir#v2`                   | remote | bare GitHub shorthand               |
| `kit` (exists locally)                   | local  | ambiguous, used with a warning      |
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from agentkit.constants import DEFAULT_REF
from agentkit.exceptions import SourceNotFoundError

GITHUB_PREFIXES = ("github:", "gh:")
LOCAL_PREFIXES = ("./", "../", "/", "~", ".\\", "..\\")


class SourceKind(Enum):
    """Where registry content comes from."""

    LOCAL = "local"
    GITHUB = "github"


@dataclass(frozen=True)
class RegistrySource:
    """A parsed registry source.

    Attributes:
        raw: The source string as written in agent.config.json
        kind: Local directory or GitHub repository
        path: Resolved directory for local sources
        owner: GitHub owner for remote sources
        repo: GitHub repository name for remote sources
        subdir: Directory inside the repository to use as registry root
        ref: Branch or tag to download
        ambiguous: True when a bare name was taken as a local directory
    """

    raw: str
    kind: SourceKind
    path: Path | None = None
    owner: str | None = None
    repo: str | None = None
    subdir: str | None = None
    ref: str = DEFAULT_REF
    ambiguous: bool = False

    @property
    def is_local(self) -> bool:
        return self.kind == SourceKind.LOCAL

    @property
    def display_name(self) -> str:
        if self.is_local:
            return str(self.path)
        name = f"{self.owner}/{self.repo}"
        if self.subdir:
            name += f"/{self.subdir}"
        return name


def _is_explicit_local(source: str) -> bool:
    return source.startswith(LOCAL_PREFIXES)


def _parse_github(raw: str, reference: str) -> RegistrySource:
    """Parse "owner/repo[/subdir][#ref]" (prefix already stripped)."""
    reference, _, ref = reference.partition("#")
    parts = [part for part in reference.split("/") if part]
    if len(parts) < 2:
        raise SourceNotFoundError(
            f"Invalid GitHub source '{raw}'. Expected: github:<owner>/<repo>[/<subdir>][#<ref>]"
        )

    owner, repo, *subdir = parts
    return RegistrySource(
        raw=raw,
        kind=SourceKind.GITHUB,
        owner=owner,
        repo=repo.removesuffix(".git"),
        subdir="/".join(subdir) or None,
        ref=ref or DEFAULT_REF,
    )


def _local_directory(raw: str, path: Path, ambiguous: bool = False) -> RegistrySource:
    if not path.exists():
        raise SourceNotFoundError(f"Local path not found: {path}")
    if not path.is_dir():
        raise SourceNotFoundError(f"Source is not a directory: {path}")
    return RegistrySource(raw=raw, kind=SourceKind.LOCAL, path=path, ambiguous=ambiguous)


def parse_source(source: str, cwd: Path | None = None) -> RegistrySource:
    """Classify and validate a registry source.

    Priority: explicit local path, then GitHub reference, then a bare name
    that happens to exist as a local directory.

    Raises:
        SourceNotFoundError: For a missing or non-directory local path, or a
            string that is neither a local directory nor a GitHub reference
    """
    source = source.strip()
    if not source:
        raise SourceNotFoundError("Source cannot be empty")

    cwd = cwd or Path.cwd()

    if _is_explicit_local(source):
        try:
            expanded = Path(source).expanduser()
        except RuntimeError as e:
            raise SourceNotFoundError(f"Cannot expand local path '{source}': {e}")
        return _local_directory(source, (cwd / expanded).resolve())

    for prefix in GITHUB_PREFIXES:
        if source.startswith(prefix):
            return _parse_github(source, source[len(prefix):])

    if "/" in source and "\\" not in source:
        return _parse_github(source, source)

    candidate = cwd / source
    if candidate.exists():
        return _local_directory(source, candidate.resolve(), ambiguous=True)

    raise SourceNotFoundError(
        f"Source '{source}' is neither a local directory nor a GitHub repository.\n"
        f"    Tip: use github:<owner>/<repo> for GitHub, or ./{source} for a local path"
    )
