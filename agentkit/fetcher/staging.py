"""Staging of registry content for a single command invocation."""

import shutil
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from agentkit.constants import IGNORED_SOURCE_NAMES
from agentkit.fetcher.download import download_repo
from agentkit.fetcher.source import RegistrySource

STAGING_PREFIX = "agentkit-"


def copy_local_registry(source_dir: Path, dest: Path) -> Path:
    """Copy a local registry into dest, leaving out VCS and node_modules folders."""
    shutil.copytree(source_dir, dest, ignore=shutil.ignore_patterns(*IGNORED_SOURCE_NAMES))
    return dest


@contextmanager
def staged_registry(source: RegistrySource) -> Generator[Path, None, None]:
    """
    Context manager that stages registry content in a fresh temporary directory.

    Each invocation gets its own uniquely named directory, removed when the
    block exits whether it succeeded or raised.

    Args:
        source: Parsed registry source

    Yields:
        Path to the registry root

    Raises:
        RetrievalError: If a remote registry cannot be downloaded
    """
    with tempfile.TemporaryDirectory(prefix=STAGING_PREFIX, ignore_cleanup_errors=True) as tmp_dir:
        tmp_path = Path(tmp_dir)
        if source.is_local:
            yield copy_local_registry(source.path, tmp_path / "registry-root")
        else:
            yield download_repo(source, tmp_path)
