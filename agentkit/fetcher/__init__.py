"""Registry retrieval: turn a source string into a local directory tree."""

from agentkit.fetcher.download import (
    build_tarball_request,
    download_repo,
    get_auth_token,
)
from agentkit.fetcher.source import (
    RegistrySource,
    SourceKind,
    parse_source,
)
from agentkit.fetcher.staging import (
    copy_local_registry,
    staged_registry,
)

__all__ = [
    # Source parsing
    "RegistrySource",
    "SourceKind",
    "parse_source",
    # Download operations
    "build_tarball_request",
    "download_repo",
    "get_auth_token",
    # Staging
    "copy_local_registry",
    "staged_registry",
]
