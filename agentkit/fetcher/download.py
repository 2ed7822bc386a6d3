"""HTTP and tarball download operations for fetching registries."""

import os
import tarfile
from pathlib import Path

import httpx

from agentkit.constants import AUTH_ENV_VARS
from agentkit.exceptions import RetrievalError
from agentkit.fetcher.source import RegistrySource


def get_auth_token() -> str | None:
    """Return the first GitHub token found in the environment."""
    for name in AUTH_ENV_VARS:
        token = os.environ.get(name)
        if token:
            return token
    return None


def build_tarball_request(source: RegistrySource, token: str | None = None) -> tuple[str, dict[str, str]]:
    """Build the tarball URL and headers for a GitHub source.

    Anonymous downloads use the public archive URL. With a token the API
    tarball endpoint is used instead, since it accepts authentication for
    private repositories.
    """
    if token:
        url = f"https://api.github.com/repos/{source.owner}/{source.repo}/tarball/{source.ref}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        }
        return url, headers

    url = f"https://github.com/{source.owner}/{source.repo}/archive/{source.ref}.tar.gz"
    return url, {}


def _not_found_message(source: RegistrySource) -> str:
    return (
        f"Repository not found: {source.raw}\n"
        "    Tip: If this is a private repo, set AGENTKIT_AUTH or GITHUB_TOKEN to a token with access.\n"
        "    Tip: For local paths, use ./path or ../path (explicit local)"
    )


def _extracted_root(extract_path: Path) -> Path:
    """GitHub tarballs hold a single top-level "<repo>-<ref>" directory."""
    entries = [entry for entry in extract_path.iterdir()]
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return extract_path


def download_repo(source: RegistrySource, tmp_path: Path) -> Path:
    """Download and extract a GitHub registry, returning the registry root.

    Raises:
        RetrievalError: If the repository doesn't exist, the request fails,
            or the requested subdirectory is missing
    """
    tarball_path = tmp_path / "repo.tar.gz"
    url, headers = build_tarball_request(source, get_auth_token())

    try:
        with httpx.Client(follow_redirects=True, timeout=30.0) as client:
            response = client.get(url, headers=headers)
            if response.status_code == 404:
                raise RetrievalError(_not_found_message(source))
            response.raise_for_status()
            tarball_path.write_bytes(response.content)
    except httpx.HTTPStatusError as e:
        raise RetrievalError(f"Failed to download repository: {e}")
    except httpx.RequestError as e:
        raise RetrievalError(f"Network error: {e}")

    extract_path = tmp_path / "extracted"
    try:
        with tarfile.open(tarball_path, "r:gz") as tar:
            tar.extractall(extract_path, filter="data")
    except tarfile.TarError as e:
        raise RetrievalError(f"Failed to extract repository archive: {e}")

    repo_dir = _extracted_root(extract_path)
    if source.subdir:
        repo_dir = repo_dir / source.subdir
        if not repo_dir.is_dir():
            raise RetrievalError(f"Directory '{source.subdir}' not found in {source.owner}/{source.repo}")

    return repo_dir
