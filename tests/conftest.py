"""Test configuration and fixtures."""

import json
import os
from pathlib import Path

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: end-to-end tests requiring network")
    config.addinivalue_line("markers", "network: tests that make real network requests")
    config.addinivalue_line("markers", "slow: tests taking > 5 seconds")


@pytest.fixture(autouse=True)
def skip_e2e_in_ci(request):
    """Auto-skip E2E tests in CI based on SKIP_E2E env var."""
    if request.node.get_closest_marker("e2e"):
        if os.environ.get("SKIP_E2E", "").lower() in ("1", "true", "yes"):
            pytest.skip("E2E tests skipped in CI (SKIP_E2E=1)")


@pytest.fixture(autouse=True)
def no_github_token(monkeypatch):
    """Keep tokens from the developer environment out of tests."""
    monkeypatch.delenv("AGENTKIT_AUTH", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


def write_preset(presets_dir: Path, preset_id: str, modules: list[str], description: str = "") -> Path:
    """Write a preset JSON file and return its path."""
    presets_dir.mkdir(parents=True, exist_ok=True)
    path = presets_dir / f"{preset_id}.json"
    path.write_text(
        json.dumps({"name": preset_id.title(), "description": description, "modules": modules})
    )
    return path


@pytest.fixture
def kit_registry(tmp_path: Path) -> Path:
    """Create a packaged kit registry (registry/ + presets/ at the root).

    Layout:
        kit/presets/minimal.json      -> skills/clean-code, workflows/deploy
        kit/presets/web-full.json     -> adds skills/docker-expert, root/GEMINI
        kit/registry/agents/...
        kit/registry/root/ARCHITECTURE.md
        kit/registry/.shared/...
        kit/registry/skills/clean-code/SKILL.md
        kit/registry/skills/docker-expert.md
        kit/registry/workflows/deploy.md
        kit/registry/rules/style.md
        kit/registry/root/GEMINI.md
    """
    root = tmp_path / "kit"
    registry = root / "registry"

    (registry / "agents").mkdir(parents=True)
    (registry / "agents" / "orchestrator.md").write_text("# Orchestrator")
    (registry / "agents" / "reviewer.md").write_text("# Reviewer")

    (registry / "root").mkdir()
    (registry / "root" / "ARCHITECTURE.md").write_text("# Architecture")
    (registry / "root" / "GEMINI.md").write_text("# Gemini rules")

    (registry / ".shared" / "ui").mkdir(parents=True)
    (registry / ".shared" / "ui" / "palette.csv").write_text("name,hex\n")

    (registry / "skills" / "clean-code").mkdir(parents=True)
    (registry / "skills" / "clean-code" / "SKILL.md").write_text("# Clean code")
    (registry / "skills" / "docker-expert.md").write_text("# Docker expert")

    (registry / "workflows").mkdir()
    (registry / "workflows" / "deploy.md").write_text("# Deploy")

    (registry / "rules").mkdir()
    (registry / "rules" / "style.md").write_text("# Style")

    write_preset(
        root / "presets",
        "minimal",
        ["skills/clean-code", "workflows/deploy"],
        description="Core skills only",
    )
    write_preset(
        root / "presets",
        "web-full",
        ["skills/clean-code", "skills/docker-expert", "root/GEMINI", "agents/reviewer"],
        description="Everything for web apps",
    )
    return root


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """Set up a temporary working directory and chdir into it."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    monkeypatch.chdir(project_dir)
    return project_dir


def write_config(directory: Path, **fields) -> Path:
    """Write agent.config.json with defaults for missing fields."""
    data = {
        "source": "../kit",
        "base": "presets/minimal",
        "include": [],
        "exclude": [],
        "overrides": {},
    }
    data.update(fields)
    path = directory / "agent.config.json"
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def make_config():
    """Provide the agent.config.json writer."""
    return write_config


@pytest.fixture
def make_preset():
    """Provide the preset file writer."""
    return write_preset
