"""Tests for the agentkit command-line interface."""

import json
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from agentkit import __version__
from agentkit.cli.main import app
from agentkit.exceptions import RetrievalError


runner = CliRunner()


def _read_config(project: Path) -> dict:
    return json.loads((project / "agent.config.json").read_text())


class TestVersion:
    """Tests for --version."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestInit:
    """Tests for agentkit init."""

    def test_init_writes_default_config(self, project: Path):
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Created agent.config.json" in result.output
        assert _read_config(project) == {
            "source": "github:nguyen-phan123/antigravity-kit",
            "base": "presets/minimal",
            "include": [],
            "exclude": [],
            "overrides": {},
        }

    def test_init_with_kit_and_source(self, project: Path):
        result = runner.invoke(app, ["init", "--kit", "web-full", "--source", "../kit"])

        assert result.exit_code == 0
        config = _read_config(project)
        assert config["base"] == "presets/web-full"
        assert config["source"] == "../kit"

    def test_init_asks_before_overwrite(self, project: Path, make_config):
        make_config(project, include=["skills/keep"])

        result = runner.invoke(app, ["init"], input="n\n")

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        assert _read_config(project)["include"] == ["skills/keep"]

    def test_init_overwrite_confirmed(self, project: Path, make_config):
        make_config(project, include=["skills/keep"])

        result = runner.invoke(app, ["init"], input="y\n")

        assert result.exit_code == 0
        assert _read_config(project)["include"] == []

    def test_init_force(self, project: Path, make_config):
        make_config(project, include=["skills/keep"])

        result = runner.invoke(app, ["init", "--force", "-k", "backend-full"])

        assert result.exit_code == 0
        assert _read_config(project)["base"] == "presets/backend-full"


class TestAddRemove:
    """Tests for add/remove and their shortcuts."""

    def test_add_module(self, project: Path, make_config):
        make_config(project, exclude=["skills/docker-expert"])

        result = runner.invoke(app, ["add", "skills", "docker-expert"])

        assert result.exit_code == 0
        assert "to include list" in result.output
        config = _read_config(project)
        assert config["include"] == ["skills/docker-expert"]
        assert config["exclude"] == []

    def test_remove_preset_module(self, project: Path, make_config):
        make_config(project)

        result = runner.invoke(app, ["remove", "workflows", "deploy"])

        assert result.exit_code == 0
        assert "to exclude list" in result.output
        assert _read_config(project)["exclude"] == ["workflows/deploy"]

    def test_add_then_remove_round_trip(self, project: Path, make_config):
        make_config(project, include=["rules/style"], exclude=["workflows/deploy"])
        before = _read_config(project)

        runner.invoke(app, ["add", "skills", "x"])
        result = runner.invoke(app, ["remove", "skills", "x"])

        assert result.exit_code == 0
        assert "from include list" in result.output
        assert "Still installed" in result.output
        assert _read_config(project) == before

    def test_second_remove_excludes_preset_module(self, project: Path, make_config):
        make_config(project, include=["workflows/deploy"])

        runner.invoke(app, ["remove", "workflows", "deploy"])
        result = runner.invoke(app, ["remove", "workflows", "deploy"])

        assert result.exit_code == 0
        assert "to exclude list" in result.output
        config = _read_config(project)
        assert config["include"] == []
        assert config["exclude"] == ["workflows/deploy"]

    def test_shortcuts(self, project: Path, make_config):
        make_config(project)

        assert runner.invoke(app, ["add-skill", "docker-expert"]).exit_code == 0
        assert runner.invoke(app, ["add-workflow", "review"]).exit_code == 0
        assert runner.invoke(app, ["add-root", "GEMINI.md"]).exit_code == 0
        assert runner.invoke(app, ["remove-rule", "legacy"]).exit_code == 0
        assert runner.invoke(app, ["remove-agent", "reviewer"]).exit_code == 0

        config = _read_config(project)
        assert config["include"] == ["skills/docker-expert", "workflows/review", "root/GEMINI.md"]
        assert config["exclude"] == ["rules/legacy", "agents/reviewer"]

    def test_unknown_category_rejected(self, project: Path, make_config):
        make_config(project)

        result = runner.invoke(app, ["add", "plugins", "x"])

        assert result.exit_code != 0
        assert _read_config(project)["include"] == []

    def test_invalid_name_rejected(self, project: Path, make_config):
        make_config(project)

        result = runner.invoke(app, ["add", "skills", "../escape"])

        assert result.exit_code == 1
        assert _read_config(project)["include"] == []

    def test_add_without_config(self, project: Path):
        result = runner.invoke(app, ["add", "skills", "x"])

        assert result.exit_code == 1
        assert "agent.config.json not found" in result.output
        assert not (project / "agent.config.json").exists()

    def test_invalid_config_not_rewritten(self, project: Path):
        (project / "agent.config.json").write_text("{broken")

        result = runner.invoke(app, ["add", "skills", "x"])

        assert result.exit_code == 1
        assert (project / "agent.config.json").read_text() == "{broken"


class TestInstall:
    """Tests for agentkit install."""

    def test_install_from_local_registry(self, project: Path, kit_registry: Path, make_config):
        make_config(project, include=["rules/style"])

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0, result.output
        assert "Successfully assembled 3/3 modules" in result.output
        assert (project / ".agent" / "rules" / "style.md").exists()
        assert (project / ".agent" / "agents" / "reviewer.md").exists()

    def test_install_warns_about_missing(self, project: Path, kit_registry: Path, make_config):
        make_config(
            project,
            include=["skills/ghost"],
            overrides={"rules/style.md": "./nope.md"},
        )

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0
        assert "Module not found: skills/ghost" in result.output
        assert "Override not found: ./nope.md" in result.output
        assert "2/3 modules" in result.output

    def test_install_without_config(self, project: Path):
        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "agent.config.json not found" in result.output
        assert "agentkit init" in result.output

    def test_install_asks_when_agent_exists(self, project: Path, kit_registry: Path, make_config):
        make_config(project)
        (project / ".agent").mkdir()

        result = runner.invoke(app, ["install"], input="n\n")

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        assert list((project / ".agent").iterdir()) == []

    def test_install_force_skips_prompt(self, project: Path, kit_registry: Path, make_config):
        make_config(project)
        (project / ".agent").mkdir()

        result = runner.invoke(app, ["install", "--force"])

        assert result.exit_code == 0
        assert (project / ".agent" / "workflows" / "deploy.md").exists()

    def test_install_unknown_preset_fails(self, project: Path, kit_registry: Path, make_config):
        make_config(project, base="presets/unknown")

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "Installation failed" in result.output
        assert "not found" in result.output

    def test_install_missing_local_source(self, project: Path, make_config):
        make_config(project, source="./nowhere")

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "Local path not found" in result.output

    def test_install_ambiguous_source_warns(self, project: Path, kit_registry: Path, make_config):
        (project / "kit").symlink_to(kit_registry, target_is_directory=True)
        make_config(project, source="kit")

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0
        assert "Using local directory: kit" in result.output

    def test_install_retrieval_failure(self, project: Path, make_config):
        make_config(project, source="github:owner/private-kit")

        with patch(
            "agentkit.installer.staged_registry",
            side_effect=RetrievalError("Repository not found: github:owner/private-kit"),
        ):
            result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "Repository not found" in result.output
        assert not (project / ".agent").exists()


class TestList:
    """Tests for agentkit list."""

    def test_list_local_registry(self, project: Path, kit_registry: Path):
        result = runner.invoke(app, ["list", "--source", "../kit"])

        assert result.exit_code == 0
        assert "minimal" in result.output
        assert "web-full" in result.output
        assert "Core skills only" in result.output
        assert "Modules: 4" in result.output
        assert not (project / "agent.config.json").exists()

    def test_list_without_presets(self, project: Path, tmp_path: Path):
        (tmp_path / "empty").mkdir()

        result = runner.invoke(app, ["list", "-s", "../empty"])

        assert result.exit_code == 1
        assert "Failed to fetch presets" in result.output
        assert "No presets folder" in result.output

    def test_list_preset_with_non_string_name(self, project: Path, kit_registry: Path):
        (kit_registry / "presets" / "broken.json").write_text(
            json.dumps({"name": 7, "modules": ["skills/clean-code"]})
        )

        result = runner.invoke(app, ["list", "-s", "../kit"])

        assert result.exit_code == 1
        assert "Failed to fetch presets" in result.output
        assert isinstance(result.exception, SystemExit)


class TestInstallBadInput:
    """Malformed registry or record content ends with an error message, not a traceback."""

    def test_slash_preset_entry_skipped(self, project: Path, kit_registry: Path, make_config, make_preset):
        make_preset(kit_registry / "presets", "odd", ["/", "skills/clean-code"])
        make_config(project, base="presets/odd")

        result = runner.invoke(app, ["install", "--force"])

        assert result.exit_code == 0, result.output
        assert "Skipped /" in result.output
        assert (project / ".agent" / "skills" / "clean-code" / "SKILL.md").exists()

    def test_non_utf8_preset(self, project: Path, kit_registry: Path, make_config):
        (kit_registry / "presets" / "minimal.json").write_bytes(b'{"name": "\xff\xfe"}')
        make_config(project)

        result = runner.invoke(app, ["install", "--force"])

        assert result.exit_code == 1
        assert "Installation failed" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_non_string_preset_name(self, project: Path, kit_registry: Path, make_config):
        (kit_registry / "presets" / "minimal.json").write_text(
            json.dumps({"name": 7, "modules": ["skills/clean-code"]})
        )
        make_config(project)

        result = runner.invoke(app, ["install", "--force"])

        assert result.exit_code == 1
        assert "Installation failed" in result.output
        assert not (project / ".agent" / "skills").exists()

    def test_non_utf8_config(self, project: Path):
        (project / "agent.config.json").write_bytes(b'{"source": "\xff\xfe"}')

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "Invalid agent.config.json" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_unknown_home_in_source(self, project: Path):
        result = runner.invoke(app, ["list", "--source", "~nosuchuser-agentkit/kit"])

        assert result.exit_code == 1
        assert "Cannot expand" in result.output
