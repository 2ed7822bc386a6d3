"""Install command for agentkit - assemble .agent from agent.config.json."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from agentkit.cli.common import (
    console,
    fetch_spinner,
    load_config_or_exit,
    print_error,
    print_warning,
    warn_if_ambiguous,
)
from agentkit.config import AgentConfig
from agentkit.constants import AGENT_DIR_NAME
from agentkit.exceptions import AgentKitError
from agentkit.fetcher import parse_source
from agentkit.installer import InstallResult, run_install

app = typer.Typer(help="Assemble the .agent folder based on agent.config.json.")


def _print_warnings(result: InstallResult) -> None:
    for module_path in result.missing:
        print_warning(f"Module not found: {module_path}")
    for module_path, reason in result.invalid:
        print_warning(f"Skipped {module_path}: {reason}")
    for _module_path, local_path in result.overrides.missing:
        print_warning(f"Override not found: {local_path}")
    for module_path, reason in result.overrides.invalid:
        print_warning(f"Skipped override {module_path}: {reason}")


def _print_summary(config: AgentConfig, result: InstallResult) -> None:
    console.print(
        f"[green]Successfully assembled {result.total_copied}/{result.total_modules} modules![/green]"
    )
    if result.core.installed:
        console.print(f"[dim]Core: {', '.join(result.core.installed)}[/dim]")
    if result.overrides.applied:
        console.print(f"[dim]Overrides applied: {len(result.overrides.applied)}[/dim]")

    include = ", ".join(config.include) if config.include else "(none)"
    exclude = ", ".join(config.exclude) if config.exclude else "(none)"

    console.print("[dim]" + "-" * 40 + "[/dim]")
    console.print(f"Source:  [cyan]{escape(config.source)}[/cyan]")
    console.print(f"Base:    [cyan]{escape(result.preset.name)}[/cyan]")
    console.print(f"Include: [dim]{escape(include)}[/dim]")
    console.print(f"Exclude: [dim]{escape(exclude)}[/dim]")
    console.print("[dim]" + "-" * 40 + "[/dim]")


@app.callback(invoke_without_command=True)
def install(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Assemble into an existing .agent folder without asking",
        ),
    ] = False,
) -> None:
    """Fetch the registry and assemble the .agent folder.

    Installs the core components (agents, ARCHITECTURE.md, .shared), then
    the preset modules with your include/exclude changes, then overrides.

    Examples:
      agentkit install
      agentkit install --force
    """
    cwd = Path.cwd()
    config = load_config_or_exit(cwd)
    destination = cwd / AGENT_DIR_NAME

    if destination.exists() and not force:
        if not typer.confirm(f"{AGENT_DIR_NAME} folder exists. Overwrite?", default=False):
            console.print("[yellow]Operation cancelled.[/yellow]")
            raise typer.Exit(0)

    try:
        source = parse_source(config.source, cwd)
        warn_if_ambiguous(source)
        with fetch_spinner(f"Fetching registry from {escape(config.source)}..."):
            result = run_install(config, destination, cwd, source)
    except (AgentKitError, OSError) as e:
        console.print("[red]Installation failed.[/red]")
        print_error(e)
        raise typer.Exit(1)

    _print_warnings(result)
    _print_summary(config, result)
