"""Init command for agentkit - write a fresh agent.config.json."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from agentkit.cli.common import console, print_error
from agentkit.config import AgentConfig, get_config_path
from agentkit.constants import CONFIG_FILENAME, DEFAULT_PRESET, DEFAULT_SOURCE

app = typer.Typer(help="Initialize a new agent.config.json with a preset.")


@app.callback(invoke_without_command=True)
def init(
    kit: Annotated[
        str,
        typer.Option(
            "--kit",
            "-k",
            help="Preset kit to use (e.g. minimal, web-full, backend-full)",
        ),
    ] = DEFAULT_PRESET,
    source: Annotated[
        str,
        typer.Option(
            "--source",
            "-s",
            help="Registry source: github:<owner>/<repo> or a local path",
        ),
    ] = DEFAULT_SOURCE,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing agent.config.json without asking",
        ),
    ] = False,
) -> None:
    """Create agent.config.json in the current directory.

    Examples:
      agentkit init
      agentkit init --kit web-full
      agentkit init --kit minimal --source ./my-kit
    """
    kit = kit.strip().removesuffix(".json")
    if not kit:
        print_error("Preset name cannot be empty")
        raise typer.Exit(1)

    config_path = get_config_path(Path.cwd())
    if config_path.exists() and not force:
        if not typer.confirm(f"{CONFIG_FILENAME} already exists. Overwrite?", default=False):
            console.print("[yellow]Operation cancelled.[/yellow]")
            raise typer.Exit(0)

    config = AgentConfig.create(preset=kit, source=source)
    config.save(config_path)

    console.print(f"[green]Created {CONFIG_FILENAME}[/green]")
    console.print(f"[dim]  Base: {escape(kit)}[/dim]")
    console.print(f"[dim]  Source: {escape(source)}[/dim]")
    console.print("\nRun [cyan]agentkit install[/cyan] to assemble the .agent folder.")
