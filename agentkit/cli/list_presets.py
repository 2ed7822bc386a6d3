"""List command for agentkit - show presets available in a registry."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from agentkit.cli.common import console, fetch_spinner, print_error, warn_if_ambiguous
from agentkit.constants import DEFAULT_SOURCE
from agentkit.exceptions import AgentKitError
from agentkit.fetcher import parse_source, staged_registry
from agentkit.presets import list_presets

app = typer.Typer(help="List available presets from a registry.")


@app.callback(invoke_without_command=True)
def list_command(
    source: Annotated[
        str,
        typer.Option(
            "--source",
            "-s",
            help="Registry source: github:<owner>/<repo> or a local path",
        ),
    ] = DEFAULT_SOURCE,
) -> None:
    """Fetch a registry and print its presets. Writes no local state.

    Examples:
      agentkit list
      agentkit list --source ./my-kit
    """
    try:
        registry_source = parse_source(source, Path.cwd())
        warn_if_ambiguous(registry_source)
        with fetch_spinner("Fetching presets..."):
            with staged_registry(registry_source) as registry_root:
                presets = list_presets(registry_root)
    except (AgentKitError, OSError) as e:
        console.print("[red]Failed to fetch presets.[/red]")
        print_error(e)
        raise typer.Exit(1)

    console.print("\n[bold blue]Available Presets:[/bold blue]\n")
    if not presets:
        console.print("[dim]No presets found[/dim]")
        return

    for preset_id, preset in presets:
        console.print(f"  [cyan]{escape(preset_id)}[/cyan]")
        console.print(f"    [dim]{escape(preset.description or 'No description')}[/dim]")
        console.print(f"    [dim]Modules: {len(preset.modules)}[/dim]\n")
