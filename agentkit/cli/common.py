"""Shared CLI utilities for agentkit commands."""

from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from agentkit.config import AgentConfig, get_config_path
from agentkit.constants import CONFIG_FILENAME
from agentkit.exceptions import ConfigNotFoundError, ConfigParseError, ConfigValidationError
from agentkit.fetcher import RegistrySource

console = Console()


@contextmanager
def fetch_spinner(text: str = "Fetching..."):
    """Show spinner during fetch operation."""
    with Live(Spinner("dots", text=text), console=console, transient=True):
        yield


def print_error(message: object) -> None:
    console.print(f"[red]Error: {escape(str(message))}[/red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]  Warning: {escape(message)}[/yellow]")


def warn_if_ambiguous(source: RegistrySource) -> None:
    """Tell the user a bare name was taken as a local directory."""
    if source.ambiguous:
        console.print(f"[yellow]Using local directory: {escape(source.raw)}[/yellow]")
        console.print(f"[dim]    Tip: Use ./{escape(source.raw)} to avoid ambiguity[/dim]")


def load_config_or_exit(directory: Path | None = None) -> AgentConfig:
    """Load agent.config.json or exit with a helpful message."""
    config_path = get_config_path(directory)
    try:
        return AgentConfig.load(config_path)
    except ConfigNotFoundError:
        print_error(f"{CONFIG_FILENAME} not found.")
        console.print("[yellow]Run 'agentkit init' first.[/yellow]")
        raise typer.Exit(1)
    except (ConfigParseError, ConfigValidationError) as e:
        print_error(f"Invalid {CONFIG_FILENAME}: {e}")
        raise typer.Exit(1)
