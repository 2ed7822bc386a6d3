"""Add and remove commands for agentkit - edit include/exclude lists."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from agentkit.cli.common import console, load_config_or_exit, print_error
from agentkit.config import get_config_path
from agentkit.exceptions import InvalidModulePathError
from agentkit.modules import Category, build_module_path

# Dedicated shortcut names: add-skill, remove-agent, ...
SHORTCUT_NAMES = {
    Category.SKILLS: "skill",
    Category.AGENTS: "agent",
    Category.WORKFLOWS: "workflow",
    Category.RULES: "rule",
    Category.ROOT: "root",
}


def _module_path_or_exit(category: Category, name: str) -> str:
    try:
        return build_module_path(category.value, name)
    except InvalidModulePathError as e:
        print_error(e)
        raise typer.Exit(1)


def _print_apply_hint() -> None:
    console.print("[dim]Run 'agentkit install' to apply changes.[/dim]")


def handle_add_module(category: Category, name: str) -> None:
    """Add <category>/<name> to the include list."""
    cwd = Path.cwd()
    config = load_config_or_exit(cwd)
    module_path = _module_path_or_exit(category, name)

    config.include_module(module_path)
    config.save(get_config_path(cwd))

    console.print(f"[green]Added [cyan]{escape(module_path)}[/cyan] to include list.[/green]")
    _print_apply_hint()


def handle_remove_module(category: Category, name: str) -> None:
    """Undo an include of <category>/<name>, or exclude it from the preset."""
    cwd = Path.cwd()
    config = load_config_or_exit(cwd)
    module_path = _module_path_or_exit(category, name)

    excluded = config.exclude_module(module_path)
    config.save(get_config_path(cwd))

    if excluded:
        console.print(f"[green]Added [cyan]{escape(module_path)}[/cyan] to exclude list.[/green]")
    else:
        console.print(
            f"[green]Removed [cyan]{escape(module_path)}[/cyan] from include list.[/green]"
        )
        console.print(
            f"[yellow]Still installed if the base preset lists {escape(module_path)}. "
            "Run the same remove again to exclude it.[/yellow]"
        )
    _print_apply_hint()


add_app = typer.Typer(help="Add a module (e.g. add skills docker-expert).")
remove_app = typer.Typer(help="Remove a module (e.g. remove skills tailwind-patterns).")


@add_app.callback(invoke_without_command=True)
def add(
    category: Annotated[Category, typer.Argument(help="Module category")],
    name: Annotated[str, typer.Argument(help="Module name inside the category")],
) -> None:
    """Add a module to the include list.

    Examples:
      agentkit add skills docker-expert
      agentkit add root GEMINI.md
    """
    handle_add_module(category, name)


@remove_app.callback(invoke_without_command=True)
def remove(
    category: Annotated[Category, typer.Argument(help="Module category")],
    name: Annotated[str, typer.Argument(help="Module name inside the category")],
) -> None:
    """Remove a module: undo an add, or exclude it from the preset.

    Examples:
      agentkit remove skills tailwind-patterns
    """
    handle_remove_module(category, name)


def make_shortcut_app(category: Category, adding: bool) -> typer.Typer:
    """Build the add-<type> / remove-<type> command for one category."""
    label = SHORTCUT_NAMES[category]
    verb = "Add" if adding else "Remove"
    shortcut = typer.Typer(help=f"{verb} a {label}.")

    @shortcut.callback(invoke_without_command=True)
    def run(name: Annotated[str, typer.Argument(help=f"Name of the {label}")]) -> None:
        if adding:
            handle_add_module(category, name)
        else:
            handle_remove_module(category, name)

    return shortcut
