"""CLI entry point for agentkit."""

from typing import Annotated, Optional

import typer

from agentkit import __version__
from agentkit.cli import init, install, list_presets
from agentkit.cli.common import console
from agentkit.cli.modules import SHORTCUT_NAMES, add_app, make_shortcut_app, remove_app

app = typer.Typer(
    name="agentkit",
    help="Modular assembler for .agent kits.",
    no_args_is_help=True,
    add_completion=False,
)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"agentkit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Assemble a .agent folder from a registry of agents, skills, workflows and rules."""


app.add_typer(init.app, name="init")
app.add_typer(install.app, name="install")
app.add_typer(list_presets.app, name="list")
app.add_typer(add_app, name="add")
app.add_typer(remove_app, name="remove")

for _category, _label in SHORTCUT_NAMES.items():
    app.add_typer(make_shortcut_app(_category, adding=True), name=f"add-{_label}")
    app.add_typer(make_shortcut_app(_category, adding=False), name=f"remove-{_label}")


if __name__ == "__main__":
    app()
