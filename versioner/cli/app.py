from __future__ import annotations

import typer

from versioner.cli.commands.read import read
from versioner.cli.commands.stamp import stamp


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(stamp)
app.command()(read)


def main() -> None:
    app()
