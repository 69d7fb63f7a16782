from __future__ import annotations

import json
from pathlib import Path

import typer

from versioner.cli.context import build_context
from versioner.core.result import Err
from versioner.output.errors import print_versioning_error, versioning_error_exit_code
from versioner.services.request import VersionInput


def read(
    token: str | None = typer.Option(None, "--token", help="Config store account key"),
    package_name: str | None = typer.Option(
        None, "--package-name", help="Configuration key to read"
    ),
    config: Path | None = typer.Option(None, "--config", help="TOML config file"),
) -> None:
    """Print the remote configuration stored under a package name."""
    ctx = build_context(config_path=config)

    result = ctx.service().read(VersionInput(token=token, package_name=package_name))
    if isinstance(result, Err):
        print_versioning_error(result.error, ctx.console)
        raise typer.Exit(code=versioning_error_exit_code(result.error))

    typer.echo(json.dumps(result.value, indent=2, sort_keys=True))
