from __future__ import annotations

import json
from pathlib import Path

import typer

from versioner.cli.context import CLIContext, build_context
from versioner.core.result import Err
from versioner.output.console import Style
from versioner.output.errors import print_versioning_error, versioning_error_exit_code
from versioner.services.request import VersionInput, VersionRequest


def stamp(
    root: Path | None = typer.Option(
        None, "--root", help="Directory holding package.json (default: current directory)"
    ),
    branch: str | None = typer.Option(None, "--branch", help="Branch name (CI_COMMIT_REF_NAME)"),
    commit: str | None = typer.Option(None, "--commit", help="Commit ref (CI_COMMIT_SHA)"),
    token: str | None = typer.Option(None, "--token", help="Config store account key"),
    package_name: str | None = typer.Option(
        None, "--package-name", help="Configuration key prefix (default: unloq-release)"
    ),
    service: str | None = typer.Option(
        None, "--service", help="Service name (default: package.json name)"
    ),
    version: str | None = typer.Option(
        None, "--version", help="Semver version to apply (default: package.json version)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve and print, write nothing"),
    config: Path | None = typer.Option(None, "--config", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    """Tag a release build's version and commit in the remote config store."""
    ctx = build_context(config_path=config, verbose=verbose)
    data = VersionInput(
        root=root,
        branch=branch,
        commit=commit,
        token=token,
        package_name=package_name,
        service=service,
        version=version,
    )

    if dry_run:
        _dry_run(ctx, data)
        return

    result = ctx.service().stamp(data)
    if isinstance(result, Err):
        print_versioning_error(result.error, ctx.console)
        raise typer.Exit(code=versioning_error_exit_code(result.error))

    if not result.value:
        ctx.console.print("skipped: not a release build", Style.DIM)


def _dry_run(ctx: CLIContext, data: VersionInput) -> None:
    result = ctx.service().resolve(data)
    if isinstance(result, Err):
        print_versioning_error(result.error, ctx.console)
        raise typer.Exit(code=versioning_error_exit_code(result.error))

    request = result.value
    if request is None:
        ctx.console.print("skipped: not a release build", Style.DIM)
        return
    _print_plan(ctx, request)


def _print_plan(ctx: CLIContext, request: VersionRequest) -> None:
    console = ctx.console
    console.print(f"service: {request.service}", Style.DIM)
    console.print(f"version: {request.version}", Style.DIM)
    for key, body in (
        (request.package_key, request.latest_body()),
        (request.service, request.history_body()),
    ):
        console.print(f"POST {ctx.config.url_for(key)} {json.dumps(body)}")
