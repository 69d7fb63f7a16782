from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from versioner.core.config import VersionerConfig, load_config
from versioner.core.errors import ErrorCode
from versioner.core.result import Err
from versioner.http import HttpClient, RealHttpClient
from versioner.manifest import FileReader, RealFileReader
from versioner.output.console import ConsoleProtocol, RichConsole
from versioner.services.versioning import VersioningService


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: VersionerConfig
    console: ConsoleProtocol
    http: HttpClient
    files: FileReader

    def service(self) -> VersioningService:
        return VersioningService(
            config=self.config,
            http=self.http,
            files=self.files,
            console=self.console,
        )


def build_context(*, config_path: Path | None = None, verbose: bool = False) -> CLIContext:
    config_result = load_config(config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config = config_result.value
    return CLIContext(
        config=config,
        console=RichConsole(verbose=verbose),
        http=RealHttpClient(timeout=config.timeout),
        files=RealFileReader(),
    )
