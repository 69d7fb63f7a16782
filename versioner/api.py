"""Programmatic entry points for build scripts.

``stamp`` and ``read`` wrap ``VersioningService`` with real dependencies
and turn its results into return values or exceptions:

    from versioner.api import stamp

    stamp({"branch": "release/2.3", "token": token, "commit": sha})

Passing ``None`` parses ``--key=value`` flags from the process arguments.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from versioner.core.config import VersionerConfig
from versioner.core.errors import ErrorCode
from versioner.core.result import Err
from versioner.http import HttpClient, RealHttpClient
from versioner.manifest import FileReader, ManifestReadError, RealFileReader
from versioner.output.console import ConsoleProtocol, RichConsole
from versioner.output.errors import print_versioning_error
from versioner.services.errors import VersioningError
from versioner.services.request import VersionInput
from versioner.services.versioning import VersioningService

__all__ = ["VersioningFailed", "stamp", "read"]


class VersioningFailed(Exception):
    """Raised by ``stamp``/``read`` when the service returns an error."""

    def __init__(self, error: VersioningError) -> None:
        super().__init__(str(error))
        self.error = error


def _as_input(data: VersionInput | Mapping[str, object] | None) -> VersionInput | None:
    if data is None or isinstance(data, VersionInput):
        return data
    return VersionInput.from_mapping(data)


def _service(
    *,
    config: VersionerConfig | None,
    http: HttpClient | None,
    files: FileReader | None,
    console: ConsoleProtocol,
    argv: Sequence[str] | None,
) -> VersioningService:
    cfg = config or VersionerConfig.from_env()
    return VersioningService(
        config=cfg,
        http=http or RealHttpClient(timeout=cfg.timeout),
        files=files or RealFileReader(),
        console=console,
        argv=argv,
    )


def stamp(
    data: VersionInput | Mapping[str, object] | None = None,
    *,
    config: VersionerConfig | None = None,
    http: HttpClient | None = None,
    files: FileReader | None = None,
    console: ConsoleProtocol | None = None,
    argv: Sequence[str] | None = None,
) -> bool:
    """Stamp the build; False when skipped, True once both writes succeed.

    Raises:
        SystemExit: with status 1 when the manifest cannot be read
        VersioningFailed: when service/version are unresolved or a write fails
    """
    console = console or RichConsole()
    service = _service(config=config, http=http, files=files, console=console, argv=argv)
    result = service.stamp(_as_input(data))
    if isinstance(result, Err):
        print_versioning_error(result.error, console)
        if isinstance(result.error, ManifestReadError):
            raise SystemExit(int(ErrorCode.USER_ERROR))
        raise VersioningFailed(result.error)
    return result.value


def read(
    data: VersionInput | Mapping[str, object] | None = None,
    *,
    config: VersionerConfig | None = None,
    http: HttpClient | None = None,
    console: ConsoleProtocol | None = None,
    argv: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Return the remote configuration stored under ``packageName``.

    Raises:
        VersioningFailed: on a missing token/package name or a failed request
    """
    console = console or RichConsole()
    service = _service(config=config, http=http, files=None, console=console, argv=argv)
    result = service.read(_as_input(data))
    if isinstance(result, Err):
        print_versioning_error(result.error, console)
        raise VersioningFailed(result.error)
    return result.value
