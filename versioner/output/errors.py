"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from versioner.core.errors import ErrorCode
from versioner.manifest import ManifestReadError
from versioner.output.console import Style
from versioner.services.errors import (
    MissingPackageNameError,
    MissingServiceError,
    MissingTokenError,
    MissingVersionError,
    RemoteReadError,
    RemoteUpsertError,
    VersioningError,
)

if TYPE_CHECKING:
    from versioner.output.console import ConsoleProtocol

__all__ = ["print_versioning_error", "versioning_error_exit_code"]


def _status(status: int) -> str:
    return f"HTTP {status}" if status else "network error"


def print_versioning_error(error: VersioningError, console: ConsoleProtocol) -> None:
    """Print versioning error to console with appropriate formatting."""
    match error:
        case ManifestReadError(path=path, reason=reason):
            console.error(f"manifest unreadable: {path} ({reason})")
        case MissingVersionError(root=root):
            console.error("Version data does not contain version")
            console.print(
                f"hint: pass --version or set 'version' in {root}/package.json", Style.DIM
            )
        case MissingServiceError(root=root):
            console.error("Version data does not contain service name")
            console.print(f"hint: pass --service or set 'name' in {root}/package.json", Style.DIM)
        case MissingTokenError(hint=hint):
            console.error("Missing authentication token")
            console.print(f"hint: {hint}", Style.DIM)
        case MissingPackageNameError(hint=hint):
            console.error("Missing package name")
            console.print(f"hint: {hint}", Style.DIM)
        case RemoteUpsertError(step=step, url=url, status=status, message=message):
            console.error(f"{step} upsert failed: POST {url} ({_status(status)}: {message})")
        case RemoteReadError(url=url, status=status, message=message):
            console.error(f"read failed: GET {url} ({_status(status)}: {message})")


def versioning_error_exit_code(error: VersioningError) -> int:
    """Get exit code for a versioning error."""
    match error:
        case ManifestReadError():
            return int(ErrorCode.USER_ERROR)
        case MissingVersionError() | MissingServiceError():
            return int(ErrorCode.USER_ERROR)
        case MissingTokenError() | MissingPackageNameError():
            return int(ErrorCode.USER_ERROR)
        case RemoteUpsertError() | RemoteReadError():
            return int(ErrorCode.NETWORK_ERROR)
    return int(ErrorCode.USER_ERROR)
