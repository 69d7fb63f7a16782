"""Tests for error presentation and exit codes."""

from __future__ import annotations

from pathlib import Path

import pytest

from versioner.core.errors import ErrorCode
from versioner.manifest import ManifestReadError
from versioner.output.console import MockConsole, Style
from versioner.output.errors import print_versioning_error, versioning_error_exit_code
from versioner.services.errors import (
    MissingPackageNameError,
    MissingServiceError,
    MissingTokenError,
    MissingVersionError,
    RemoteReadError,
    RemoteUpsertError,
    VersioningError,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ManifestReadError(Path("/r/package.json"), "file not found"), ErrorCode.USER_ERROR),
        (MissingVersionError(Path("/r")), ErrorCode.USER_ERROR),
        (MissingServiceError(Path("/r")), ErrorCode.USER_ERROR),
        (MissingTokenError(), ErrorCode.USER_ERROR),
        (MissingPackageNameError(), ErrorCode.USER_ERROR),
        (RemoteUpsertError("latest", "https://cfg/x", 500, "boom"), ErrorCode.NETWORK_ERROR),
        (RemoteReadError("https://cfg/x", 0, "refused"), ErrorCode.NETWORK_ERROR),
    ],
)
def test_exit_codes(error: VersioningError, code: ErrorCode) -> None:
    assert versioning_error_exit_code(error) == int(code)


def test_manifest_error_exits_with_one() -> None:
    error = ManifestReadError(Path("/r/package.json"), "file not found")
    assert versioning_error_exit_code(error) == 1


def test_upsert_error_message() -> None:
    console = MockConsole()

    print_versioning_error(RemoteUpsertError("history", "https://cfg/svc", 0, "refused"), console)

    assert console.messages == [
        "error: history upsert failed: POST https://cfg/svc (network error: refused)"
    ]


def test_missing_version_has_hint() -> None:
    console = MockConsole()

    print_versioning_error(MissingVersionError(Path("/r")), console)

    assert console.has_error()
    assert console.count(Style.DIM) == 1
    assert "--version" in console.text
