from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from versioner.manifest import ManifestReadError

UpsertStep = Literal["latest", "history"]


@dataclass(frozen=True, slots=True)
class MissingVersionError:
    root: Path


@dataclass(frozen=True, slots=True)
class MissingServiceError:
    root: Path


@dataclass(frozen=True, slots=True)
class MissingTokenError:
    hint: str = "Pass --token=<config store key>"


@dataclass(frozen=True, slots=True)
class MissingPackageNameError:
    hint: str = "Pass --package-name=<configuration key>"


@dataclass(frozen=True, slots=True)
class RemoteUpsertError:
    step: UpsertStep
    url: str
    status: int
    message: str


@dataclass(frozen=True, slots=True)
class RemoteReadError:
    url: str
    status: int
    message: str


VersioningError = (
    ManifestReadError
    | MissingVersionError
    | MissingServiceError
    | MissingTokenError
    | MissingPackageNameError
    | RemoteUpsertError
    | RemoteReadError
)
