"""Versioning inputs and their resolution.

``VersionInput`` is what the caller supplied (every field optional).
``VersionRequest`` is the fully resolved form the remote writes need.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from versioner.core.result import Err, Ok, Result
from versioner.core.structured import clean_str, get_path, get_raw_str, get_str
from versioner.manifest import Manifest
from versioner.services.errors import (
    MissingPackageNameError,
    MissingServiceError,
    MissingTokenError,
    MissingVersionError,
)

__all__ = [
    "VersionInput",
    "VersionRequest",
    "ReadRequest",
    "major_version_of",
    "skip_reason",
    "resolve_request",
    "resolve_read_request",
]


@dataclass(frozen=True, slots=True)
class VersionInput:
    root: Path | None = None
    branch: str | None = None
    commit: str | None = None
    token: str | None = None
    package_name: str | None = None
    service: str | None = None
    version: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> VersionInput:
        """Build from a flat mapping such as the one ``parse_argv`` returns.

        Accepts ``packageName`` as well as ``package_name``.
        """
        return cls(
            root=get_path(data, "root"),
            branch=get_raw_str(data, "branch"),
            commit=get_str(data, "commit"),
            token=get_str(data, "token"),
            package_name=get_str(data, "packageName") or get_str(data, "package_name"),
            service=get_str(data, "service"),
            version=get_str(data, "version"),
        )


def major_version_of(version: str) -> str:
    """First dot-separated segment, taken literally (``"2.3.1"`` -> ``"2"``)."""
    return version.split(".")[0]


@dataclass(frozen=True, slots=True)
class VersionRequest:
    root: Path
    branch: str
    token: str
    service: str
    version: str
    package_name: str
    commit: str | None = None

    @property
    def major_version(self) -> str:
        return major_version_of(self.version)

    @property
    def package_key(self) -> str:
        """Key of the latest-release document, e.g. ``unloq-release-2``."""
        return f"{self.package_name}-{self.major_version}"

    def latest_body(self) -> dict[str, object]:
        """``{service: {version, commit?, branch?}}``."""
        entry: dict[str, str] = {"version": self.version}
        if self.commit:
            entry["commit"] = self.commit
        entry["branch"] = self.branch
        return {self.service: entry}

    def history_body(self) -> dict[str, object]:
        """``{major: {version: commit}}``; without a commit the inner map is empty."""
        versions: dict[str, str] = {}
        if self.commit:
            versions[self.version] = self.commit
        return {self.major_version: versions}


@dataclass(frozen=True, slots=True)
class ReadRequest:
    token: str
    package_name: str


def skip_reason(data: VersionInput, *, release_prefix: str) -> str | None:
    """Why the remote writes should be skipped, or None to proceed."""
    if clean_str(data.branch) is None or clean_str(data.token) is None:
        return "Skipping remote versioning"
    if data.branch is None or not data.branch.startswith(release_prefix):
        return "Skip non-release branch"
    return None


def resolve_request(
    data: VersionInput,
    manifest: Manifest,
    *,
    root: Path,
    default_package_name: str,
) -> Result[
    VersionRequest,
    MissingVersionError | MissingServiceError | MissingTokenError,
]:
    """Fill unset fields from the manifest and defaults, then validate.

    Explicit input always wins over the manifest.
    """
    version = clean_str(data.version) or manifest.version
    service = clean_str(data.service) or manifest.name
    if not version:
        return Err(MissingVersionError(root=root))
    if not service:
        return Err(MissingServiceError(root=root))

    token = clean_str(data.token)
    branch = data.branch
    if token is None or branch is None or clean_str(branch) is None:
        return Err(MissingTokenError())

    return Ok(
        VersionRequest(
            root=root,
            branch=branch,
            token=token,
            service=service,
            version=version,
            package_name=clean_str(data.package_name) or default_package_name,
            commit=clean_str(data.commit),
        )
    )


def resolve_read_request(
    data: VersionInput,
) -> Result[ReadRequest, MissingTokenError | MissingPackageNameError]:
    token = clean_str(data.token)
    if token is None:
        return Err(MissingTokenError())
    package_name = clean_str(data.package_name)
    if package_name is None:
        return Err(MissingPackageNameError())
    return Ok(ReadRequest(token=token, package_name=package_name))
