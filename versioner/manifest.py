"""Local project manifest (``package.json``) loading.

File access goes through ``FileReader`` so the versioning logic can be
tested without touching the filesystem.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from versioner.core.result import Err, Ok, Result
from versioner.core.structured import as_str_dict, get_str

__all__ = [
    "MANIFEST_FILENAME",
    "FileReader",
    "RealFileReader",
    "MockFileReader",
    "Manifest",
    "ManifestReadError",
    "load_manifest",
    "manifest_path",
]

MANIFEST_FILENAME = "package.json"


@dataclass(frozen=True, slots=True)
class ManifestReadError:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class Manifest:
    """The manifest fields used as defaults: project name and version."""

    name: str | None = None
    version: str | None = None


@runtime_checkable
class FileReader(Protocol):
    def read_text(self, path: Path) -> str:
        """Return the file's text. Raises OSError if it cannot be read."""
        ...


class RealFileReader:
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


class MockFileReader:
    """In-memory files keyed by path; unknown paths raise FileNotFoundError."""

    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = dict(files or {})
        self.reads: list[Path] = []

    def add(self, path: Path, content: str) -> None:
        self.files[path] = content

    def read_text(self, path: Path) -> str:
        self.reads.append(path)
        if path not in self.files:
            raise FileNotFoundError(f"No such file: {path}")
        return self.files[path]


def manifest_path(root: Path) -> Path:
    return root / MANIFEST_FILENAME


def load_manifest(root: Path, reader: FileReader) -> Result[Manifest, ManifestReadError]:
    """Read ``{root}/package.json`` and pick out ``name`` and ``version``.

    Returns:
        Ok(Manifest), or Err(ManifestReadError) when the file is missing,
        unreadable, not valid JSON, or not a JSON object.
    """
    path = manifest_path(root)
    try:
        content = reader.read_text(path)
    except FileNotFoundError:
        return Err(ManifestReadError(path, "file not found"))
    except PermissionError:
        return Err(ManifestReadError(path, "permission denied"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestReadError(path, str(e)))

    try:
        data_obj: object = json.loads(content)
    except json.JSONDecodeError as e:
        return Err(ManifestReadError(path, f"invalid JSON: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ManifestReadError(path, "manifest root must be a JSON object"))

    return Ok(Manifest(name=get_str(data, "name"), version=get_str(data, "version")))
