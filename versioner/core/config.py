"""Typed configuration for the remote configuration store.

Values come from, in order of precedence:
- an optional TOML file (``[versioner]`` table)
- ``VERSIONER_*`` environment variables
- the defaults below
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "VersionerConfig",
    "ConfigError",
    "load_config",
    "DEFAULT_CONFIG_URL",
    "DEFAULT_PACKAGE_NAME",
    "DEFAULT_RELEASE_PREFIX",
    "DEFAULT_TIMEOUT_SECONDS",
]

DEFAULT_CONFIG_URL = "https://api.sconfig.io/package/configuration/"
DEFAULT_PACKAGE_NAME = "unloq-release"
DEFAULT_RELEASE_PREFIX = "release"
DEFAULT_TIMEOUT_SECONDS = 30.0

ENV_CONFIG_URL = "VERSIONER_CONFIG_URL"
ENV_PACKAGE_NAME = "VERSIONER_PACKAGE_NAME"
ENV_RELEASE_PREFIX = "VERSIONER_RELEASE_PREFIX"
ENV_TIMEOUT = "VERSIONER_TIMEOUT"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class VersionerConfig:
    """Where and how release versions are recorded."""

    base_url: str = DEFAULT_CONFIG_URL
    default_package_name: str = DEFAULT_PACKAGE_NAME
    release_prefix: str = DEFAULT_RELEASE_PREFIX
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def url_for(self, key: str) -> str:
        """Address of the document stored under ``key``."""
        return f"{self.base_url.rstrip('/')}/{key}"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> VersionerConfig:
        """Build config from ``VERSIONER_*`` variables, falling back to defaults."""
        source = os.environ if env is None else env
        timeout = DEFAULT_TIMEOUT_SECONDS
        raw_timeout = (source.get(ENV_TIMEOUT) or "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                timeout = DEFAULT_TIMEOUT_SECONDS
            if timeout <= 0:
                timeout = DEFAULT_TIMEOUT_SECONDS

        return cls(
            base_url=(source.get(ENV_CONFIG_URL) or "").strip() or DEFAULT_CONFIG_URL,
            default_package_name=(source.get(ENV_PACKAGE_NAME) or "").strip()
            or DEFAULT_PACKAGE_NAME,
            release_prefix=(source.get(ENV_RELEASE_PREFIX) or "").strip()
            or DEFAULT_RELEASE_PREFIX,
            timeout=timeout,
        )

    def merged(self, data: Mapping[str, object]) -> VersionerConfig:
        """Overlay the ``[versioner]`` table of a parsed TOML document."""
        table: StrDict = get_table(data, "versioner") or {}
        return replace(
            self,
            base_url=get_str(table, "base_url") or self.base_url,
            default_package_name=get_str(table, "package_name") or self.default_package_name,
            release_prefix=get_str(table, "release_prefix") or self.release_prefix,
            timeout=get_float(table, "timeout") or self.timeout,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(
    path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Result[VersionerConfig, ConfigError]:
    """Load configuration.

    Args:
        path: Optional TOML file; when None only the environment is used
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Ok(VersionerConfig) on success, Err(ConfigError) on failure
    """
    config = VersionerConfig.from_env(env)
    if path is None:
        return Ok(config)

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(config.merged(result.value))
