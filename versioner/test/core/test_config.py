"""Tests for versioner.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from versioner.core.config import (
    DEFAULT_CONFIG_URL,
    DEFAULT_PACKAGE_NAME,
    DEFAULT_RELEASE_PREFIX,
    VersionerConfig,
    load_config,
)
from versioner.core.result import Err, Ok


class TestVersionerConfig:
    def test_defaults(self) -> None:
        config = VersionerConfig()
        assert config.base_url == DEFAULT_CONFIG_URL
        assert config.default_package_name == "unloq-release"
        assert config.release_prefix == "release"
        assert config.timeout == 30.0

    def test_frozen(self) -> None:
        config = VersionerConfig()
        with pytest.raises(AttributeError):
            config.base_url = "x"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "base_url",
        [
            "https://cfg.example.com/package/configuration/",
            "https://cfg.example.com/package/configuration",
        ],
    )
    def test_url_for_joins_with_single_slash(self, base_url: str) -> None:
        config = VersionerConfig(base_url=base_url)
        assert config.url_for("svc") == "https://cfg.example.com/package/configuration/svc"

    def test_default_url_for(self) -> None:
        assert (
            VersionerConfig().url_for("unloq-release-1")
            == "https://api.sconfig.io/package/configuration/unloq-release-1"
        )


class TestFromEnv:
    def test_empty_env_gives_defaults(self) -> None:
        assert VersionerConfig.from_env({}) == VersionerConfig()

    def test_reads_variables(self) -> None:
        config = VersionerConfig.from_env(
            {
                "VERSIONER_CONFIG_URL": "http://localhost:9999/cfg",
                "VERSIONER_PACKAGE_NAME": "acme-release",
                "VERSIONER_RELEASE_PREFIX": "rel-",
                "VERSIONER_TIMEOUT": "5",
            }
        )
        assert config.base_url == "http://localhost:9999/cfg"
        assert config.default_package_name == "acme-release"
        assert config.release_prefix == "rel-"
        assert config.timeout == 5.0

    @pytest.mark.parametrize("raw", ["abc", "0", "-3", "  "])
    def test_bad_timeout_falls_back(self, raw: str) -> None:
        assert VersionerConfig.from_env({"VERSIONER_TIMEOUT": raw}).timeout == 30.0

    def test_uses_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONER_CONFIG_URL", "http://env.example/cfg/")
        assert VersionerConfig.from_env().base_url == "http://env.example/cfg/"


class TestLoadConfig:
    def test_without_file_uses_env(self) -> None:
        result = load_config(None, env={"VERSIONER_PACKAGE_NAME": "from-env"})
        assert isinstance(result, Ok)
        assert result.value.default_package_name == "from-env"

    def test_file_overrides_env(self, tmp_path: Path) -> None:
        path = tmp_path / "versioner.toml"
        path.write_text(
            '[versioner]\nbase_url = "http://file.example/"\ntimeout = 2\n',
            encoding="utf-8",
        )

        result = load_config(path, env={"VERSIONER_CONFIG_URL": "http://env.example/"})

        assert isinstance(result, Ok)
        assert result.value.base_url == "http://file.example/"
        assert result.value.timeout == 2.0
        assert result.value.default_package_name == DEFAULT_PACKAGE_NAME
        assert result.value.release_prefix == DEFAULT_RELEASE_PREFIX

    def test_file_without_table_keeps_env(self, tmp_path: Path) -> None:
        path = tmp_path / "versioner.toml"
        path.write_text("[other]\nx = 1\n", encoding="utf-8")

        result = load_config(path, env={"VERSIONER_RELEASE_PREFIX": "ship"})

        assert isinstance(result, Ok)
        assert result.value.release_prefix == "ship"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml", env={})
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[versioner\n", encoding="utf-8")

        result = load_config(path, env={})

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path
