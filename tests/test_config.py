"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from sxt_sdk.config import ClientConfig, expand_env_vars, load_config


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()

        assert config.base_url == "https://api.spaceandtime.app"
        assert config.api_version == "v1"
        assert config.access_token == ""
        assert config.retries == 0

    def test_access_token_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("accessToken", "env-token")

        assert ClientConfig().access_token == "env-token"

    def test_prefixed_token_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("accessToken", "legacy")
        monkeypatch.setenv("SXT_ACCESS_TOKEN", "prefixed")

        assert ClientConfig().access_token == "prefixed"

    def test_prefixed_settings_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SXT_BASE_URL", "https://gateway.test")
        monkeypatch.setenv("SXT_TIMEOUT", "5")

        config = ClientConfig()

        assert config.base_url == "https://gateway.test"
        assert config.timeout == 5.0

    def test_explicit_values_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("accessToken", "env-token")

        assert ClientConfig(access_token="explicit").access_token == "explicit"

    def test_token_not_in_repr(self) -> None:
        assert "secret" not in repr(ClientConfig(access_token="secret"))

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ClientConfig(retries=-1)


class TestLoadConfig:
    def test_loads_yaml_with_substitution(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MY_SXT_TOKEN", "yaml-token")
        path = tmp_path / "sxt.yaml"
        path.write_text(
            "base_url: https://gateway.test\n"
            "access_token: ${MY_SXT_TOKEN}\n"
            "origin_app: indexer\n"
        )

        config = load_config(path)

        assert config.base_url == "https://gateway.test"
        assert config.access_token == "yaml-token"
        assert config.origin_app == "indexer"

    def test_config_path_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("")
        monkeypatch.setenv("SXT_CONFIG_PATH", str(path))

        config = load_config()

        assert config.base_url == "https://api.spaceandtime.app"
        assert config.config_path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_unset_variable(self) -> None:
        with pytest.raises(ValueError, match="UNSET_SXT_VAR"):
            expand_env_vars({"access_token": "${UNSET_SXT_VAR}"})

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- base_url\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


class TestExpandEnvVars:
    def test_expands_inside_strings_and_nested_values(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SXT_TEST_HOST", "gateway.test")

        assert expand_env_vars(
            {"base_url": "https://${SXT_TEST_HOST}/api", "tags": ["${SXT_TEST_HOST}", 3]}
        ) == {"base_url": "https://gateway.test/api", "tags": ["gateway.test", 3]}
