"""
Configuration and client selection tests.
"""

import pytest

from lattice.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, LiveLatticeClient
from lattice.config import LatticeConfig, build_client
from lattice.mock_client import MockLatticeClient


class TestFromEnv:
    def test_defaults(self):
        config = LatticeConfig.from_env({})

        assert config.api_token is None
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.log_level == "INFO"
        assert config.use_mock
        assert config.mode == "mock"

    def test_reads_lattice_variables(self):
        config = LatticeConfig.from_env({
            "LATTICE_API_TOKEN": "secret",
            "LATTICE_API_URL": "https://example.test",
            "LATTICE_TIMEOUT": "5.5",
            "LATTICE_LOG_LEVEL": "debug",
        })

        assert config.api_token == "secret"
        assert config.base_url == "https://example.test"
        assert config.timeout == 5.5
        assert config.log_level == "DEBUG"
        assert config.mode == "live"

    @pytest.mark.parametrize("token", ["", "   "])
    def test_blank_token_means_mock(self, token):
        assert LatticeConfig.from_env({"LATTICE_API_TOKEN": token}).use_mock

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_bad_timeout(self, raw):
        with pytest.raises(ValueError, match="LATTICE_TIMEOUT"):
            LatticeConfig.from_env({"LATTICE_TIMEOUT": raw})

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("LATTICE_API_TOKEN", "from-env")
        assert LatticeConfig.from_env().api_token == "from-env"


class TestOverrides:
    def test_cli_values_win(self):
        base = LatticeConfig(api_token="env-token", base_url="https://env.test")

        config = base.with_overrides(api_key="cli-token", base_url="https://cli.test", log_level="warning")

        assert config.api_token == "cli-token"
        assert config.base_url == "https://cli.test"
        assert config.log_level == "WARNING"

    def test_none_leaves_fields_alone(self):
        base = LatticeConfig(api_token="env-token")
        assert base.with_overrides() == base

    def test_empty_api_key_forces_mock(self):
        assert LatticeConfig(api_token="env-token").with_overrides(api_key="").use_mock


class TestBuildClient:
    def test_no_token_builds_mock(self):
        assert isinstance(build_client(LatticeConfig()), MockLatticeClient)

    def test_token_builds_live(self):
        client = build_client(LatticeConfig(api_token="t", base_url="https://example.test/", timeout=3))

        assert isinstance(client, LiveLatticeClient)
        assert client.base_url == "https://example.test"
