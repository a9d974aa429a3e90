import dataclasses

import pytest

from transmission_client.config import DEFAULT_ADDRESS, ClientConfig, Config


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()
        assert config.address == DEFAULT_ADDRESS == "http://localhost:9091/transmission/rpc"
        assert not config.has_credentials
        assert config.skip_check_ssl is False
        assert config.timeout is None

    def test_empty_address_uses_default(self):
        assert ClientConfig(address="").address == DEFAULT_ADDRESS

    def test_immutable(self):
        config = ClientConfig(username="admin", password="secret")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.password = "other"

    def test_credentials_need_both_fields(self):
        assert ClientConfig(username="admin", password="secret").has_credentials
        assert not ClientConfig(username="admin").has_credentials
        assert not ClientConfig(password="secret").has_credentials

    def test_from_env(self, monkeypatch):
        monkeypatch.setattr(Config, "TRANSMISSION_ADDRESS", "https://nas:9091/transmission/rpc")
        monkeypatch.setattr(Config, "TRANSMISSION_USERNAME", "admin")
        monkeypatch.setattr(Config, "TRANSMISSION_PASSWORD", "secret")
        monkeypatch.setattr(Config, "TRANSMISSION_SKIP_CHECK_SSL", True)
        monkeypatch.setattr(Config, "TRANSMISSION_TIMEOUT", 10.0)

        config = ClientConfig.from_env()

        assert config == ClientConfig(
            address="https://nas:9091/transmission/rpc",
            username="admin",
            password="secret",
            skip_check_ssl=True,
            timeout=10.0,
        )
