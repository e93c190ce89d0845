import pytest

from gasless_bridge.config import Settings
from gasless_bridge.core.errors import UnsupportedChain


def test_relay_api_url_alias(monkeypatch):
    """Relay base URL should load from the legacy alias when present."""

    monkeypatch.delenv("RELAY_API_URL", raising=False)
    monkeypatch.setenv("RELAY_BASE_URL", "https://relay.staging.test")

    settings = Settings()

    assert settings.relay_api_url == "https://relay.staging.test"


def test_dry_run_and_keys_from_env(monkeypatch):
    monkeypatch.setenv("DRY_RUN", "true")
    monkeypatch.setenv("RELAY_API_KEY", "key")
    monkeypatch.setenv("USER_PRIVATE_KEY", "")

    settings = Settings()

    assert settings.dry_run is True
    assert settings.relay_api_key == "key"
    assert settings.user_private_key == ""


def test_rpc_url_precedence(monkeypatch):
    monkeypatch.setenv("RPC_URLS", '{"42161": "https://arb.custom.test"}')
    monkeypatch.setenv("ALCHEMY_API_KEY", "alchemy")

    settings = Settings()

    assert settings.rpc_url_for(42161) == "https://arb.custom.test"
    assert settings.rpc_url_for(8453) == "https://base-mainnet.g.alchemy.com/v2/alchemy"


def test_public_rpc_fallback(monkeypatch):
    monkeypatch.delenv("RPC_URLS", raising=False)
    monkeypatch.setenv("ALCHEMY_API_KEY", "")

    settings = Settings()

    assert settings.rpc_url_for(42161) == "https://arb1.arbitrum.io/rpc"
    with pytest.raises(UnsupportedChain):
        settings.rpc_url_for(999999)
