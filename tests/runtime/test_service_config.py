"""
Service configuration tests.
"""

import pytest
from pydantic import ValidationError
from stellar_sdk import Asset

from helpers import mk_keypair

from stellar_wallet.config import (
    DEFAULT_ASSET_CODE,
    DEFAULT_ASSET_ISSUER,
    PUBLIC_HORIZON_URL,
    PUBLIC_PASSPHRASE,
    TESTNET_HORIZON_URL,
    TESTNET_PASSPHRASE,
    NetworkContext,
    ServiceConfig,
)

@pytest.fixture
def secret():
    return mk_keypair(70).secret


class TestNetworkContext:
    """Test network selection."""

    def test_testnet(self):
        network = NetworkContext.for_name("testnet")
        assert network.passphrase == TESTNET_PASSPHRASE
        assert network.horizon_url == TESTNET_HORIZON_URL

    @pytest.mark.parametrize("name", [None, "", "public", "mainnet", "anything"])
    def test_anything_else_is_public(self, name):
        network = NetworkContext.for_name(name)
        assert network.passphrase == PUBLIC_PASSPHRASE
        assert network.horizon_url == PUBLIC_HORIZON_URL

    def test_horizon_override(self):
        network = NetworkContext.for_name("TESTNET", "http://localhost:8000/")
        assert network.horizon_url == "http://localhost:8000"
        assert network.passphrase == TESTNET_PASSPHRASE


class TestServiceConfig:
    """Test defaults, validation and environment loading."""

    def test_defaults(self, secret):
        config = ServiceConfig(funding_secret=secret)

        assert config.network == NetworkContext.testnet()
        assert config.asset == Asset(DEFAULT_ASSET_CODE, DEFAULT_ASSET_ISSUER)
        assert config.starting_balance == "1.5"
        assert config.funding_amount == "100"
        assert config.base_fee == 100
        assert config.timeout == 300

    def test_secret_hidden(self, secret):
        config = ServiceConfig(funding_secret=secret)

        assert secret not in repr(config)
        assert secret not in str(config)
        assert secret not in config.model_dump_json()
        assert config.funding_secret.get_secret_value() == secret

    def test_immutable(self, secret):
        config = ServiceConfig(funding_secret=secret)
        with pytest.raises(ValidationError):
            config.base_fee = 500

    @pytest.mark.parametrize("overrides", [
        {"funding_secret": "SNOTASECRET"},
        {"funding_secret": mk_keypair(71).address},
        {"starting_balance": "0"},
        {"funding_amount": "abc"},
        {"base_fee": 50},
        {"timeout": 0},
        {"asset_code": ""},
        {"asset_code": "US-D"},
        {"asset_code": "TOOLONGASSETCODE"},
        {"asset_issuer": "GBADISSUER"},
    ])
    def test_invalid_values(self, secret, overrides):
        values = {"funding_secret": secret}
        values.update(overrides)
        with pytest.raises(ValidationError):
            ServiceConfig(**values)

    def test_from_env(self, secret):
        issuer = mk_keypair(72).address
        config = ServiceConfig.from_env({
            "STELLAR_NETWORK": "testnet",
            "MASTER_SECRET_KEY": secret,
            "ASSET_CODE": "EURC",
            "ASSET_ISSUER": issuer,
            "HORIZON_URL": "http://localhost:8000",
        })

        assert config.network.passphrase == TESTNET_PASSPHRASE
        assert config.network.horizon_url == "http://localhost:8000"
        assert config.asset == Asset("EURC", issuer)
        assert config.funding_secret.get_secret_value() == secret

    def test_from_env_defaults_to_public_and_usdc(self, secret):
        config = ServiceConfig.from_env({"MASTER_SECRET_KEY": secret})

        assert config.network == NetworkContext.public()
        assert config.asset.code == "USDC"
        assert config.asset.issuer == DEFAULT_ASSET_ISSUER

    def test_from_env_overrides(self, secret):
        config = ServiceConfig.from_env({"MASTER_SECRET_KEY": secret}, funding_amount="25")
        assert config.funding_amount == "25"

    def test_from_env_requires_secret(self):
        with pytest.raises(ValidationError):
            ServiceConfig.from_env({})

    def test_from_env_reads_process_environment(self, secret, monkeypatch):
        monkeypatch.setenv("STELLAR_NETWORK", "testnet")
        monkeypatch.setenv("MASTER_SECRET_KEY", secret)
        monkeypatch.delenv("ASSET_CODE", raising=False)
        monkeypatch.delenv("ASSET_ISSUER", raising=False)
        monkeypatch.delenv("HORIZON_URL", raising=False)

        config = ServiceConfig.from_env()
        assert config.network == NetworkContext.testnet()
